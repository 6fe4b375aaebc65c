"""Quiz API Client - Async client for the PDF quiz server.

Example:
    >>> async with QuizApiClient("http://localhost:5000") as api:
    ...     await api.login("ana@example.com", "secret")
    ...     quiz = await api.upload_pdf(pdf_bytes, "notes.pdf")
    ...     result = await api.evaluate_answer(quiz.questions[0], "Paris")
"""

from typing import Any, Optional

import httpx

from core.logger import get_logger
from quiz.engine.scoring_engine import grade_exact
from quiz.models.enums import QuestionType
from quiz.models.schemas import AnswerEvaluation, AuthResponse, GeneratedQuizResponse, Question, Quiz, UserPublic

from .cache import QuizCache
from .errors import ApiError, AuthenticationFailed, EmailAlreadyExists

logger = get_logger("api_client")


class QuizApiClient:
    """Session-aware client for the quiz REST API.

    Keeps the bearer token returned by register/login and attaches it to
    every request. Multiple-choice and fill-in-the-blank answers are graded
    locally with the same function the server uses; only long answers go
    to the server.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:5000",
        cache: Optional[QuizCache] = None,
        timeout: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.cache = cache or QuizCache()
        self.token: Optional[str] = None
        self.user: Optional[UserPublic] = None
        self._http = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "QuizApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    async def aclose(self):
        await self._http.aclose()

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    # =========================================================================
    # HTTP
    # =========================================================================

    def _headers(self) -> dict[str, str]:
        if self.token is None:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if response.is_success:
            return

        try:
            message = response.json().get("error", response.reason_phrase)
        except (ValueError, AttributeError):
            message = response.text or response.reason_phrase

        if response.status_code == 401:
            raise AuthenticationFailed(message)
        if response.status_code == 409:
            raise EmailAlreadyExists(message)
        raise ApiError(response.status_code, message)

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        response = await self._http.request(method, path, headers=self._headers(), **kwargs)
        logger.debug(f"{method} {path} -> {response.status_code}")
        self._raise_for_status(response)
        return response.json()

    def _require_user(self) -> UserPublic:
        if self.user is None or self.token is None:
            raise AuthenticationFailed("Not logged in")
        return self.user

    def _start_session(self, data: dict) -> AuthResponse:
        auth = AuthResponse.model_validate(data)
        self.token = auth.token
        self.user = auth.user
        return auth

    # =========================================================================
    # AUTH
    # =========================================================================

    async def register(self, email: str, password: str, name: str = "") -> AuthResponse:
        """Creates an account and starts a session.

        Raises:
            EmailAlreadyExists: the email is taken
            ApiError: invalid input or server failure
        """
        data = await self._request(
            "POST",
            "/api/auth/register",
            json={"email": email, "password": password, "name": name},
        )
        return self._start_session(data)

    async def login(self, email: str, password: str) -> AuthResponse:
        """Starts a session; AuthenticationFailed on bad credentials."""
        data = await self._request("POST", "/api/auth/login", json={"email": email, "password": password})
        return self._start_session(data)

    def logout(self) -> None:
        """Forgets the token and every cached quiz."""
        self.token = None
        self.user = None
        self.cache.clear()

    # =========================================================================
    # QUIZZES
    # =========================================================================

    async def upload_pdf(self, pdf_bytes: bytes, filename: str = "document.pdf") -> GeneratedQuizResponse:
        """Uploads a PDF and returns the generated quiz."""
        user = self._require_user()
        data = await self._request(
            "POST",
            "/api/quizzes/generate",
            files={"pdfFile": (filename, pdf_bytes, "application/pdf")},
            data={"userId": user.id},
        )
        self.cache.invalidate(user.id)
        return GeneratedQuizResponse.model_validate(data)

    async def evaluate_answer(self, question: Question, answer: str) -> AnswerEvaluation:
        """Grades an answer, locally when the question type allows it."""
        if QuestionType(question.question_type).auto_gradable:
            return grade_exact(question, answer)

        self._require_user()
        data = await self._request(
            "POST",
            "/api/quizzes/evaluate",
            json={"questionId": question.id, "answer": answer},
        )
        return AnswerEvaluation.model_validate(data)

    async def fetch_user_quizzes(self, force_refresh: bool = False) -> list[Quiz]:
        """Returns the user's quizzes, served from the cache while fresh."""
        user = self._require_user()

        if not force_refresh:
            cached = self.cache.get(user.id)
            if cached is not None:
                return cached

        data = await self._request("GET", f"/api/quizzes/user/{user.id}")
        quizzes = [Quiz.model_validate(item) for item in data]
        self.cache.put(user.id, quizzes)
        return quizzes

    async def fetch_quiz(self, quiz_id: str) -> Quiz:
        self._require_user()
        data = await self._request("GET", f"/api/quizzes/{quiz_id}")
        return Quiz.model_validate(data)
