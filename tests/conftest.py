# =============================================================================
# CONFTEST - Shared fixtures for every test
# =============================================================================
# Centralizes mocks, fixtures and common configuration
# =============================================================================

import json
import os
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

TEST_JWT_SECRET = "test-secret-key-with-at-least-32-bytes!"


# =============================================================================
# ENVIRONMENT FIXTURES
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment():
    """Configures a fast, isolated environment for each test."""
    from config import reload_config

    env_vars = {
        "ENVIRONMENT": "test",
        "LOG_LEVEL": "ERROR",
        "JWT_SECRET": TEST_JWT_SECRET,
        "BCRYPT_ROUNDS": "4",
        "AGENTFS_ID": "pdf-quiz-test",
        "MAX_PDF_CHARS": "8000",
    }
    with patch.dict(os.environ, env_vars):
        reload_config()
        yield
    reload_config()


@pytest.fixture
def clean_env():
    """Clears environment variables for isolated tests."""
    from config import reload_config

    with patch.dict(os.environ, {}, clear=True):
        yield
    reload_config()


# =============================================================================
# AGENTFS FIXTURES
# =============================================================================


@pytest.fixture
def mock_agentfs():
    """AgentFS mock with an empty KV store."""
    mock = MagicMock()

    mock.kv = AsyncMock()
    mock.kv.get = AsyncMock(return_value=None)
    mock.kv.set = AsyncMock()
    mock.kv.delete = AsyncMock()
    mock.kv.list = AsyncMock(return_value=[])

    mock.close = AsyncMock()

    return mock


@pytest.fixture
def mock_agentfs_with_data():
    """AgentFS mock backed by an in-memory dict."""
    mock = MagicMock()
    _storage = {}

    async def mock_get(key):
        return _storage.get(key)

    async def mock_set(key, value):
        _storage[key] = value

    async def mock_delete(key):
        _storage.pop(key, None)

    async def mock_list(prefix=""):
        return [{"key": k} for k in _storage if k.startswith(prefix)]

    mock.kv = AsyncMock()
    mock.kv.get = mock_get
    mock.kv.set = mock_set
    mock.kv.delete = mock_delete
    mock.kv.list = mock_list
    mock._storage = _storage

    mock.close = AsyncMock()

    return mock


# =============================================================================
# ORACLE FIXTURES
# =============================================================================


class FakeOracle:
    """Completion oracle that replays scripted responses in order.

    A scripted response that is an exception is raised instead of returned.
    """

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []

    def queue(self, *responses):
        self.responses.extend(responses)

    async def complete(self, system_prompt: str, prompt: str) -> str:
        from core.exceptions import UpstreamError

        self.calls.append({"system_prompt": system_prompt, "prompt": prompt})
        if not self.responses:
            raise UpstreamError(message="No scripted oracle response")

        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def fake_generation_oracle():
    return FakeOracle()


@pytest.fixture
def fake_grading_oracle():
    return FakeOracle()


@pytest.fixture
def make_oracle():
    """Factory for scripted oracles."""

    def _make(*responses):
        return FakeOracle(responses)

    return _make


# =============================================================================
# QUIZ FIXTURES
# =============================================================================


@pytest.fixture
def oracle_quiz_data():
    """Quiz as the generation oracle returns it (one question of each type)."""
    return {
        "title": "European Capitals",
        "questions": [
            {
                "questionText": "What is the capital of France?",
                "questionType": "multipleChoice",
                "options": ["Paris", "Lyon", "Marseille", "Nice"],
                "correctAnswer": "Paris",
                "explanation": "Paris has been the capital since the 10th century.",
            },
            {
                "questionText": "The Eiffel Tower is located in ____.",
                "questionType": "fillInBlank",
                "correctAnswer": "Paris",
                "explanation": "It stands on the Champ de Mars.",
            },
            {
                "questionText": "Explain why Paris became the capital of France.",
                "questionType": "longAnswer",
                "correctAnswer": "Its central location and royal residence made it the political center.",
            },
        ],
    }


@pytest.fixture
def oracle_quiz_json(oracle_quiz_data):
    """Generation oracle response wrapped in a markdown fence."""
    return "```json\n" + json.dumps(oracle_quiz_data) + "\n```"


@pytest.fixture
def sample_question():
    """Multiple choice question for grading tests."""
    from quiz.models.schemas import Question

    return Question(
        id="q-1",
        question_text="What is the capital of France?",
        question_type="multipleChoice",
        options=["Paris", "Lyon", "Marseille", "Nice"],
        correct_answer="Paris",
    )


@pytest.fixture
def sample_long_question():
    from quiz.models.schemas import Question

    return Question(
        id="q-3",
        question_text="Explain why Paris became the capital of France.",
        question_type="longAnswer",
        correct_answer="Its central location made it the political center.",
    )


@pytest.fixture
def sample_quiz(sample_question, sample_long_question):
    """Stored quiz owned by user-1."""
    from datetime import datetime, timezone

    from quiz.models.schemas import Quiz

    return Quiz(
        id="quiz-1",
        title="European Capitals",
        user_id="user-1",
        created_at=datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc),
        questions=[sample_question, sample_long_question],
    )


# =============================================================================
# PDF HELPERS
# =============================================================================


def build_pdf(text: str) -> bytes:
    """Builds a minimal one-page PDF whose page shows ``text``."""
    escaped = text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")
    stream = f"BT /F1 12 Tf 72 720 Td ({escaped}) Tj ET".encode("latin-1")

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    output = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(output))
        output += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_offset = len(output)
    output += b"xref\n0 %d\n" % (len(objects) + 1)
    output += b"0000000000 65535 f \n"
    for offset in offsets:
        output += b"%010d 00000 n \n" % offset
    output += b"trailer\n<< /Size %d /Root 1 0 R >>\n" % (len(objects) + 1)
    output += b"startxref\n%d\n%%%%EOF\n" % xref_offset

    return bytes(output)


@pytest.fixture
def make_pdf():
    """Factory for in-memory PDFs."""
    return build_pdf


@pytest.fixture
def sample_pdf():
    return build_pdf("Paris is the capital of France. The Eiffel Tower is in Paris.")


# =============================================================================
# FASTAPI FIXTURES
# =============================================================================


@pytest.fixture
def app_with_mocks(mock_agentfs_with_data, fake_generation_oracle, fake_grading_oracle):
    """FastAPI app with the store and oracles replaced by test doubles."""
    import app_state
    from server import app

    async def _agentfs():
        return mock_agentfs_with_data

    async def _generation_oracle():
        return fake_generation_oracle

    async def _grading_oracle():
        return fake_grading_oracle

    app.dependency_overrides[app_state.get_agentfs] = _agentfs
    app.dependency_overrides[app_state.get_generation_oracle] = _generation_oracle
    app.dependency_overrides[app_state.get_grading_oracle] = _grading_oracle
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app_with_mocks):
    """FastAPI test client."""
    from fastapi.testclient import TestClient

    return TestClient(app_with_mocks)


@pytest.fixture
def register_user(client):
    """Registers a user through the API and returns (token, user)."""

    def _register(email="ana@example.com", password="secret123", name="Ana"):
        response = client.post(
            "/api/auth/register",
            json={"email": email, "password": password, "name": name},
        )
        assert response.status_code == 201, response.text
        data = response.json()
        return data["token"], data["user"]

    return _register


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def bearer():
    """Builds Authorization headers for a token."""
    return auth_headers


# =============================================================================
# LOGGING FIXTURES
# =============================================================================


@pytest.fixture
def capture_logs(caplog):
    """Captures logs for assertions."""
    import logging

    caplog.set_level(logging.DEBUG)
    return caplog
