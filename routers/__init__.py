"""Routers module for the PDF quiz server."""

from quiz.router import router as quiz_router

from .auth import router as auth_router

__all__ = ["auth_router", "quiz_router"]
