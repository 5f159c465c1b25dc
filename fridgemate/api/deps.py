"""Shared API dependencies and error mapping."""

from fastapi import HTTPException, Request

from fridgemate.services.ai_service import (
    ClaudeService,
    RateLimitError,
    ServiceUnavailableError,
)
from fridgemate.services.file_service import FileService
from fridgemate.services.image_service import ImageSynthesisService


def get_recipe_ai(request: Request) -> ClaudeService:
    """Suggestion Engine / Optimization advisor built at startup."""
    return request.app.state.recipe_ai


def get_image_service(request: Request) -> ImageSynthesisService:
    return request.app.state.image_service


def get_file_service(request: Request) -> FileService:
    return request.app.state.file_service


def external_service_error(error: Exception) -> HTTPException:
    """Translate an external collaborator failure into an HTTP error."""
    if isinstance(error, ServiceUnavailableError):
        return HTTPException(
            status_code=503,
            detail={
                "error": "service_unavailable",
                "message": str(error) or "External service unavailable",
                "can_retry": True,
            },
        )
    if isinstance(error, RateLimitError):
        return HTTPException(
            status_code=429,
            detail={
                "error": "rate_limit",
                "message": "Too many requests. Please wait a minute and try again.",
                "can_retry": True,
            },
        )
    return HTTPException(
        status_code=502,
        detail={
            "error": "bad_upstream_response",
            "message": str(error),
            "can_retry": True,
        },
    )
