"""
Domain exceptions for the SwipeLite application.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class SwipeLiteError(Exception):
    """Base exception for all SwipeLite errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for user-facing reports."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Storage Exceptions
class StorageError(SwipeLiteError):
    """Base exception for storage operations."""

    pass


class EntityNotFoundError(StorageError):
    """Entity not found in a collection."""

    def __init__(self, entity: str, entity_id: str):
        super().__init__(
            f"{entity} not found: {entity_id}",
            code="ENTITY_NOT_FOUND",
            details={"entity": entity, "entity_id": entity_id},
        )


# Validation Exceptions
class ValidationError(SwipeLiteError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value else None,
            },
        )


class ProtectedEntityError(SwipeLiteError):
    """Attempt to modify or delete a reserved entity."""

    def __init__(self, entity: str, entity_id: str, action: str):
        super().__init__(
            f"{entity} '{entity_id}' is built in and cannot be {action}",
            code="PROTECTED_ENTITY",
            details={"entity": entity, "entity_id": entity_id, "action": action},
        )


class LastEntityError(SwipeLiteError):
    """Attempt to delete the last remaining entity of a kind."""

    def __init__(self, entity: str):
        super().__init__(
            f"Cannot delete the last remaining {entity}",
            code="LAST_ENTITY",
            details={"entity": entity},
        )


# LLM Exceptions
class LLMError(SwipeLiteError):
    """Base exception for LLM operations."""

    pass


class LLMUnavailableError(LLMError):
    """LLM provider is not available."""

    def __init__(self, provider: str, reason: str | None = None):
        super().__init__(
            f"LLM provider unavailable: {provider}" + (f" - {reason}" if reason else ""),
            code="LLM_UNAVAILABLE",
            details={"provider": provider, "reason": reason},
        )


class LLMTimeoutError(LLMError):
    """LLM request timed out."""

    def __init__(self, timeout: int, operation: str = "generation"):
        super().__init__(
            f"LLM {operation} timed out after {timeout} seconds",
            code="LLM_TIMEOUT",
            details={"timeout": timeout, "operation": operation},
        )


class LLMResponseError(LLMError):
    """LLM returned invalid or empty response."""

    def __init__(self, reason: str, response: str | None = None):
        super().__init__(
            f"Invalid LLM response: {reason}",
            code="LLM_RESPONSE_ERROR",
            details={"reason": reason, "response_preview": (response or "")[:200]},
        )


# Parser Exceptions
class ParsingFailedError(SwipeLiteError):
    """Free-text bill could not be turned into structured data."""

    def __init__(self, reason: str, parser: str | None = None):
        super().__init__(
            f"Failed to parse bill text: {reason}",
            code="PARSING_FAILED",
            details={"reason": reason, "parser": parser},
        )


# Rendering Exceptions
class RenderError(SwipeLiteError):
    """Document rendering failed."""

    def __init__(self, target: str, reason: str):
        super().__init__(
            f"Failed to render {target}: {reason}",
            code="RENDER_FAILED",
            details={"target": target, "reason": reason},
        )


class ConfigurationError(SwipeLiteError):
    """Configuration error."""

    pass
