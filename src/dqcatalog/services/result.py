"""ServiceResult and ServiceError: the contract between services and callers.

INVARIANT: every public service method returns a ServiceResult. User
mistakes (unknown type name in ``types show``, malformed declarations)
become ``ok=False`` results; only a corrupt catalog raises.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# Error codes surfaced to the CLI and to JSON consumers.
NOT_FOUND = "NOT_FOUND"
INVALID_DECLARATIONS = "INVALID_DECLARATIONS"
CATALOG_INVALID = "CATALOG_INVALID"
CATALOG_LOAD_FAILED = "CATALOG_LOAD_FAILED"


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Uniform return type for catalog service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"derive"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues (e.g. a type fell back to ``string``).
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (catalog source, telemetry).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        code: str,
        message: str,
        **detail: Any,
    ) -> ServiceResult:
        """Shorthand for an ``ok=False`` result."""
        return cls(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=detail),
        )
