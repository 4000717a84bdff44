"""ServiceResult and ServiceError — the contract between runner and CLI.

INVARIANT: Service-layer methods return ServiceResult, never raise for
instruction-set failures.  A failed run still carries the positions of
the rovers that finished before the failure in ``data``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult.

    ``code`` is the RunError ``kind`` for run failures.
    """

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (``"run"`` or ``"demo"``).
        data: Operation-specific payload, present on failure too.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (telemetry span tree in verbose mode).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
