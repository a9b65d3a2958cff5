from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations.

    Carries optional context (employee, period, offending field) so callers
    can log and surface the failure to an admin.
    """

    def __init__(
        self,
        message: str,
        *,
        employee_id: Optional[str] = None,
        period: Optional[str] = None,
        field: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.employee_id = employee_id
        self.period = period
        self.field = field

    def context(self) -> dict:
        ctx = {"employee_id": self.employee_id, "period": self.period, "field": self.field}
        return {k: v for k, v in ctx.items() if v is not None}

    def __str__(self) -> str:
        ctx = self.context()
        if not ctx:
            return self.message
        details = ", ".join(f"{k}={v}" for k, v in ctx.items())
        return f"{self.message} ({details})"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidPeriod(ValidationError):
    """Period string is unparseable or the period end precedes its start."""


class MissingSettings(ValidationError):
    """Deduction configuration is absent or incomplete."""


class CalculationLocked(DomainError):
    """Attempted recompute of a finalized/paid calculation."""


class InvalidTransition(DomainError):
    """Status change violates the draft -> finalized -> paid ordering."""


class NotFoundError(DomainError):
    """Referenced entity does not exist."""


class AuthorizationError(DomainError):
    """Raised when a caller lacks permission for an action."""
