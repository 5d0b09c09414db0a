from __future__ import annotations


class NotFoundError(Exception):
    """Raise to map to HTTP 404."""


class ValidationError(Exception):
    """Raise to map to HTTP 400 (invalid input)."""


class DomainRuleViolation(Exception):
    """Raise to map to HTTP 409 (domain rule violation)."""


class ConflictError(DomainRuleViolation):
    """Locker already occupied, duplicate id, or a delete blocked by dependents."""


class InvalidTransitionError(DomainRuleViolation):
    """Rent lifecycle guard violated."""
