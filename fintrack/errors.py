# fintrack/errors.py
"""
Error taxonomy shared by services and routers.

Services raise these; fintrack.main turns them into the JSON failure
envelope ({"success": false, "error": ...}) with the matching status code.
"""

from __future__ import annotations


class FinanceError(Exception):
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(FinanceError):
    status_code = 401
    default_message = "Unauthorized"


class NotFound(FinanceError):
    """Missing entity, or one owned by somebody else (same answer on purpose)."""

    status_code = 404
    default_message = "Not found"


class ValidationError(FinanceError):
    status_code = 400
    default_message = "Invalid input"


class ReferentialError(FinanceError):
    """An entity is still referenced and cannot be removed."""

    status_code = 400
    default_message = "Resource is still in use"


class DataAccessError(FinanceError):
    # message stays generic; details go to the server log only
    status_code = 500
    default_message = "Internal server error"


__all__ = [
    "FinanceError",
    "Unauthorized",
    "NotFound",
    "ValidationError",
    "ReferentialError",
    "DataAccessError",
]
