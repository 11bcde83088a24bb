from __future__ import annotations

from typing import Any, Dict, List, Optional

from riskplanner.risk.validation import ValidationIssue


class ApiError(Exception):
    """Error raised by routes and rendered as ``{"success": false, ...}``."""

    def __init__(
        self,
        status_code: int,
        message: str,
        errors: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.errors = errors or []

    @classmethod
    def from_issues(cls, message: str, issues: List[ValidationIssue]) -> "ApiError":
        return cls(
            status_code=400,
            message=message,
            errors=[{"field": i.field, "message": i.message, "value": i.value} for i in issues],
        )
