"""
Base quality-check interface.

All quality checks inherit from BaseCheck and implement evaluate().
"""

from abc import ABC, abstractmethod
from typing import Any


class QualityIssue(Exception):
    """Raised when a quality check finds a problem with a record."""

    def __init__(self, check_name: str, field_name: str, message: str):
        self.check_name = check_name
        self.field_name = field_name
        self.message = message
        super().__init__(f"[{check_name}] {field_name}: {message}")


class BaseCheck(ABC):
    """
    Abstract base class for quality checks.

    A check inspects one field of the scoring payload. When it fires, the
    scorer subtracts `penalty` and records `issue`.
    """

    def __init__(self, field_name: str, penalty: int, issue: str, parameters: dict[str, Any] | None = None):
        """
        Initialize the check.

        Args:
            field_name: Payload field inspected
            penalty: Points subtracted when the check fires
            issue: Issue text recorded when the check fires
            parameters: Check-specific parameters (e.g. min/max)
        """
        self.field_name = field_name
        self.penalty = penalty
        self.issue = issue
        self.parameters = parameters or {}

    @abstractmethod
    def evaluate(self, value: Any, payload: dict[str, Any]) -> None:
        """
        Check a value.

        Args:
            value: The field value
            payload: The entire scoring payload

        Raises:
            QualityIssue: If the check fires
        """
        pass

    @property
    @abstractmethod
    def check_type(self) -> str:
        """Return the check type identifier."""
        pass

    def fail(self) -> QualityIssue:
        return QualityIssue(self.check_type, self.field_name, self.issue)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(field={self.field_name}, penalty={self.penalty})"
