"""
Concrete quality checks.
"""

from datetime import date
from typing import Any

from .base_check import BaseCheck


class RequiredFieldCheck(BaseCheck):
    """Fires when the field is missing or a blank string."""

    def evaluate(self, value: Any, payload: dict[str, Any]) -> None:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise self.fail()

    @property
    def check_type(self) -> str:
        return "required_field"


class MaxValueCheck(BaseCheck):
    """
    Fires when a present, non-zero numeric value exceeds `max`.
    """

    def __init__(self, field_name: str, penalty: int, issue: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, penalty, issue, parameters)
        if "max" not in self.parameters:
            raise ValueError("MaxValueCheck requires 'max'")
        self.max_value = self.parameters["max"]

    def evaluate(self, value: Any, payload: dict[str, Any]) -> None:
        if value and value > self.max_value:
            raise self.fail()

    @property
    def check_type(self) -> str:
        return "max_value"


class NegativeValueCheck(BaseCheck):
    """Fires when a present numeric value is below zero."""

    def evaluate(self, value: Any, payload: dict[str, Any]) -> None:
        if value is not None and value < 0:
            raise self.fail()

    @property
    def check_type(self) -> str:
        return "negative_value"


class BandCheck(BaseCheck):
    """
    Fires when a present, non-zero value falls outside [min, max].
    """

    def __init__(self, field_name: str, penalty: int, issue: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, penalty, issue, parameters)
        self.min_value = self.parameters.get("min")
        self.max_value = self.parameters.get("max")
        if self.min_value is None and self.max_value is None:
            raise ValueError("BandCheck requires at least one of: min, max")

    def evaluate(self, value: Any, payload: dict[str, Any]) -> None:
        if not value:
            return
        if self.min_value is not None and value < self.min_value:
            raise self.fail()
        if self.max_value is not None and value > self.max_value:
            raise self.fail()

    @property
    def check_type(self) -> str:
        return "band"


class YearRangeCheck(BaseCheck):
    """Fires when a present date's year is outside [min_year, max_year]."""

    def __init__(self, field_name: str, penalty: int, issue: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, penalty, issue, parameters)
        self.min_year = self.parameters["min_year"]
        self.max_year = self.parameters["max_year"]

    def evaluate(self, value: Any, payload: dict[str, Any]) -> None:
        if not isinstance(value, date):
            return
        if value.year < self.min_year or value.year > self.max_year:
            raise self.fail()

    @property
    def check_type(self) -> str:
        return "year_range"
