"""Request validation for CLI input."""

from typing import Optional

from shared.exceptions import InvalidInputError
from storage import parse_qualified_name


class ValidationError(InvalidInputError):
    """Raised when a request is rejected before any storage is read."""


class RequestValidator:
    @staticmethod
    def validate_name(value: Optional[str], what: str) -> None:
        if value is None or not value.strip():
            raise ValidationError(f"{what} name must not be empty")

    @staticmethod
    def validate_table_name(value: str) -> None:
        RequestValidator.validate_name(value, "table")
        try:
            parse_qualified_name(value)
        except InvalidInputError as exc:
            raise ValidationError(str(exc)) from exc

    @staticmethod
    def validate_batch_size(value: int) -> None:
        if value <= 0:
            raise ValidationError(f"batch size must be positive, got {value}")


__all__ = ["RequestValidator", "ValidationError"]
