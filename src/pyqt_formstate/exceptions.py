"""Form state exceptions."""

from typing import Iterable, Optional


class FormStateError(Exception):
    """Base class for pyqt-formstate errors."""


class ConfigurationError(FormStateError):
    """Raised when a declarative field specification cannot be normalized.

    Fatal to form construction. The message always names the offending
    field by index, and by name when one was given.
    """

    def __init__(self, message: str, index: Optional[int] = None, field_name: Optional[str] = None):
        self.index = index
        self.field_name = field_name
        if index is not None:
            where = f"field #{index}" if field_name is None else f"field #{index} ('{field_name}')"
            message = f"{where}: {message}"
        super().__init__(message)


class UnknownFieldError(FormStateError, KeyError):
    """Raised when a per-field operation names a field that was never declared."""

    def __init__(self, field_name: str, available: Iterable[str]):
        self.field_name = field_name
        super().__init__(
            f"No field registered with name '{field_name}'. "
            f"Available fields: {list(available)}"
        )

    def __str__(self) -> str:
        return self.args[0]


class FormDisposedError(FormStateError):
    """Raised when a torn-down form receives a mutation."""
