"""Base configuration class for form state.

Provides hooks for applications to customize field defaults and logging.
"""

from typing import Any, Optional
from dataclasses import dataclass


@dataclass
class FormStateConfig:
    """Base configuration for form state behavior.

    Applications can subclass this to provide custom configuration.

    Attributes:
        default_change_handler_name: Prop name the change callback is injected under
        default_debounce_ms: Validation delay for fields that don't declare one
        initial_value: Value every field starts with (and returns to on reset)
        default_error_message: Message for function validators declared without one
        debug_validation: Log every validation run at DEBUG level
    """

    default_change_handler_name: str = "on_change"
    default_debounce_ms: int = 0
    initial_value: Any = ""
    default_error_message: str = "Invalid value"
    debug_validation: bool = False


# Global config instance (set by application)
_form_config: Optional[FormStateConfig] = None


def set_form_config(config: Optional[FormStateConfig]) -> None:
    """Set the global form state configuration.

    Args:
        config: FormStateConfig instance, or None to restore defaults
    """
    global _form_config
    _form_config = config


def get_form_config() -> FormStateConfig:
    """Get the current form state configuration.

    Returns:
        Current FormStateConfig or default if not set
    """
    if _form_config is None:
        return FormStateConfig()
    return _form_config
