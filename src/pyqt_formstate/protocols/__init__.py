"""
Configuration hooks for applications embedding pyqt-formstate.
"""

from .form_config import FormStateConfig, get_form_config, set_form_config

__all__ = [
    "FormStateConfig",
    "get_form_config",
    "set_form_config",
]
