"""
Form state management.

Field registry, per-field state store, element builder and the
FormStateManager that composes them.
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .form_state_manager import FormStateManager
    from .field_definition import (
        ErrorPropShape,
        FieldDefinitionRegistry,
        FieldDescriptor,
        default_value_extractor,
    )
    from .field_state_store import FieldState, FieldStateStore
    from .element_builder import ElementBuilder, FieldElement

_EXPORTS = {
    "FormStateManager": ("pyqt_formstate.forms.form_state_manager", "FormStateManager"),
    "ErrorPropShape": ("pyqt_formstate.forms.field_definition", "ErrorPropShape"),
    "FieldDefinitionRegistry": ("pyqt_formstate.forms.field_definition", "FieldDefinitionRegistry"),
    "FieldDescriptor": ("pyqt_formstate.forms.field_definition", "FieldDescriptor"),
    "default_value_extractor": ("pyqt_formstate.forms.field_definition", "default_value_extractor"),
    "FieldState": ("pyqt_formstate.forms.field_state_store", "FieldState"),
    "FieldStateStore": ("pyqt_formstate.forms.field_state_store", "FieldStateStore"),
    "ElementBuilder": ("pyqt_formstate.forms.element_builder", "ElementBuilder"),
    "FieldElement": ("pyqt_formstate.forms.element_builder", "FieldElement"),
}


def __getattr__(name: str):
    if name in _EXPORTS:
        module_name, attr = _EXPORTS[name]
        module = importlib.import_module(module_name)
        value = getattr(module, attr)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = list(_EXPORTS.keys())
