"""
pyqt-formstate: per-field validation state for PyQt6 forms.

Tracks each field's value, error and validation status independently of
how its widget spells its props, and answers whole-form questions
("is it valid?", "give me the data or None").

Architecture:
- Core: DebounceTimer / DebounceScheduler (QTimer based, one live timer per field)
- Validation: named rule tables and the short-circuit ValidatorPipeline
- Forms: FieldDefinitionRegistry, FieldStateStore, ElementBuilder, FormStateManager

Nothing here renders. FormStateManager produces FieldElements (component +
props) for the application's own view layer to mount.
"""

import importlib

__version__ = "0.1.0"

_EXPORTS = {
    "FormStateManager": ("pyqt_formstate.forms", "FormStateManager"),
    "FieldElement": ("pyqt_formstate.forms", "FieldElement"),
    "FieldState": ("pyqt_formstate.forms", "FieldState"),
    "FormStateConfig": ("pyqt_formstate.protocols", "FormStateConfig"),
    "get_form_config": ("pyqt_formstate.protocols", "get_form_config"),
    "set_form_config": ("pyqt_formstate.protocols", "set_form_config"),
    "ValidatorRef": ("pyqt_formstate.validation", "ValidatorRef"),
    "ValidatorRule": ("pyqt_formstate.validation", "ValidatorRule"),
    "register_validator": ("pyqt_formstate.validation", "register_validator"),
    "ConfigurationError": ("pyqt_formstate.exceptions", "ConfigurationError"),
    "UnknownFieldError": ("pyqt_formstate.exceptions", "UnknownFieldError"),
    "FormDisposedError": ("pyqt_formstate.exceptions", "FormDisposedError"),
}


def __getattr__(name: str):
    if name in _EXPORTS:
        module_name, attr = _EXPORTS[name]
        module = importlib.import_module(module_name)
        value = getattr(module, attr)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["__version__", *_EXPORTS.keys()]
