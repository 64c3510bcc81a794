"""
Field state store - MODEL layer for per-field value and error.

Owns one FieldState per declared field for the lifetime of the form. Values
update immediately on every edit; validation is routed through the debounce
scheduler so a burst of keystrokes ends in a single run against the final
value.
"""

from __future__ import annotations

import copy
import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set

from PyQt6.QtCore import QObject, pyqtSignal

from pyqt_formstate.core.debounce_scheduler import DebounceScheduler
from pyqt_formstate.exceptions import FormDisposedError
from pyqt_formstate.protocols.form_config import FormStateConfig, get_form_config
from pyqt_formstate.validation.pipeline import ValidatorPipeline

from .field_definition import FieldDefinitionRegistry

logger = logging.getLogger(__name__)


@dataclass
class FieldState:
    """Runtime state of one field."""
    value: Any = ""
    error: Optional[str] = None
    touched: bool = False      # edited or explicitly validated
    validated: bool = False    # at least one validation pass has completed


class FieldStateStore(QObject):
    """
    Mutable per-field state keyed by field name.

    Signals:
        state_changed(str): a field's value or error changed (field name)
        validated(dict): a full validate_all_now() pass finished ({name: error})
    """

    state_changed = pyqtSignal(str)
    validated = pyqtSignal(dict)

    def __init__(
        self,
        registry: FieldDefinitionRegistry,
        pipeline: Optional[ValidatorPipeline] = None,
        scheduler: Optional[DebounceScheduler] = None,
        config: Optional[FormStateConfig] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._registry = registry
        self._pipeline = pipeline or ValidatorPipeline()
        self._scheduler = scheduler or DebounceScheduler()
        self._config = config or get_form_config()
        self._states: Dict[str, FieldState] = {
            name: self._initial_state() for name in registry.names
        }
        self._dirty: Set[str] = set()
        self._disposed = False

    @property
    def registry(self) -> FieldDefinitionRegistry:
        return self._registry

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    # ========== READS ==========

    def get_state(self, name: str) -> FieldState:
        """Return a snapshot of the field's state."""
        return dataclasses.replace(self._state(name))

    def get_values(self) -> Dict[str, Any]:
        """All field values in declaration order."""
        return {name: state.value for name, state in self._states.items()}

    def get_errors(self) -> Dict[str, Optional[str]]:
        """All field errors in declaration order."""
        return {name: state.error for name, state in self._states.items()}

    def has_pending(self, name: str) -> bool:
        """True while a debounced validation is waiting for the field."""
        self._state(name)
        return self._scheduler.is_pending(name)

    # ========== MUTATIONS ==========

    def set_value(self, name: str, value: Any) -> None:
        """Store value now; (re)schedule validation after the field's debounce delay."""
        self._check_alive(f"set_value('{name}')")
        state = self._state(name)
        state.value = value
        state.touched = True
        descriptor = self._registry[name]
        if descriptor.debounce_ms > 0:
            # The last result describes the previous value until the timer fires
            state.validated = False
        self._mark_dirty(name)
        self.state_changed.emit(name)

        self._scheduler.schedule(name, descriptor.debounce_ms, lambda: self._run_validation(name))

    def validate_now(self, name: str) -> Optional[str]:
        """Validate the field's current value immediately, bypassing debounce."""
        self._check_alive(f"validate_now('{name}')")
        self._state(name)
        self._scheduler.cancel(name)
        return self._run_validation(name)

    def validate_all_now(self) -> Dict[str, Optional[str]]:
        """
        Validate every field immediately.

        All states are updated before any signal is emitted, so listeners never
        observe a half-validated form.
        """
        self._check_alive("validate_all_now()")
        self._scheduler.cancel_all()

        changed: List[str] = []
        for name in self._states:
            if self._apply_validation(name):
                changed.append(name)

        errors = self.get_errors()
        if self._config.debug_validation:
            logger.debug(f"validate_all_now: {errors}")
        for name in changed:
            self.state_changed.emit(name)
        self.validated.emit(errors)
        return errors

    def reset(self, name: Optional[str] = None) -> None:
        """Restore one field (or every field) to its initial state."""
        self._check_alive("reset()")
        names = [name] if name is not None else list(self._states)
        for field_name in names:
            self._state(field_name)
            self._scheduler.cancel(field_name)
            self._states[field_name] = self._initial_state()
            self._mark_dirty(field_name)
        logger.debug(f"Reset fields: {names}")
        for field_name in names:
            self.state_changed.emit(field_name)

    def dispose(self) -> None:
        """Cancel every pending validation and reject further mutations."""
        if self._disposed:
            return
        self._scheduler.cancel_all()
        self._disposed = True
        logger.debug(f"Disposed store for fields {list(self._states)}")

    # ========== DIRTY TRACKING ==========

    @property
    def is_dirty(self) -> bool:
        return bool(self._dirty)

    def take_dirty(self) -> List[str]:
        """Return dirty field names in declaration order and clear the dirty set."""
        dirty = [name for name in self._states if name in self._dirty]
        self._dirty.clear()
        return dirty

    # ========== INTERNALS ==========

    def _state(self, name: str) -> FieldState:
        if name not in self._states:
            # Registry raises UnknownFieldError with the available names
            self._registry[name]
        return self._states[name]

    def _initial_state(self) -> FieldState:
        return FieldState(value=copy.copy(self._config.initial_value))

    def _mark_dirty(self, name: str) -> None:
        self._dirty.add(name)

    def _check_alive(self, operation: str) -> None:
        if self._disposed:
            raise FormDisposedError(f"{operation} called on a disposed form")

    def _run_validation(self, name: str) -> Optional[str]:
        if self._apply_validation(name):
            self.state_changed.emit(name)
        return self._states[name].error

    def _apply_validation(self, name: str) -> bool:
        """Validate the value held at call time. Returns True if the error changed."""
        state = self._states[name]
        error = self._pipeline.validate(self._registry[name], state.value)
        if self._config.debug_validation:
            logger.debug(f"Validated '{name}' = {repr(state.value)[:50]} -> {error!r}")

        previous = state.error
        state.error = error
        state.touched = True
        state.validated = True
        self._mark_dirty(name)
        return error != previous
