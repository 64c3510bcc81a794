"""Form state manager - composes field registry, state store and element builder."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from PyQt6.QtCore import QObject, pyqtSignal

from pyqt_formstate.core.debounce_scheduler import DebounceScheduler
from pyqt_formstate.protocols.form_config import FormStateConfig, get_form_config
from pyqt_formstate.validation.pipeline import ValidatorPipeline
from pyqt_formstate.validation.validators import ValidatorRule, create_validator_table

from .element_builder import ElementBuilder, FieldElement
from .field_definition import FieldDefinitionRegistry
from .field_state_store import FieldState, FieldStateStore

logger = logging.getLogger(__name__)


class FormStateManager(QObject):
    """
    Validation state engine for one form.

    Owned by whatever drives rendering: it never draws anything, it hands out
    FieldElements and answers "is the form valid" / "give me the data".

    Examples:
        form = FormStateManager([
            {"name": "name", "component": LineEdit, "validators": ["required"]},
            {"name": "age", "component": LineEdit, "validators": ["required", "numeric"],
             "error_prop_name": "error", "debounce_ms": 300},
        ])
        form.form_changed.connect(lambda _name: rerender(form.build_elements()))
        data = form.get_clean_form_data()  # None until every field passes
    """

    form_changed = pyqtSignal(str)  # field name

    def __init__(
        self,
        fields: Sequence[Mapping[str, Any]],
        validators: Optional[Mapping[str, Any]] = None,
        config: Optional[FormStateConfig] = None,
        parent: Optional[QObject] = None,
    ):
        """
        Args:
            fields: Ordered declarative field specs (see field_definition)
            validators: Extra named rules for this form only, merged over the defaults
            config: Overrides the global FormStateConfig for this form
            parent: Optional Qt parent
        """
        super().__init__(parent)
        self._config = config or get_form_config()
        table: Dict[str, ValidatorRule] = create_validator_table(validators)

        self.registry = FieldDefinitionRegistry(fields, validators=table, config=self._config)
        self.scheduler = DebounceScheduler()
        self.store = FieldStateStore(
            self.registry, ValidatorPipeline(), self.scheduler, config=self._config, parent=self
        )
        self.builder = ElementBuilder(self.store)
        self.store.state_changed.connect(self.form_changed)
        logger.debug(f"Created form with fields {self.registry.names}")

    @property
    def field_names(self) -> List[str]:
        return self.registry.names

    # ========== FIELD ACCESS ==========

    def set_value(self, name: str, value: Any) -> None:
        self.store.set_value(name, value)

    def get_state(self, name: str) -> FieldState:
        return self.store.get_state(name)

    def validate_now(self, name: str) -> Optional[str]:
        return self.store.validate_now(name)

    def validate_all_now(self) -> Dict[str, Optional[str]]:
        return self.store.validate_all_now()

    def get_errors(self) -> Dict[str, Optional[str]]:
        return self.store.get_errors()

    # ========== AGGREGATION ==========

    def is_valid(self) -> bool:
        """True iff every field has been validated at least once and has no error."""
        return all(
            state.validated and state.error is None
            for state in (self.store.get_state(name) for name in self.registry.names)
        )

    def get_form_data(self) -> Dict[str, Any]:
        """Current values by field name, regardless of validity."""
        return self.store.get_values()

    def get_clean_form_data(self) -> Optional[Dict[str, Any]]:
        """
        Validate every field now and return the data if the form is valid.

        Returns None otherwise; by then every error is already in the store
        and visible to the next build_elements().
        """
        self.validate_all_now()
        if not self.is_valid():
            invalid = {name: error for name, error in self.get_errors().items() if error}
            logger.debug(f"Form invalid: {invalid}")
            return None
        return self.get_form_data()

    # ========== RENDERING ==========

    def build_element(self, name: str) -> FieldElement:
        return self.builder.build(name)

    def build_elements(self) -> Dict[str, FieldElement]:
        return self.builder.build_all()

    # ========== LIFECYCLE ==========

    def reset(self) -> None:
        self.store.reset()

    def teardown(self) -> None:
        """Cancel pending validations; the form rejects mutations afterwards."""
        self.store.dispose()
