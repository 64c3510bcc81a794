"""
Field definition registry.

Normalizes the caller's declarative field list into immutable FieldDescriptors
keyed by name. All defaults are applied here, once; nothing downstream has to
guess at a missing option.

Field spec keys (mapping per field):
    name                 required, unique
    component            required, the renderable the element is mounted with
    validators           ordered list of rule names / predicates / (rule, message)
    change_handler_name  prop the change callback is injected under
    error_prop_name      prop the error is injected under (omitted if absent)
    error_prop_is_bool   inject bool(error) instead of the message
    value_extractor      (event, name, payload) -> value
    debounce_ms          validation delay after an edit, 0 = synchronous
    props                static props passed through to the component
    children             child descriptors passed through to the component
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from pyqt_formstate.exceptions import ConfigurationError, UnknownFieldError
from pyqt_formstate.protocols.form_config import FormStateConfig, get_form_config
from pyqt_formstate.validation.validators import (
    ValidatorRule, create_validator_table, resolve_validator, to_validator_ref,
)

logger = logging.getLogger(__name__)

ValueExtractor = Callable[[Any, str, Tuple[Any, ...]], Any]

FIELD_SPEC_KEYS = frozenset({
    "name", "component", "validators", "change_handler_name", "error_prop_name",
    "error_prop_is_bool", "value_extractor", "debounce_ms", "props", "children",
})


class ErrorPropShape(Enum):
    """How a field's error reaches its component."""
    NONE = "none"        # no error prop injected
    MESSAGE = "message"  # error string (None when valid)
    FLAG = "flag"        # True when invalid


def default_value_extractor(event: Any, name: str, payload: Tuple[Any, ...]) -> Any:
    """
    Read the new value from a change event.

    Handles DOM-style events (``event.target.value``), value-carrying event
    objects (``event.value``) and plain values as delivered by Qt signals
    such as ``textChanged(str)``.
    """
    target = getattr(event, "target", None)
    target_value = getattr(target, "value", None)
    if target_value is not None and not callable(target_value):
        return target_value
    value = getattr(event, "value", None)
    if value is not None and not callable(value):
        return value
    return event


@dataclass(frozen=True)
class FieldDescriptor:
    """Immutable, fully-defaulted description of one field."""
    name: str
    component: Any
    validators: Tuple[ValidatorRule, ...] = ()
    change_handler_name: str = "on_change"
    error_prop_name: Optional[str] = None
    error_prop_shape: ErrorPropShape = ErrorPropShape.NONE
    value_extractor: ValueExtractor = default_value_extractor
    debounce_ms: int = 0
    static_props: Mapping[str, Any] = field(default_factory=dict)
    children: Tuple[Any, ...] = ()

    @property
    def error_prop_is_bool(self) -> bool:
        return self.error_prop_shape is ErrorPropShape.FLAG


class FieldDefinitionRegistry:
    """
    Ordered name -> FieldDescriptor mapping built from a declarative field list.

    Examples:
        registry = FieldDefinitionRegistry([
            {"name": "email", "component": LineEdit, "validators": ["required", "email"]},
        ])
        registry["email"].debounce_ms  # 0
    """

    def __init__(
        self,
        fields: Sequence[Mapping[str, Any]],
        validators: Optional[Mapping[str, ValidatorRule]] = None,
        config: Optional[FormStateConfig] = None,
    ):
        self._config = config or get_form_config()
        self._validator_table = dict(validators) if validators is not None else create_validator_table()
        self._descriptors: Dict[str, FieldDescriptor] = {}

        for index, spec in enumerate(fields):
            descriptor = self._normalize(index, spec)
            self._descriptors[descriptor.name] = descriptor
            logger.debug(
                f"Registered field '{descriptor.name}': "
                f"validators={[rule.name for rule in descriptor.validators]}, "
                f"debounce_ms={descriptor.debounce_ms}, error_prop={descriptor.error_prop_shape.value}"
            )

    # ========== LOOKUP ==========

    def __getitem__(self, name: str) -> FieldDescriptor:
        if name not in self._descriptors:
            raise UnknownFieldError(name, self._descriptors)
        return self._descriptors[name]

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors

    def __iter__(self) -> Iterator[FieldDescriptor]:
        return iter(self._descriptors.values())

    def __len__(self) -> int:
        return len(self._descriptors)

    @property
    def names(self) -> List[str]:
        """Field names in declaration order."""
        return list(self._descriptors)

    @property
    def validator_table(self) -> Dict[str, ValidatorRule]:
        return dict(self._validator_table)

    # ========== NORMALIZATION ==========

    def _normalize(self, index: int, spec: Mapping[str, Any]) -> FieldDescriptor:
        if not isinstance(spec, Mapping):
            raise ConfigurationError(
                f"field spec must be a mapping, got {type(spec).__name__}", index=index
            )

        name = spec.get("name")
        if not name or not isinstance(name, str):
            raise ConfigurationError("missing required attribute 'name'", index=index)

        def fail(message: str) -> ConfigurationError:
            return ConfigurationError(message, index=index, field_name=name)

        if name in self._descriptors:
            raise fail("duplicate field name")

        unknown = set(spec) - FIELD_SPEC_KEYS
        if unknown:
            raise fail(f"unknown attribute(s) {sorted(unknown)}")

        component = spec.get("component")
        if component is None:
            raise fail("missing required attribute 'component'")

        debounce_ms = spec.get("debounce_ms", self._config.default_debounce_ms)
        if isinstance(debounce_ms, bool) or not isinstance(debounce_ms, int) or debounce_ms < 0:
            raise fail(f"'debounce_ms' must be an integer >= 0, got {debounce_ms!r}")

        error_prop_name = spec.get("error_prop_name")
        if error_prop_name is None:
            shape = ErrorPropShape.NONE
        elif spec.get("error_prop_is_bool", False):
            shape = ErrorPropShape.FLAG
        else:
            shape = ErrorPropShape.MESSAGE

        value_extractor = spec.get("value_extractor") or default_value_extractor
        if not callable(value_extractor):
            raise fail("'value_extractor' must be callable")

        return FieldDescriptor(
            name=name,
            component=component,
            validators=self._resolve_validators(spec.get("validators") or (), fail),
            change_handler_name=spec.get("change_handler_name") or self._config.default_change_handler_name,
            error_prop_name=error_prop_name,
            error_prop_shape=shape,
            value_extractor=value_extractor,
            debounce_ms=debounce_ms,
            static_props=dict(spec.get("props") or {}),
            children=tuple(spec.get("children") or ()),
        )

    def _resolve_validators(self, specs, fail) -> Tuple[ValidatorRule, ...]:
        if isinstance(specs, str) or callable(specs):
            specs = [specs]
        rules = []
        for position, validator_spec in enumerate(specs):
            try:
                ref = to_validator_ref(validator_spec)
                rules.append(resolve_validator(ref, self._validator_table, self._config.default_error_message))
            except KeyError as e:
                raise fail(f"validator #{position}: {e.args[0]}") from e
            except (TypeError, ValueError) as e:
                raise fail(f"validator #{position}: {e}") from e
        return tuple(rules)
