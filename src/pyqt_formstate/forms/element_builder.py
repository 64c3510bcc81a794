"""
Element builder - shapes field state into props for an external component.

No validation happens here. The builder reads a descriptor and the current
FieldState and produces a FieldElement: the component, its props (static props
plus value, error prop and change callback) and the raw error message.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

from .field_definition import ErrorPropShape, FieldDescriptor
from .field_state_store import FieldState, FieldStateStore

logger = logging.getLogger(__name__)

VALUE_PROP = "value"


@dataclass
class FieldElement:
    """A component ready to mount with its injected props."""
    name: str
    component: Any
    props: Dict[str, Any] = field(default_factory=dict)
    children: Tuple[Any, ...] = ()
    error_message: Optional[str] = None

    def mount(self) -> Any:
        """Instantiate the component with the injected props."""
        if self.children:
            # Declared children win over a static "children" prop
            return self.component(**{**self.props, "children": self.children})
        return self.component(**self.props)


class ElementBuilder:
    """
    Builds FieldElements from a FieldStateStore.

    Examples:
        builder = ElementBuilder(store)
        element = builder.build("email")
        element.props["on_change"]("a@b.co")  # routes to store.set_value
    """

    def __init__(self, store: FieldStateStore):
        self._store = store
        self._handlers: Dict[str, Callable[..., None]] = {}

    def build(self, name: str) -> FieldElement:
        descriptor = self._store.registry[name]
        state = self._store.get_state(name)
        return FieldElement(
            name=name,
            component=descriptor.component,
            props=self.build_props(descriptor, state),
            children=descriptor.children,
            error_message=state.error,
        )

    def build_all(self) -> Dict[str, FieldElement]:
        """Build every field in declaration order."""
        return {name: self.build(name) for name in self._store.registry.names}

    def build_props(self, descriptor: FieldDescriptor, state: FieldState) -> Dict[str, Any]:
        props = dict(descriptor.static_props)
        props[VALUE_PROP] = state.value

        if descriptor.error_prop_shape is ErrorPropShape.MESSAGE:
            props[descriptor.error_prop_name] = state.error
        elif descriptor.error_prop_shape is ErrorPropShape.FLAG:
            props[descriptor.error_prop_name] = state.error is not None

        props[descriptor.change_handler_name] = self._change_handler(descriptor)
        return props

    def _change_handler(self, descriptor: FieldDescriptor) -> Callable[..., None]:
        # One handler per field so components see a stable callback across renders
        handler = self._handlers.get(descriptor.name)
        if handler is None:
            def handler(event: Any = None, *payload: Any) -> None:
                if self._store.is_disposed:
                    # Widgets can outlive the form; their late signals are dropped
                    logger.debug(f"Ignoring change on '{descriptor.name}' after teardown")
                    return
                value = descriptor.value_extractor(event, descriptor.name, payload)
                self._store.set_value(descriptor.name, value)

            self._handlers[descriptor.name] = handler
        return handler
