"""Validator pipeline: runs a field's resolved rules against a candidate value."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional

if TYPE_CHECKING:
    from pyqt_formstate.forms.field_definition import FieldDescriptor


class ValidatorPipeline:
    """
    Stateless, side-effect free rule runner.

    Rules run in declared order and the first failure wins; later rules are
    not evaluated once one has failed.

    Examples:
        pipeline = ValidatorPipeline()
        error = pipeline.validate(descriptor, "")  # "This field is required."
    """

    def validate(self, descriptor: 'FieldDescriptor', value: Any) -> Optional[str]:
        """Return the first failing rule's message, or None if every rule passes."""
        for rule in descriptor.validators:
            error = rule.check(value)
            if error is not None:
                return error
        return None

    def collect_errors(self, descriptor: 'FieldDescriptor', value: Any) -> List[str]:
        """Return every failing message in declared order (diagnostics only)."""
        return [error for error in (rule.check(value) for rule in descriptor.validators)
                if error is not None]
