"""
Named validation rules and validator references.

A rule is a predicate ``(value) -> bool`` paired with the message shown when
it returns False. Rules are looked up by name in a validator table; each form
receives its own table (see create_validator_table) so custom rules never leak
between forms.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Union

logger = logging.getLogger(__name__)

Predicate = Callable[[Any], bool]

_NUMERIC_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")
_EMAIL_RE = re.compile(r"^[A-Za-z0-9._%+\-]+@[A-Za-z0-9\-]+(\.[A-Za-z0-9\-]+)*\.[A-Za-z]{2,}$")


@dataclass(frozen=True)
class ValidatorRule:
    """A resolved rule: predicate returning False means invalid."""
    name: str
    predicate: Predicate
    message: str

    def check(self, value: Any) -> Optional[str]:
        """Return the rule's message if value fails, else None.

        A predicate that raises counts as a failure.
        """
        try:
            passed = self.predicate(value)
        except Exception:
            logger.exception(f"Validator '{self.name}' raised on {repr(value)[:50]}")
            return self.message
        return None if passed else self.message


@dataclass(frozen=True)
class ValidatorRef:
    """Unresolved reference as declared on a field.

    Exactly one of ``name`` or ``predicate`` is set. ``message`` overrides the
    named rule's message; for predicates it falls back to the configured default.
    """
    name: Optional[str] = None
    predicate: Optional[Predicate] = None
    message: Optional[str] = None


ValidatorSpec = Union[str, Predicate, tuple, ValidatorRef]


# Default rule table: name -> ValidatorRule
DEFAULT_VALIDATORS: Dict[str, ValidatorRule] = {}


def register_validator(name: str, message: str):
    """Decorator registering a predicate in the default validator table."""
    def decorator(fn: Predicate) -> Predicate:
        if name in DEFAULT_VALIDATORS:
            logger.warning(f"Validator '{name}' already registered. Overwriting with {fn.__name__}.")
        DEFAULT_VALIDATORS[name] = ValidatorRule(name, fn, message)
        return fn
    return decorator


def _is_empty(value: Any) -> bool:
    return value is None or str(value).strip() == ""


@register_validator("required", "This field is required.")
def is_present(value: Any) -> bool:
    return not _is_empty(value)


@register_validator("numeric", "Please enter a number.")
def is_numeric(value: Any) -> bool:
    if _is_empty(value):
        return True
    return _NUMERIC_RE.match(str(value).strip()) is not None


@register_validator("email", "Please enter a valid email address.")
def is_email(value: Any) -> bool:
    if _is_empty(value):
        return True
    return _EMAIL_RE.match(str(value).strip()) is not None


def create_validator_table(
    extra: Optional[Mapping[str, Union[ValidatorRule, tuple]]] = None
) -> Dict[str, ValidatorRule]:
    """
    Build an independent validator table for one form.

    Args:
        extra: Additional rules by name, each a ValidatorRule or a
               ``(predicate, message)`` pair. Same-named defaults are replaced.

    Returns:
        A fresh dict; mutating it never affects DEFAULT_VALIDATORS.
    """
    table = dict(DEFAULT_VALIDATORS)
    for name, rule in (extra or {}).items():
        if not isinstance(rule, ValidatorRule):
            predicate, message = rule
            rule = ValidatorRule(name, predicate, message)
        table[name] = rule
    return table


def to_validator_ref(spec: ValidatorSpec) -> ValidatorRef:
    """
    Normalize one declared validator into a ValidatorRef.

    Accepts a rule name, a predicate, a ``(name_or_predicate, message)`` pair
    or a ValidatorRef. Raises TypeError/ValueError for anything else; the
    registry turns those into ConfigurationError with field context.
    """
    if isinstance(spec, ValidatorRef):
        if (spec.name is None) == (spec.predicate is None):
            raise ValueError("ValidatorRef needs exactly one of 'name' or 'predicate'")
        return spec
    if isinstance(spec, str):
        return ValidatorRef(name=spec)
    if isinstance(spec, tuple):
        if len(spec) != 2 or not isinstance(spec[1], str):
            raise ValueError(f"Validator pair must be (rule, message), got {spec!r}")
        target, message = spec
        if isinstance(target, str):
            return ValidatorRef(name=target, message=message)
        if callable(target):
            return ValidatorRef(predicate=target, message=message)
        raise TypeError(f"Validator pair target must be a name or callable, got {type(target).__name__}")
    if callable(spec):
        return ValidatorRef(predicate=spec)
    raise TypeError(f"Unsupported validator reference of type {type(spec).__name__}: {spec!r}")


def resolve_validator(
    ref: ValidatorRef,
    table: Mapping[str, ValidatorRule],
    default_message: str,
) -> ValidatorRule:
    """Resolve a ValidatorRef against a table. Raises KeyError for unknown names."""
    if ref.predicate is not None:
        name = getattr(ref.predicate, "__name__", "custom")
        return ValidatorRule(name, ref.predicate, ref.message or default_message)

    if ref.name not in table:
        raise KeyError(
            f"Unknown validator '{ref.name}'. Available validators: {sorted(table)}"
        )
    rule = table[ref.name]
    if ref.message is not None:
        rule = ValidatorRule(rule.name, rule.predicate, ref.message)
    return rule
