"""
Validation rules and the validator pipeline.
"""

from .validators import (
    DEFAULT_VALIDATORS,
    ValidatorRef,
    ValidatorRule,
    create_validator_table,
    register_validator,
    resolve_validator,
    to_validator_ref,
)
from .pipeline import ValidatorPipeline

__all__ = [
    "DEFAULT_VALIDATORS",
    "ValidatorRef",
    "ValidatorRule",
    "ValidatorPipeline",
    "create_validator_table",
    "register_validator",
    "resolve_validator",
    "to_validator_ref",
]
