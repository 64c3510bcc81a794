"""Tests for validator rules and the validator pipeline."""

import pytest


def _descriptor(validators, **extra):
    from pyqt_formstate.forms import FieldDefinitionRegistry

    spec = {"name": "field", "component": object, "validators": validators, **extra}
    return FieldDefinitionRegistry([spec])["field"]


def test_required_rejects_empty_and_whitespace():
    """Test 'required' fails on empty or whitespace-only values."""
    from pyqt_formstate.validation import ValidatorPipeline

    pipeline = ValidatorPipeline()
    descriptor = _descriptor(["required"])

    assert pipeline.validate(descriptor, "") == "This field is required."
    assert pipeline.validate(descriptor, "   ") == "This field is required."
    assert pipeline.validate(descriptor, None) == "This field is required."
    assert pipeline.validate(descriptor, "x") is None


@pytest.mark.parametrize("value,ok", [
    ("12", True), ("-3.5", True), (".5", True), ("1e3", False), ("12a", False), ("", True),
])
def test_numeric_rule(value, ok):
    """Test 'numeric' accepts numbers and leaves empty values to 'required'."""
    from pyqt_formstate.validation import ValidatorPipeline

    error = ValidatorPipeline().validate(_descriptor(["numeric"]), value)
    assert (error is None) is ok


@pytest.mark.parametrize("value,ok", [
    ("sam@example.com", True), ("a.b+c@mail.example.org", True),
    ("sam@", False), ("sam@example", False), ("not an email", False), ("", True),
])
def test_email_rule(value, ok):
    """Test 'email' pattern."""
    from pyqt_formstate.validation import ValidatorPipeline

    error = ValidatorPipeline().validate(_descriptor(["email"]), value)
    assert (error is None) is ok


def test_first_failing_rule_wins():
    """Test the pipeline short-circuits on the first failure in declared order."""
    from pyqt_formstate.validation import ValidatorPipeline

    calls = []

    def never_reached(value):
        calls.append(value)
        return False

    descriptor = _descriptor(["required", (never_reached, "unreachable")])
    pipeline = ValidatorPipeline()

    assert pipeline.validate(descriptor, "") == "This field is required."
    assert calls == []
    assert pipeline.validate(descriptor, "x") == "unreachable"


def test_collect_errors_reports_every_failure():
    """Test collect_errors keeps declared order and skips passing rules."""
    from pyqt_formstate.validation import ValidatorPipeline

    descriptor = _descriptor(["required", "numeric", (lambda v: len(v) > 3, "too short")])

    assert ValidatorPipeline().collect_errors(descriptor, "") == ["This field is required.", "too short"]


def test_empty_validator_list_passes():
    """Test a field without validators never errors."""
    from pyqt_formstate.validation import ValidatorPipeline

    assert ValidatorPipeline().validate(_descriptor([]), "") is None


def test_function_validator_uses_configured_default_message():
    """Test a bare predicate falls back to FormStateConfig.default_error_message."""
    from pyqt_formstate.protocols import FormStateConfig, set_form_config
    from pyqt_formstate.validation import ValidatorPipeline

    set_form_config(FormStateConfig(default_error_message="Nope"))
    descriptor = _descriptor([lambda value: value == "ok"])

    assert ValidatorPipeline().validate(descriptor, "ko") == "Nope"


def test_named_rule_message_override():
    """Test a (name, message) pair replaces the rule's message."""
    from pyqt_formstate.validation import ValidatorPipeline, ValidatorRef

    pipeline = ValidatorPipeline()

    assert pipeline.validate(_descriptor([("required", "Name is required")]), "") == "Name is required"
    assert pipeline.validate(_descriptor([ValidatorRef(name="numeric", message="Digits only")]), "x") == "Digits only"


def test_create_validator_table_is_isolated():
    """Test per-form tables never leak into the defaults."""
    from pyqt_formstate.validation import DEFAULT_VALIDATORS, create_validator_table

    table = create_validator_table({"even": (lambda v: int(v) % 2 == 0, "Must be even")})

    assert "even" in table
    assert "even" not in DEFAULT_VALIDATORS
    assert table["even"].check("3") == "Must be even"
    assert table["even"].check("4") is None


def test_register_validator_adds_default_rule():
    """Test the register_validator decorator."""
    from pyqt_formstate.validation import DEFAULT_VALIDATORS, register_validator

    @register_validator("uppercase_test_rule", "Must be uppercase")
    def is_upper(value):
        return str(value).isupper()

    try:
        assert DEFAULT_VALIDATORS["uppercase_test_rule"].check("abc") == "Must be uppercase"
    finally:
        del DEFAULT_VALIDATORS["uppercase_test_rule"]


def test_raising_predicate_counts_as_failure():
    """Test a predicate that raises yields its message instead of propagating."""
    from pyqt_formstate.validation import ValidatorPipeline

    descriptor = _descriptor([(lambda v: int(v) > 0, "Must be positive")])
    pipeline = ValidatorPipeline()

    assert pipeline.validate(descriptor, "abc") == "Must be positive"
    assert pipeline.validate(descriptor, "5") is None
