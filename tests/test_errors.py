import pytest

from classy import errors


def test_format_error_renders_templates():
    assert errors.format_error("MustBe", "definition", "mapping") == "'definition' must be a mapping"
    assert errors.format_error("ExistentItem", "Class", "Car") == "Class 'Car' already exists"
    assert errors.format_error("NonexistentItem", "Mixin", 42) == "Mixin '42' doesn't exist"


def test_format_error_rejects_unknown_and_non_string_names():
    with pytest.raises(errors.NonexistentItemError, match="Error 'Nope' doesn't exist"):
        errors.format_error("Nope")
    with pytest.raises(errors.MustBeError, match="'error_name' must be a string"):
        errors.format_error(7)


@pytest.mark.parametrize(
    "name, args, exc",
    [
        ("MustBe", ("x", "string"), errors.MustBeError),
        ("MustNotBeEmpty", ("x",), errors.MustNotBeEmptyError),
        ("ExistentItem", ("Class", "Car"), errors.ExistentItemError),
        ("NonexistentItem", ("Class", "Car"), errors.NonexistentItemError),
        ("RestrictedField", ("new",), errors.RestrictedFieldError),
        ("MixinApplied", ("Boost", "Car"), errors.ExistentItemError),
        ("MixinCollision", ("Class 'Car'", "boost"), errors.MixinCollisionError),
        ("MissingApply", ("Boost",), errors.MixinDefinitionError),
    ],
)
def test_report_raises_mapped_exception(name, args, exc):
    with pytest.raises(exc) as info:
        errors.report(name, *args)
    assert isinstance(info.value, errors.ClassyError)


def test_builtin_bases_let_callers_catch_broadly():
    with pytest.raises(TypeError):
        errors.report("MustBe", "x", "string")
    with pytest.raises(ValueError):
        errors.report("MustNotBeEmpty", "x")
    with pytest.raises(LookupError):
        errors.report("NonexistentItem", "Class", "Car")


def test_state_only_raises_on_falsy_condition():
    errors.state(True, "MustNotBeEmpty", "x")
    errors.state([1], "MustNotBeEmpty", "x")
    with pytest.raises(errors.MustNotBeEmptyError, match="'x' must not be empty"):
        errors.state([], "MustNotBeEmpty", "x")
