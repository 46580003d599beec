import pytest

from classy import (
    ClassRegistry,
    ExistentItemError,
    MustBeError,
    MustNotBeEmptyError,
    NonexistentItemError,
    RestrictedFieldError,
)


def test_create_class_registers_by_name(classes):
    cls = classes.create_class({"class_name": "Car"})

    assert classes.does_class_exist("Car") == (True, cls)
    assert classes.does_class_exist(cls) == (True, cls)
    assert classes.does_class_exist(cls.new()) == (True, cls)
    assert "Car" in classes and cls in classes
    assert list(classes) == ["Car"]
    assert len(classes) == 1


def test_does_class_exist_never_raises(classes):
    assert classes.does_class_exist("Ghost") == (False, None)
    assert classes.does_class_exist(None) == (False, None)
    assert classes.does_class_exist(12) == (False, None)
    assert classes.does_class_exist({"class_name": "Car"}) == (False, None)


def test_duplicate_name_fails_and_leaves_registry_untouched(classes):
    first = classes.create_class({"class_name": "Car", "v": 1})

    with pytest.raises(ExistentItemError, match="Class 'Car' already exists"):
        classes.create_class({"class_name": "Car", "v": 2})

    assert classes.get_class("Car") is first
    assert first.v == 1
    assert len(classes) == 1


def test_superclass_by_record_or_name(classes):
    root = classes.create_class({"class_name": "Root"})
    by_record = classes.create_class({"class_name": "A"}, root)
    by_name = classes.create_class({"class_name": "B"}, "Root")

    assert by_record.superclass is root
    assert by_name.superclass is root


def test_unknown_superclass_fails_without_registering(classes):
    with pytest.raises(NonexistentItemError, match="Superclass 'Nope' doesn't exist"):
        classes.create_class({"class_name": "Orphan"}, "Nope")
    assert "Orphan" not in classes


def test_superclass_from_other_registry_is_rejected(classes):
    other = ClassRegistry()
    foreign = other.create_class({"class_name": "Foreign"})

    with pytest.raises(NonexistentItemError, match="Superclass 'Foreign'"):
        classes.create_class({"class_name": "Local"}, foreign)


@pytest.mark.parametrize(
    "definition, exc",
    [
        ([("class_name", "X")], MustBeError),
        ({}, MustNotBeEmptyError),
        ({"init": None}, MustBeError),
        ({"class_name": ""}, MustBeError),
        ({"class_name": 5}, MustBeError),
    ],
)
def test_create_class_validates_definition(classes, definition, exc):
    with pytest.raises(exc):
        classes.create_class(definition)
    assert len(classes) == 0


def test_definition_may_not_carry_sealed_fields(classes):
    with pytest.raises(RestrictedFieldError, match="'new'"):
        classes.create_class({"class_name": "Bad", "new": lambda: None})
    assert "Bad" not in classes


def test_get_class(classes):
    cls = classes.create_class({"class_name": "Truck"})

    assert classes.get_class("Truck") is cls
    with pytest.raises(NonexistentItemError, match="Class 'Boat' doesn't exist"):
        classes.get_class("Boat")
    with pytest.raises(MustBeError):
        classes.get_class(cls)


def test_registries_are_isolated():
    a, b = ClassRegistry(), ClassRegistry()
    a.create_class({"class_name": "Shared"})
    b.create_class({"class_name": "Shared"})

    assert a.get_class("Shared") is not b.get_class("Shared")
