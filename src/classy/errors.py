from __future__ import annotations
from typing import Any, Dict, NoReturn, Type


class ClassyError(Exception):
    """Base error."""

class MustBeError(ClassyError, TypeError):
    """Raised when a parameter has the wrong runtime type."""

class MustNotBeEmptyError(ClassyError, ValueError):
    """Raised when a required mapping or collection is empty."""

class ExistentItemError(ClassyError):
    """Raised when a class or mixin name is already taken."""

class NonexistentItemError(ClassyError, LookupError):
    """Raised when a class, superclass or mixin name is not registered."""

class RestrictedFieldError(ClassyError):
    """Raised when a sealed or set-once class field would be overwritten."""

class MixinCollisionError(ClassyError):
    """Raised by apply routines when a member they install already exists."""

class MixinDefinitionError(ClassyError):
    """Raised when a registered mixin has no apply routine."""


ERRORS: Dict[str, str] = {
    "MustBe": "'{}' must be a {}",
    "MustNotBeEmpty": "'{}' must not be empty",

    "ExistentItem": "{} '{}' already exists",
    "NonexistentItem": "{} '{}' doesn't exist",

    "RestrictedField": "Not allowed to set '{}' to a new value",
    "MixinApplied": "Mixin '{}' is already a part of Class '{}'",
    "MixinCollision": "{} already has a '{}' member",
    "MissingApply": "Mixin '{}' doesn't have an 'apply' method",
}

_EXCEPTIONS: Dict[str, Type[ClassyError]] = {
    "MustBe": MustBeError,
    "MustNotBeEmpty": MustNotBeEmptyError,
    "ExistentItem": ExistentItemError,
    "NonexistentItem": NonexistentItemError,
    "MixinApplied": ExistentItemError,
    "RestrictedField": RestrictedFieldError,
    "MixinCollision": MixinCollisionError,
    "MissingApply": MixinDefinitionError,
}


def format_error(error_name: str, *args: Any) -> str:
    if not isinstance(error_name, str):
        raise MustBeError(ERRORS["MustBe"].format("error_name", "string"))
    template = ERRORS.get(error_name)
    if template is None:
        raise NonexistentItemError(ERRORS["NonexistentItem"].format("Error", error_name))
    return template.format(*(str(a) for a in args))


def report(error_name: str, *args: Any) -> NoReturn:
    """Raise the exception mapped to *error_name* with its formatted message."""
    message = format_error(error_name, *args)
    raise _EXCEPTIONS[error_name](message)


def state(condition: Any, error_name: str, *args: Any) -> None:
    """Assert *condition*; report *error_name* when it is falsy."""
    if not condition:
        report(error_name, *args)
