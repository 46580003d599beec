from __future__ import annotations
from typing import Any, Iterable, Iterator, List, Tuple

from . import errors
from .mixins import Mixin, install_member, ensure_absent, non_empty_list


def _walk(start: Any) -> Iterator[Any]:
    # Works for class records and for plain objects carrying their own
    # ``class_name`` / ``superclass`` / ``mixins`` attributes.
    level = start
    while level is not None:
        yield level
        level = getattr(level, "superclass", None)


def _require_class_name(target: Any) -> None:
    errors.state(isinstance(getattr(target, "class_name", None), str), "MustBe", "class_name", "string")


def _has(start: Any, mixin_name: str) -> bool:
    return any(mixin_name in getattr(level, "mixins", ()) for level in _walk(start))


# ---------------- IsA ----------------

def is_a(self, class_name: str) -> bool:
    errors.state(isinstance(class_name, str), "MustBe", "class_name", "string")
    return any(level.class_name == class_name for level in _walk(self))


class IsAMixin:
    name = "IsAMixin"

    @staticmethod
    def apply(target: Any) -> None:
        ensure_absent(target, "is_a")
        _require_class_name(target)
        install_member(target, "is_a", classmethod(is_a))


# ---------------- HasMixin ----------------

def has_mixin(self, mixin_name: str) -> bool:
    return _has(self, mixin_name)


def has_any_mixins(self, mixin_names: Iterable[str]) -> Tuple[bool, List[str]]:
    """Return whether any of *mixin_names* is present, and which ones are."""
    present = [name for name in non_empty_list(mixin_names, "mixins") if _has(self, name)]
    return bool(present), present


def has_all_mixins(self, mixin_names: Iterable[str]) -> bool:
    return all(_has(self, name) for name in non_empty_list(mixin_names, "mixins"))


class HasMixin:
    name = "HasMixin"

    @staticmethod
    def apply(target: Any) -> None:
        ensure_absent(target, "has_mixin", "has_any_mixins", "has_all_mixins")
        _require_class_name(target)
        install_member(target, "has_mixin", classmethod(has_mixin))
        install_member(target, "has_any_mixins", classmethod(has_any_mixins))
        install_member(target, "has_all_mixins", classmethod(has_all_mixins))


BUILTIN_MIXINS = {
    IsAMixin.name: Mixin(name=IsAMixin.name, apply=IsAMixin.apply),
    HasMixin.name: Mixin(name=HasMixin.name, apply=HasMixin.apply),
}
