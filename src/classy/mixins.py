from __future__ import annotations
import threading
import types
from collections.abc import Collection, Mapping
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Protocol, Tuple

from . import errors
from .debug import log, log_trace
from .model import (
    Class,
    ClassNameRef,
    ClassRef,
    PlainObject,
    as_target,
    has_own,
    lineage,
    mark_mixin_applied,
    unmark_mixin,
)
from .registry import ClassRegistry


@dataclass(frozen=True)
class Mixin:
    """A named capability bundle.

    ``apply(target)`` installs members on a class record or a plain object and
    must raise :class:`~classy.errors.MixinCollisionError` rather than
    overwrite a member that is already there.
    """
    name: str
    apply: Callable[[Any], None]


class MixinSource(Protocol):
    def find(self, name: str) -> Optional[Mixin]: ...


def as_mixin(name: str, definition: Any) -> Mixin:
    """Wrap a module, class or instance exposing ``apply`` into a :class:`Mixin`."""
    if isinstance(definition, Mixin):
        errors.state(callable(definition.apply), "MissingApply", name)
        if definition.name == name:
            return definition
        return Mixin(name=name, apply=definition.apply)
    apply = getattr(definition, "apply", None)
    errors.state(callable(apply), "MissingApply", name)
    return Mixin(name=name, apply=apply)


# ---------------- Apply-routine helpers ----------------

def ensure_absent(target: Any, *names: str) -> None:
    """Reject installing *names* on *target* if any already exists.

    On a class record only the exact level counts; inherited members do not
    block a subclass from receiving the same mixin.
    """
    for name in names:
        if isinstance(target, Class):
            exists = has_own(target, name)
            label = f"Class '{target.class_name}'"
        else:
            exists = hasattr(target, name)
            label = type(target).__name__
        errors.state(not exists, "MixinCollision", label, name)


def install_member(target: Any, name: str, value: Any) -> None:
    ensure_absent(target, name)
    if not isinstance(target, Class):
        if isinstance(value, (classmethod, staticmethod)):
            value = value.__func__
        if isinstance(value, types.FunctionType):
            value = types.MethodType(value, target)
    setattr(target, name, value)


def class_has_mixin(cls: Class, mixin_name: str) -> bool:
    return any(mixin_name in level.mixins for level in lineage(cls))


# ---------------- Registry ----------------

class MixinRegistry:
    def __init__(self, classes: ClassRegistry, *, builtin_source: bool = True) -> None:
        self._classes = classes
        self._mixins: Dict[str, Mixin] = {}
        self._sources: List[MixinSource] = []
        self._lock = threading.RLock()
        if builtin_source:
            from .sources import BuiltinMixinSource
            self.register_source(BuiltinMixinSource())

    @property
    def classes(self) -> ClassRegistry:
        return self._classes

    @property
    def sources(self) -> Tuple[MixinSource, ...]:
        return tuple(self._sources)

    def register_source(self, source: MixinSource) -> None:
        """Append *source* to the ordered list consulted on cache misses."""
        errors.state(callable(getattr(source, "find", None)), "MustBe", "source", "mixin source")
        with self._lock:
            self._sources.append(source)

    # -- lookup --

    def resolve(self, mixin_name: str) -> Tuple[bool, Optional[Mixin]]:
        """Return ``(found, mixin)``, consulting sources once per name."""
        with self._lock:
            mixin = self._mixins.get(mixin_name)
            if mixin is not None:
                return True, mixin

            for source in self._sources:
                found = source.find(mixin_name)
                if found is not None:
                    mixin = as_mixin(mixin_name, found)
                    self._mixins[mixin_name] = mixin
                    log_trace("discover", mixin_name, f"from {type(source).__name__}")
                    return True, mixin

        log_trace("miss", mixin_name)
        return False, None

    def does_mixin_exist(self, mixin_name: str) -> bool:
        return self.resolve(mixin_name)[0]

    # -- registration --

    def register_mixin(self, mixin_name: str, definition: Any) -> Mixin:
        errors.state(isinstance(mixin_name, str) and mixin_name != "", "MustBe", "mixin_name", "non-empty string")
        with self._lock:
            errors.state(not self.does_mixin_exist(mixin_name), "ExistentItem", "Mixin", mixin_name)
            mixin = as_mixin(mixin_name, definition)
            self._mixins[mixin_name] = mixin
        log("DEBUG", f"registered mixin {mixin_name!r}")
        return mixin

    def register_mixin_from_module(self, module: types.ModuleType) -> Mixin:
        """Register *module* under the last component of its dotted name."""
        errors.state(isinstance(module, types.ModuleType), "MustBe", "module", "module")
        return self.register_mixin(module.__name__.rpartition(".")[2], module)

    def register_multiple_mixins(self, definitions: Mapping) -> None:
        errors.state(isinstance(definitions, Mapping), "MustBe", "definitions", "mapping")
        errors.state(len(definitions) > 0, "MustNotBeEmpty", "definitions")
        for mixin_name, definition in definitions.items():
            self.register_mixin(mixin_name, definition)

    def register_multiple_mixins_from_modules(self, modules: Iterable[types.ModuleType]) -> None:
        modules = non_empty_list(modules, "modules")
        for module in modules:
            self.register_mixin_from_module(module)

    # -- application --

    def add_mixin(self, target: Any, mixin_name: str) -> None:
        """Apply *mixin_name* to a class (by record, name or object) or a plain object."""
        target = as_target(target)
        cls: Optional[Class] = None
        if isinstance(target, (ClassRef, ClassNameRef)):
            exists, cls = self._classes.does_class_exist(target)
            if not exists:
                errors.report("NonexistentItem", "Class", _describe(target))

        found, mixin = self.resolve(mixin_name)
        if not found:
            errors.report("NonexistentItem", "Mixin", mixin_name)

        if cls is None:
            mixin.apply(target.obj)
            log_trace("apply", mixin_name, f"to {type(target.obj).__name__}")
            return

        with self._lock:
            if mixin_name in cls.mixins:
                errors.report("MixinApplied", mixin_name, cls.class_name)
            mark_mixin_applied(cls, mixin_name)
            try:
                mixin.apply(cls)
            except BaseException:
                unmark_mixin(cls, mixin_name)
                raise
        log_trace("apply", mixin_name, f"to class {cls.class_name}")

    def add_multiple_mixins(self, target: Any, mixin_names: Iterable[str]) -> None:
        for mixin_name in non_empty_list(mixin_names, "mixins"):
            self.add_mixin(target, mixin_name)

    # -- membership queries --

    def _require_class(self, name_or_class: Any) -> Class:
        exists, cls = self._classes.does_class_exist(name_or_class)
        if not exists:
            errors.report("NonexistentItem", "Class", _describe(as_target(name_or_class)))
        return cls

    def class_has_mixin(self, name_or_class: Any, mixin_name: str) -> bool:
        return class_has_mixin(self._require_class(name_or_class), mixin_name)

    def class_has_any_mixins(self, name_or_class: Any, mixin_names: Iterable[str]) -> Tuple[bool, List[str]]:
        names = non_empty_list(mixin_names, "mixins")
        cls = self._require_class(name_or_class)
        present = [name for name in names if class_has_mixin(cls, name)]
        return bool(present), present

    def class_has_all_mixins(self, name_or_class: Any, mixin_names: Iterable[str]) -> bool:
        names = non_empty_list(mixin_names, "mixins")
        cls = self._require_class(name_or_class)
        return all(class_has_mixin(cls, name) for name in names)


def non_empty_list(values: Any, param: str) -> list:
    errors.state(
        isinstance(values, Collection) and not isinstance(values, (str, bytes, Mapping)),
        "MustBe", param, "collection",
    )
    errors.state(len(values) > 0, "MustNotBeEmpty", param)
    return list(values)


def _describe(target: Any) -> str:
    if isinstance(target, ClassRef):
        return target.cls.class_name
    if isinstance(target, ClassNameRef):
        return target.name
    if isinstance(target, PlainObject):
        return repr(target.obj)
    return str(target)
