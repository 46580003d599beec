from __future__ import annotations
import threading
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional, Tuple, Union

from . import errors
from .debug import log_trace

# Fields no caller may ever assign on a class record.
SEALED_FIELDS = frozenset({
    "class_name",
    "superclass",
    "new",
    "destroy",
    "is_object",
    "is_destroyed",
    "mixins",
})

# Fields that may be assigned only while absent at that exact class level.
SET_ONCE_FIELDS = frozenset({"init", "terminate"})

MISSING = object()


def copy_definition(value: Any) -> Any:
    """Recursively copy nested dicts, lists, tuples and sets; share everything else."""
    if isinstance(value, dict):
        return {k: copy_definition(v) for k, v in value.items()}
    if isinstance(value, list):
        return [copy_definition(v) for v in value]
    if type(value) is tuple:
        return tuple(copy_definition(v) for v in value)
    if isinstance(value, set):
        return set(value)
    return value


def _bind(value: Any, instance: Any, owner: Any) -> Any:
    # Python descriptor protocol: functions bind, staticmethods unwrap,
    # classmethods bind to the owning class record.
    getter = getattr(type(value), "__get__", None)
    if getter is None:
        return value
    return getter(value, instance, owner)


class Class:
    """A named class record.

    Sealed metadata (name, superclass, applied mixins) lives in slots and is
    exposed read-only. Everything else assigned on the record is a *member*:
    reads walk the superclass chain, writes land at this level only.
    """

    __slots__ = ("_class_name", "_superclass", "_members", "_mixins", "_lock")

    is_object = False

    def __init__(
        self,
        class_name: str,
        members: Optional[Dict[str, Any]] = None,
        superclass: Optional["Class"] = None,
        *,
        lock: Optional[threading.RLock] = None,
    ) -> None:
        object.__setattr__(self, "_class_name", class_name)
        object.__setattr__(self, "_superclass", superclass)
        object.__setattr__(self, "_members", dict(members or {}))
        object.__setattr__(self, "_mixins", set())
        object.__setattr__(self, "_lock", lock if lock is not None else threading.RLock())

    @property
    def class_name(self) -> str:
        return self._class_name

    @property
    def superclass(self) -> Optional["Class"]:
        return self._superclass

    @property
    def mixins(self) -> frozenset:
        """Names of mixins applied directly to this class (not inherited)."""
        return frozenset(self._mixins)

    def new(self, *args: Any, **kwargs: Any) -> "Object":
        """Create an object of this class.

        Only the nearest ``init`` (looked up from this class upward) runs.
        A subclass that needs its ancestors' initialisation calls it itself,
        e.g. ``Car.init(self, max_speed)``.
        """
        obj = _allocate(self)
        found, init = lookup(self, "init")
        if found:
            _bind(init, obj, self)(*args, **kwargs)
        log_trace("new", self._class_name)
        return obj

    def destroy(self, obj: "Object", *args: Any, **kwargs: Any) -> None:
        """Run every level's ``terminate`` on *obj*, derived to root, once."""
        errors.state(isinstance(obj, Object), "MustBe", "obj", "Object")
        # Claimed under the lock; terminate hooks run outside it.
        with self._lock:
            if obj._destroyed:
                return
            object.__setattr__(obj, "_destroyed", True)
            most_derived = obj._class
            hooks = [
                level._members["terminate"]
                for level in lineage(most_derived)
                if "terminate" in level._members
            ]
        try:
            for terminate in hooks:
                _bind(terminate, obj, most_derived)(*args, **kwargs)
        except BaseException:
            object.__setattr__(obj, "_destroyed", False)
            raise
        log_trace("destroy", most_derived._class_name)

    def __getattr__(self, name: str) -> Any:
        if name in Class.__slots__ or (name.startswith("__") and name.endswith("__")):
            raise AttributeError(name)
        found, value = lookup(self, name)
        if not found:
            raise AttributeError(f"Class '{self._class_name}' has no member '{name}'")
        return _bind(value, None, self)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in SEALED_FIELDS or name in Class.__slots__:
            errors.report("RestrictedField", name)
        with self._lock:
            if name in SET_ONCE_FIELDS and name in self._members:
                errors.report("RestrictedField", name)
            self._members[name] = value

    def __delattr__(self, name: str) -> None:
        if name in SEALED_FIELDS or name in SET_ONCE_FIELDS or name in Class.__slots__:
            errors.report("RestrictedField", name)
        with self._lock:
            if name not in self._members:
                raise AttributeError(f"Class '{self._class_name}' has no member '{name}'")
            del self._members[name]

    def __repr__(self) -> str:
        if self._superclass is None:
            return f"<Class {self._class_name!r}>"
        return f"<Class {self._class_name!r} extends {self._superclass._class_name!r}>"


class Object:
    """An instance of a :class:`Class`.

    Own data lives in the instance ``__dict__``; anything not found there is
    looked up along the class chain starting at the most-derived class.
    """

    __slots__ = ("_class", "_destroyed", "__dict__")

    is_object = True

    def __init__(self, cls: Class) -> None:
        object.__setattr__(self, "_class", cls)
        object.__setattr__(self, "_destroyed", False)

    @property
    def class_(self) -> Class:
        return self._class

    @property
    def class_name(self) -> str:
        return self._class.class_name

    @property
    def superclass(self) -> Optional[Class]:
        return self._class.superclass

    @property
    def mixins(self) -> frozenset:
        return self._class.mixins

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    def destroy(self, *args: Any, **kwargs: Any) -> None:
        self._class.destroy(self, *args, **kwargs)

    def __getattr__(self, name: str) -> Any:
        if name in Object.__slots__ or (name.startswith("__") and name.endswith("__")):
            raise AttributeError(name)
        found, value = lookup(self._class, name)
        if not found:
            raise AttributeError(f"'{self._class.class_name}' object has no attribute '{name}'")
        return _bind(value, self, self._class)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _OBJECT_SEALED:
            errors.report("RestrictedField", name)
        object.__setattr__(self, name, value)

    def __repr__(self) -> str:
        state = " destroyed" if self._destroyed else ""
        return f"<{self._class.class_name} object{state} at {id(self):#x}>"


_OBJECT_SEALED = SEALED_FIELDS | {"class_", "_class", "_destroyed"}


def _allocate(cls: Class) -> Object:
    # Build the base record at the root, then re-stamp it level by level so
    # lookups start at the most-derived class.
    if cls._superclass is not None:
        obj = _allocate(cls._superclass)
        object.__setattr__(obj, "_class", cls)
        return obj
    return Object(cls)


def lineage(cls: Class) -> Iterator[Class]:
    """Yield *cls* and then each superclass up to the root."""
    level: Optional[Class] = cls
    while level is not None:
        yield level
        level = level._superclass


def lookup(cls: Class, name: str) -> Tuple[bool, Any]:
    for level in lineage(cls):
        value = level._members.get(name, MISSING)
        if value is not MISSING:
            return True, value
    return False, None


def has_own(cls: Class, name: str) -> bool:
    return name in cls._members


def own_members(cls: Class) -> Dict[str, Any]:
    return dict(cls._members)


def mark_mixin_applied(cls: Class, mixin_name: str) -> None:
    with cls._lock:
        cls._mixins.add(mixin_name)


def unmark_mixin(cls: Class, mixin_name: str) -> None:
    with cls._lock:
        cls._mixins.discard(mixin_name)


# ---------------- Tagged mixin / lookup targets ----------------

@dataclass(frozen=True)
class ClassRef:
    cls: Class

@dataclass(frozen=True)
class ClassNameRef:
    name: str

@dataclass(frozen=True, eq=False)
class PlainObject:
    obj: Any

Target = Union[ClassRef, ClassNameRef, PlainObject]


def as_target(value: Any) -> Target:
    """Coerce a raw argument into a tagged target.

    An object of a class stands for its whole class, as does the class record
    itself; a string names a class; anything else is a plain object.
    """
    if isinstance(value, (ClassRef, ClassNameRef, PlainObject)):
        return value
    if isinstance(value, Class):
        return ClassRef(value)
    if isinstance(value, Object):
        return ClassRef(value.class_)
    if isinstance(value, str):
        return ClassNameRef(value)
    return PlainObject(value)
