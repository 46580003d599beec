from __future__ import annotations
import threading
from collections.abc import Mapping
from typing import Any, Dict, Iterator, Optional, Tuple

from . import errors
from .debug import log, log_trace
from .model import (
    SEALED_FIELDS,
    Class,
    ClassNameRef,
    ClassRef,
    as_target,
    copy_definition,
)


class ClassRegistry:
    """Name -> :class:`Class` table.

    A class can only name a superclass that is already registered, so the
    superclass graph is acyclic by construction.
    """

    def __init__(self) -> None:
        self._classes: Dict[str, Class] = {}
        self._lock = threading.RLock()

    def create_class(self, definition: Mapping, superclass: Any = None) -> Class:
        errors.state(isinstance(definition, Mapping), "MustBe", "definition", "mapping")
        errors.state(len(definition) > 0, "MustNotBeEmpty", "definition")
        class_name = definition.get("class_name")
        errors.state(isinstance(class_name, str) and class_name != "", "MustBe", "class_name", "non-empty string")
        for field in definition:
            if field in SEALED_FIELDS and field != "class_name":
                errors.report("RestrictedField", field)

        with self._lock:
            errors.state(class_name not in self._classes, "ExistentItem", "Class", class_name)

            parent: Optional[Class] = None
            if superclass is not None:
                exists, parent = self.does_class_exist(superclass)
                if not exists:
                    errors.report("NonexistentItem", "Superclass", _describe(superclass))

            members = copy_definition(dict(definition))
            del members["class_name"]
            cls = Class(class_name, members, parent, lock=self._lock)
            self._classes[class_name] = cls

        log_trace("create", class_name, f"extends {parent.class_name}" if parent else "")
        log("DEBUG", f"registered class {class_name!r}")
        return cls

    def does_class_exist(self, name_or_class: Any) -> Tuple[bool, Optional[Class]]:
        """Resolve a class record, class name or object; never raises."""
        target = as_target(name_or_class)
        if isinstance(target, ClassRef):
            name = target.cls.class_name
        elif isinstance(target, ClassNameRef):
            name = target.name
        else:
            return False, None
        with self._lock:
            cls = self._classes.get(name)
        return cls is not None, cls

    def get_class(self, class_name: str) -> Class:
        errors.state(isinstance(class_name, str), "MustBe", "class_name", "string")
        exists, cls = self.does_class_exist(class_name)
        if not exists:
            errors.report("NonexistentItem", "Class", class_name)
        return cls

    def __contains__(self, name_or_class: Any) -> bool:
        return self.does_class_exist(name_or_class)[0]

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._classes))

    def __len__(self) -> int:
        return len(self._classes)


def _describe(value: Any) -> str:
    if isinstance(value, Class):
        return value.class_name
    return str(value)
