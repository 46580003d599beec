from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any, Iterable, Optional

from . import errors
from .mixins import MixinRegistry
from .model import Class, Object
from .registry import ClassRegistry

# Attached to every root class so introspection is always available.
ROOT_MIXINS = ("IsAMixin", "HasMixin")


class Classy:
    """One class registry plus one mixin registry.

    The module-level functions below delegate to a process-wide instance;
    build a fresh ``Classy()`` wherever isolated state is needed (tests).
    """

    def __init__(self) -> None:
        self.classes = ClassRegistry()
        self.mixins = MixinRegistry(self.classes)

    def _validate_definition(self, definition: Any, param: str) -> None:
        errors.state(isinstance(definition, Mapping), "MustBe", param, "mapping")
        errors.state(len(definition) > 0, "MustNotBeEmpty", param)
        errors.state(isinstance(definition.get("class_name"), str), "MustBe", "class_name", "string")
        errors.state(
            not self.classes.does_class_exist(definition["class_name"])[0],
            "ExistentItem", "Class", definition["class_name"],
        )

    def _create(self, definition: Mapping, superclass: Optional[Class] = None) -> Class:
        cls = self.classes.create_class(definition, superclass)
        if superclass is None:
            self.mixins.add_multiple_mixins(cls, ROOT_MIXINS)
        return cls

    def new_subclass(self, definition: Mapping, superclass: Any, mixins: Optional[Iterable[str]] = None) -> Class:
        """Create a subclass of an existing class (given by record or name)."""
        self._validate_definition(definition, "subclass_definition")
        exists, parent = self.classes.does_class_exist(superclass)
        if not exists:
            errors.report("NonexistentItem", "Superclass", superclass)

        cls = self._create(definition, parent)
        if mixins:
            self.mixins.add_multiple_mixins(cls, mixins)
        return cls

    def new_class(
        self,
        definition: Mapping,
        mixins: Optional[Iterable[str]] = None,
        superclass: Any = None,
    ) -> Class:
        self._validate_definition(definition, "definition")
        if superclass is not None:
            return self.new_subclass(definition, superclass, mixins)

        cls = self._create(definition)
        if mixins:
            self.mixins.add_multiple_mixins(cls, mixins)
        return cls

    def new_object_of_class(self, class_name: str, *args: Any, **kwargs: Any) -> Object:
        return self.get_class(class_name).new(*args, **kwargs)

    def get_class(self, class_name: str) -> Class:
        return self.classes.get_class(class_name)


DEFAULT = Classy()


def configure(*, log_level: str | None = None, trace: bool | None = None) -> None:
    """Set lightweight runtime options.

    Parameters
    ----------
    log_level:
        Minimum level written to ``stderr`` (``DEBUG``, ``INFO``, ``WARN``,
        ``ERROR``). Stored in ``CLASSY_LOG_LEVEL``.
    trace:
        When ``True`` emits a trace line for every class creation, mixin
        lookup, mixin application and object destruction.
    """
    if log_level is not None:
        os.environ["CLASSY_LOG_LEVEL"] = log_level.upper()
    if trace is not None:
        os.environ["CLASSY_TRACE"] = "True" if trace else "False"


def new_class(definition: Mapping, mixins: Optional[Iterable[str]] = None, superclass: Any = None) -> Class:
    return DEFAULT.new_class(definition, mixins, superclass)


def new_subclass(definition: Mapping, superclass: Any, mixins: Optional[Iterable[str]] = None) -> Class:
    return DEFAULT.new_subclass(definition, superclass, mixins)


def new_object_of_class(class_name: str, *args: Any, **kwargs: Any) -> Object:
    return DEFAULT.new_object_of_class(class_name, *args, **kwargs)


def get_class(class_name: str) -> Class:
    return DEFAULT.get_class(class_name)


def register_mixin(mixin_name: str, definition: Any):
    return DEFAULT.mixins.register_mixin(mixin_name, definition)


def register_source(source) -> None:
    DEFAULT.mixins.register_source(source)


def add_mixin(target: Any, mixin_name: str) -> None:
    DEFAULT.mixins.add_mixin(target, mixin_name)


def add_multiple_mixins(target: Any, mixin_names: Iterable[str]) -> None:
    DEFAULT.mixins.add_multiple_mixins(target, mixin_names)
