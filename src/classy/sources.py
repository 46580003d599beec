from __future__ import annotations
import importlib
import pkgutil
import types
from collections.abc import Mapping
from typing import Optional, Union

from . import errors
from .builtin_mixins import BUILTIN_MIXINS
from .debug import log
from .mixins import Mixin, as_mixin


class BuiltinMixinSource:
    """Serves ``IsAMixin`` and ``HasMixin``; registered on every MixinRegistry."""

    def find(self, name: str) -> Optional[Mixin]:
        return BUILTIN_MIXINS.get(name)


class MappingMixinSource:
    def __init__(self, definitions: Mapping) -> None:
        errors.state(isinstance(definitions, Mapping), "MustBe", "definitions", "mapping")
        self._definitions = definitions

    def find(self, name: str) -> Optional[Mixin]:
        definition = self._definitions.get(name)
        if definition is None:
            return None
        return as_mixin(name, definition)


class PackageMixinSource:
    """Discover mixins as submodules of a package.

    A mixin named ``Boost`` is any submodule ``<package>....Boost`` exposing a
    module-level ``apply(target)``. Nested subpackages are searched too; the
    first hit in walk order wins.
    """

    def __init__(self, package: Union[str, types.ModuleType]) -> None:
        if isinstance(package, str):
            package = importlib.import_module(package)
        errors.state(
            isinstance(package, types.ModuleType) and hasattr(package, "__path__"),
            "MustBe", "package", "package",
        )
        self._package = package

    @property
    def package_name(self) -> str:
        return self._package.__name__

    def find(self, name: str) -> Optional[Mixin]:
        prefix = self._package.__name__ + "."
        for info in pkgutil.walk_packages(self._package.__path__, prefix):
            if info.name.rpartition(".")[2] != name or info.ispkg:
                continue
            module = importlib.import_module(info.name)
            log("DEBUG", f"loaded mixin module {info.name!r}")
            return as_mixin(name, module)
        return None

