"""classy: named classes, single inheritance and runtime mixins.

Define classes from plain mappings, create objects with ``new``, tear them
down with ``destroy`` and attach reusable mixins to classes or any object.
"""

from .api import (
    Classy,
    DEFAULT,
    configure,
    new_class,
    new_subclass,
    new_object_of_class,
    get_class,
    register_mixin,
    register_source,
    add_mixin,
    add_multiple_mixins,
)
from .model import (
    Class, Object, ClassRef, ClassNameRef, PlainObject,
    SEALED_FIELDS, SET_ONCE_FIELDS,
)
from .registry import ClassRegistry
from .mixins import Mixin, MixinRegistry, MixinSource, ensure_absent, install_member
from .sources import BuiltinMixinSource, MappingMixinSource, PackageMixinSource
from .errors import (
    ClassyError, MustBeError, MustNotBeEmptyError, ExistentItemError,
    NonexistentItemError, RestrictedFieldError, MixinCollisionError,
    MixinDefinitionError,
)

__all__ = [
    "Classy","DEFAULT","configure",
    "new_class","new_subclass","new_object_of_class","get_class",
    "register_mixin","register_source","add_mixin","add_multiple_mixins",
    "Class","Object","ClassRef","ClassNameRef","PlainObject",
    "SEALED_FIELDS","SET_ONCE_FIELDS",
    "ClassRegistry","Mixin","MixinRegistry","MixinSource","ensure_absent","install_member",
    "BuiltinMixinSource","MappingMixinSource","PackageMixinSource",
    "ClassyError","MustBeError","MustNotBeEmptyError","ExistentItemError",
    "NonexistentItemError","RestrictedFieldError","MixinCollisionError",
    "MixinDefinitionError",
]
