"""Derived types built from a parent type and a declaration mapping.

Each composed type carries two tables:
- __instance_members__: methods, properties and values seen by instances
- __class_members__: members attached to the type itself

extend() merges the parent's tables with the declaration and writes the
result straight into the new type's namespace, so nothing is looked up on
the parent after composition.

Example:
    Base = Composable.extend({
        "@table": "video",
        "@create": lambda cls, **fields: cls(**fields),
        "greeting": lambda self: "hello world",
    })

    Base.table           # 'video'
    Base().greeting()    # 'hello world'
"""

from collections.abc import Mapping
from types import GetSetDescriptorType, MemberDescriptorType
from typing import Any, Callable, Optional

CLASS_MEMBER_PREFIX = "@"
CONSTRUCTOR = "__init__"

# Type machinery and composition bookkeeping; never part of either table.
# __root__ in particular is never copied to a child.
_RESERVED = frozenset({
    "__module__",
    "__qualname__",
    "__doc__",
    "__dict__",
    "__weakref__",
    "__slots__",
    "__annotations__",
    "__annotate__",
    "__annotate_func__",
    "__annotations_cache__",
    "__firstlineno__",
    "__static_attributes__",
    "__classcell__",
    "__orig_bases__",
    "__parameters__",
    "__type_params__",
    "__init_subclass__",
    "__class_getitem__",
    "__instance_members__",
    "__class_members__",
    "__root__",
})


def _split_members(namespace: Mapping[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Sort a class body into instance members and class-level members."""
    instance: dict[str, Any] = {}
    klass: dict[str, Any] = {}
    for key, value in namespace.items():
        if key in _RESERVED or isinstance(value, (MemberDescriptorType, GetSetDescriptorType)):
            continue
        if isinstance(value, (classmethod, staticmethod)):
            klass[key] = value
        else:
            instance[key] = value
    return instance, klass


def _tables(cls: type) -> tuple[dict[str, Any], dict[str, Any]]:
    """Copy the instance and class tables of any type."""
    if isinstance(vars(cls).get("__instance_members__"), dict):
        return dict(cls.__instance_members__), dict(cls.__class_members__)

    instance: dict[str, Any] = {}
    klass: dict[str, Any] = {}
    for base in reversed(cls.__mro__):
        if base is object:
            continue
        base_instance, base_class = _split_members(vars(base))
        instance.update(base_instance)
        klass.update(base_class)
    return instance, klass


def _as_class_member(value: Any) -> Any:
    if isinstance(value, (classmethod, staticmethod, property, type)):
        return value
    if callable(value):
        return classmethod(value)
    return value


def _forwarding_constructor(parent: type) -> Callable[..., None]:
    parent_init = parent.__init__

    def __init__(self, *args, **kwargs):
        parent_init(self, *args, **kwargs)

    return __init__


def extend(parent: type, declaration: Mapping[str, Any], name: Optional[str] = None) -> type:
    """Build a new type from parent, layering declaration on top.

    Declaration keys:
    - "__init__": the new type's constructor. Without it, a constructor
      forwarding all arguments to the parent's is synthesized.
    - "@name": class-level member installed as ``NewType.name``. Callables
      become classmethods.
    - anything else: instance member overriding the parent's.

    Every class-level member of the parent is carried over.

    Args:
        parent: Type to derive from
        declaration: Member overrides
        name: Name of the new type (defaults to the parent's)

    Returns:
        The composed type, marked as its own root
    """
    instance, klass = _tables(parent)
    namespace: dict[str, Any] = {"__module__": parent.__module__}

    for key, value in declaration.items():
        if key.startswith(CLASS_MEMBER_PREFIX):
            klass[key[len(CLASS_MEMBER_PREFIX):]] = _as_class_member(value)
        elif key in _RESERVED:
            namespace[key] = value
        elif key != CONSTRUCTOR:
            instance[key] = value

    if CONSTRUCTOR in declaration:
        instance[CONSTRUCTOR] = declaration[CONSTRUCTOR]
    else:
        instance[CONSTRUCTOR] = _forwarding_constructor(parent)

    namespace.update(instance)
    namespace.update(klass)
    namespace["__instance_members__"] = instance
    namespace["__class_members__"] = klass

    child = type(parent)(name or parent.__name__, (parent,), namespace)
    child.__root__ = child
    return child


def is_composed(cls: Any) -> bool:
    """Return True if cls was produced by extend()."""
    return isinstance(cls, type) and vars(cls).get("__root__") is cls


class Composable:
    """Base for types assembled with extend().

    Subclasses declared with a class statement get their tables filled in
    automatically, so they can be extended in turn.
    """

    extend = classmethod(extend)

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if "__instance_members__" in vars(cls):
            return

        instance: dict[str, Any] = {}
        klass: dict[str, Any] = {}
        for base in reversed(cls.__bases__):
            base_instance, base_class = _tables(base)
            instance.update(base_instance)
            klass.update(base_class)

        own_instance, own_class = _split_members(vars(cls))
        instance.update(own_instance)
        klass.update(own_class)
        cls.__instance_members__ = instance
        cls.__class_members__ = klass


Composable.__instance_members__ = {}
Composable.__class_members__ = {"extend": vars(Composable)["extend"]}
