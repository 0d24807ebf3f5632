"""
Enumoption utilities (internal helpers, carefully exposed)

Scope
- Core building blocks shared by the value maps, configurations, option facades
  and the bundled command-line application.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.
  • Builders use it to track write-once settings: a setting is Unset until configured.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/""/False.

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated accessors for clean tracebacks and help.

- mirror("attr")
  • Read-only property exposing a private backing field (self._attr); mutable containers are
    handed out as frozen snapshots (tuple / MappingProxyType / frozenset).

- forward("attr", target="_option")
  • Pass-through property reading and writing an attribute of a wrapped object. Nothing is cached:
    every access reaches the wrapped object.

- IntrospectableType
  • Metaclass publishing __introspectable__ names as mirror() properties and providing stable
    __repr__/__rich_repr__ implementations driven by __displayable__/__introspectable__.

Quick examples
    >>> one = coalesce(Unset, "fallback")  # "fallback"
    >>> two = coalesce(False, True)         # False (False is preserved)
    >>> class Wrapper:
    ...     def __init__(self, option):
    ...         self._option = option
    ...     template = forward("template")
"""
import builtins
import functools
import re
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    This is used when None (or False) is a legitimate user value, but the API needs a way
    to distinguish “not provided” from “provided”. A single instance, Unset, is exposed.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and False.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in annotations (e.g., str | UnsetType).
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        """
        Support reversed PEP 604 unions when UnsetType appears on the right.
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        """
        Ensure a single instance for this sentinel type.
        """
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        """
        Disallow subclassing to preserve sentinel semantics.
        """
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Notes
- Singleton: there is only one Unset instance.
- Distinct from None and False: identity checks must be used.
- Typical pattern: value = coalesce(user_value, default).
"""


def coalesce(object, default=None, /):
    """
    Resolve an internal Unset sentinel to a concrete default.

    This returns the given object unless it is the Unset sentinel, in which case
    the provided default is returned. Falsey values like None, 0, "", or False are
    preserved as-is: they are not treated as “unset”.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(False, True)        -> False
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - Function form: rename(callable, name) -> callable
    - Decorator form: rename(name) -> decorator

    Notes
    - This utility does not alter behavior beyond metadata.
    - Some built-in or C-implemented callables are not updatable and will
      raise TypeError.
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                """Decorator wrapper that applies the new name to the target callable."""
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _freeze(object):
    """
    Shallow-freeze mutable built-in containers.

    - list / other non-string sequences → tuple
    - dict → MappingProxyType (read-only view)
    - set → frozenset
    - anything else, including immutable mappings such as value maps, is returned as-is
    """
    if isinstance(object, Sequence) and not isinstance(object, (str, bytes, bytearray, tuple)):
        return tuple(object)
    elif isinstance(object, dict):
        return MappingProxyType(object)
    elif isinstance(object, Set) and not isinstance(object, frozenset):
        return frozenset(object)
    return object


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The generated property reads "_{name}" on the instance and freezes mutable
    containers on the way out (see _freeze).

    Example
    - Given self._items, declare items = mirror("items") to expose it safely.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, "_" + name))

    return property(getter)


def forward(name, /, target="_option", *, readonly=False):
    """
    Define a pass-through property for an attribute of a wrapped object.

    Parameters
    - name: str
      Attribute name, used both for the property and on the wrapped object.
    - target: str
      Name of the instance attribute holding the wrapped object.
    - readonly: bool
      When True, the property has no setter.

    Notes
    - Reads always return the wrapped object's current value; writes mutate the
      wrapped object directly. The owner keeps no copy.
    """
    if not isinstance(name, str) or not isinstance(target, str):
        raise TypeError("forward() arguments must be strings")

    @rename(name)
    def getter(self):
        return getattr(getattr(self, target), name)

    if readonly:
        return property(getter)

    @rename(name)
    def setter(self, value):
        setattr(getattr(self, target), name, value)

    return property(getter, setter)


class IntrospectableType(type):
    """
    Metaclass for read-only, introspectable descriptors.

    Responsibilities
    - Expose every name listed in __introspectable__ as a mirror() property.
    - Derive __typename__ from the class name (camel-case split with hyphens),
      used in messages (e.g., EnumOptionConfig -> "enum-option-config").
    - Provide stable __repr__/__rich_repr__ implementations unless the class
      defines its own. __displayable__ (if set) narrows which names are shown;
      otherwise __introspectable__ is used.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
            **options
        )

        if "__rich_repr__" not in namespace:
            @rename("__rich_repr__")
            def __rich_repr__(self):
                """
                Yield (name, object) pairs for pretty printers (e.g., rich.pretty).
                """
                for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                    yield name, getattr(self, name)
            self.__rich_repr__ = __rich_repr__

        if "__repr__" not in namespace:
            @rename("__repr__")
            def __repr__(self):
                return "%s(%s)" % (type(self).__typename__, ", ".join(
                    "%s=%r" % (name, object) for name, object in self.__rich_repr__()
                ))
            self.__repr__ = __repr__

        return self



__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "forward",

    # Types
    "UnsetType",
    "IntrospectableType",

    # Constants
    "Unset",
)
