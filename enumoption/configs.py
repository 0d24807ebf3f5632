r"""
Enumoption configurations: immutable option descriptors and their fluent builder.

Overview
- EnumOptionConfig[_E]: fully-resolved, read-only descriptor of an enum-backed option.
  • values: ValueMap[_E] (textual representation → member), never empty.
  • template / description: forwarded to the command-line application.
  • describe_values / describe_arity: extend the description with the accepted
    representations and the arity.
  • allow_multiple: multi-value (True) or single-value (False) option.
  • inherited: whether subcommands see the option too.
  • throw_on_invalid_option: invalid-token policy (True → fail, False → ignore).
  • configuration: hook called with the registered option right after registration.

- EnumOptionConfigBuilder[_E]: fluent, write-once builder.
  • Every setting may be configured at most once; a second call raises
    AlreadyConfiguredError even when the value is the same.
  • use(member) / use(text, member) / use_all() register representations.
  • build() requires at least one representation and fills unset settings with
    defaults (allow_multiple=True, inherited=False, throw_on_invalid_option=False,
    describe_values=True, describe_arity=True, configuration=no-op).
  • build() seals the builder: any further call raises AlreadyConfiguredError.

Quick example:
    >>> class Color(Enum):
    ...     RED = 1
    ...     GREEN = 2
    ...
    >>> config = (
    ...     EnumOptionConfigBuilder(Color, "-c | --color <color>", "Paint color.")
    ...     .use_all()
    ...     .use("crimson", Color.RED)
    ...     .allow_multiple(False)
    ...     .build()
    ... )
    >>> config.values["Crimson"]
    <Color.RED: 1>
"""
from collections.abc import Mapping
from enum import Enum

from .faults import AlreadyConfiguredError, EmptyConfigurationError
from .utils import *
from .values import ValueMap, ignore_case


def _noop(option, /):
    """
    Default post-registration hook: leaves the registered option untouched.
    """


_DEFAULTS = {
    "allow_multiple": True,
    "inherited": False,
    "throw_on_invalid_option": False,
    "describe_values": True,
    "describe_arity": True,
    "configuration": _noop,
}


def _sanitize_text(cls, name, object, /, *, empty=False):
    """
    Internal: validate a textual construction argument.

    Raises
    - TypeError: if the object is not a string.
    - ValueError: if the string is empty after trimming (unless empty=True).
    """
    if not isinstance(object, str):
        raise TypeError(f"{cls.__typename__} '{name}' must be a string")
    elif not empty and not object.strip():
        raise ValueError(f"{cls.__typename__} '{name}' cannot be empty")
    return object


class EnumOptionConfig[_E: Enum](metaclass=IntrospectableType):
    """
    Immutable descriptor of an enum-backed command-line option.

    Usually produced by EnumOptionConfigBuilder.build(); it may also be
    constructed directly, in which case a plain mapping is wrapped into a
    case-insensitive ValueMap.

    Unlike the builder, direct construction accepts an empty description: the
    arity and value sentences added by describe() may form the whole help text.
    The template is always required.

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes.
    """

    __introspectable__ = (
        "values",
        "template",
        "description",
        "describe_values",
        "describe_arity",
        "inherited",
        "allow_multiple",
        "throw_on_invalid_option",
        "configuration",
    )

    __slots__ = tuple("_" + name for name in __introspectable__)

    def __init__(
            self,
            values,
            template,
            description,
            *,
            describe_values=True,
            describe_arity=True,
            inherited=False,
            allow_multiple=True,
            throw_on_invalid_option=False,
            configuration=Unset
    ):
        cls = type(self)

        if not isinstance(values, Mapping):
            raise TypeError(f"{cls.__typename__} 'values' must be a mapping")
        if not isinstance(values, ValueMap):
            values = ValueMap(values)
        if not values:
            raise EmptyConfigurationError(
                f"{cls.__typename__} requires at least one representation",
                hint="register values with use(...) or use_all() before building",
            )

        configuration = coalesce(configuration, _noop)
        if not callable(configuration):
            raise TypeError(f"{cls.__typename__} 'configuration' must be callable")

        metadata = {
            "values": values,
            "template": _sanitize_text(cls, "template", template),
            # Descriptions may be empty; describe_* flags can still extend them.
            "description": _sanitize_text(cls, "description", description, empty=True),
            "describe_values": bool(describe_values),
            "describe_arity": bool(describe_arity),
            "inherited": bool(inherited),
            "allow_multiple": bool(allow_multiple),
            "throw_on_invalid_option": bool(throw_on_invalid_option),
            "configuration": configuration,
        }
        for name, object in metadata.items():
            setattr(self, "_" + name, object)


class EnumOptionConfigBuilder[_E: Enum]:
    """
    Fluent, write-once builder for EnumOptionConfig.

    Parameters
    - enum: type[_E]
      The enumeration whose members the option resolves to. Member names are
      the canonical representations used by use(member) and use_all().
    - template: str
      Option template understood by the application (e.g. "-t | --test <value>").
    - description: str
      Base help description.
    - comparer: Callable[[str], Hashable]
      Representation comparer for the whole map; defaults to ignore_case.

    Raises
    - TypeError: enum is not an Enum subclass, or template/description are not strings.
    - ValueError: template or description is empty.

    Notes
    - Builders are single-owner, single-use objects: once build() returned, the
      builder refuses any further call.
    """

    __typename__ = "enum-option-config-builder"

    def __init__(self, enum, template, description, comparer=Unset):
        if not isinstance(enum, type) or not issubclass(enum, Enum):
            raise TypeError(f"{self.__typename__} 'enum' must be an enum type")

        self._enum = enum
        self._template = _sanitize_text(self, "template", template)
        self._description = _sanitize_text(self, "description", description)
        self._values = ValueMap(comparer=coalesce(comparer, ignore_case))
        # Each setting moves from Unset to a value at most once.
        self._settings = dict.fromkeys(_DEFAULTS, Unset)
        self._built = False

    @property
    def enum(self):
        return self._enum

    def _ensure_open(self, operation, /):
        if self._built:
            raise AlreadyConfiguredError(
                f"{operation}() called on a builder that has already been built",
                setting=operation,
                hint="create a new builder for every option configuration",
            )

    def _configure(self, setting, object, /):
        self._ensure_open(setting)
        if self._settings[setting] is not Unset:
            raise AlreadyConfiguredError(
                "%r has already been set (to %r)" % (setting, self._settings[setting]),
                setting=setting,
                hint="remove the second %s(...) call" % setting,
            )
        self._settings[setting] = object
        return self

    def allow_multiple(self, allow_multiple, /):
        return self._configure("allow_multiple", bool(allow_multiple))

    def inherited(self, inherited, /):
        return self._configure("inherited", bool(inherited))

    def throw_on_invalid_option(self, throw_on_invalid_option, /):
        return self._configure("throw_on_invalid_option", bool(throw_on_invalid_option))

    def describe_values(self, describe_values, /):
        return self._configure("describe_values", bool(describe_values))

    def describe_arity(self, describe_arity, /):
        return self._configure("describe_arity", bool(describe_arity))

    def configuration(self, configuration, /):
        if not callable(configuration):
            raise TypeError(f"{self.__typename__} 'configuration' must be callable")
        return self._configure("configuration", configuration)

    def _check_member(self, member, /):
        if not isinstance(member, self._enum):
            raise TypeError(f"{self.__typename__} values must be members of {self._enum.__name__}")
        return member

    def use(self, *parameters):
        """
        Register a representation for an enum member.

        Forms
        - use(member): the representation is member.name.
        - use(text, member): explicit representation.

        Raises
        - DuplicateRepresentationError: the representation (under the comparer)
          is already registered.
        - TypeError: member does not belong to the builder's enum.
        """
        self._ensure_open("use")
        match len(parameters):
            case 1:
                member, = parameters
                representation = self._check_member(member).name
            case 2:
                representation, member = parameters
                self._check_member(member)
            case _:
                raise TypeError("use() takes 1 to 2 arguments but %d were given" % len(parameters))

        self._values._add(representation, member)
        return self

    def use_all(self):
        """
        Register every member of the enum under its canonical name.

        Either all members are registered or, on a collision with an earlier
        registration, none is.
        """
        self._ensure_open("use_all")
        values = self._values.copy()
        for member in self._enum:
            values._add(member.name, member)
        self._values = values
        return self

    def build(self):
        """
        Finalize the configuration.

        Raises
        - EmptyConfigurationError: no representation was registered.
        - AlreadyConfiguredError: build() was already called.
        """
        self._ensure_open("build")
        if not self._values:
            raise EmptyConfigurationError(
                "cannot build an option for %s without representations" % self._enum.__name__,
                hint="register values with use(...) or use_all() before building",
            )
        self._built = True

        return EnumOptionConfig(
            self._values.copy(),
            self._template,
            self._description,
            **{name: coalesce(object, _DEFAULTS[name]) for name, object in self._settings.items()}
        )


__all__ = (
    "EnumOptionConfig",
    "EnumOptionConfigBuilder",
)
