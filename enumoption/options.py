r"""
Enumoption facades: typed access to enum-backed command-line options.

Overview
- enum_option(config, application): register the option described by an
  EnumOptionConfig on a command-line application and wrap the registered slot.
  • arity: OptionArity.MULTIPLE_VALUE when allow_multiple, else SINGLE_VALUE.
  • description: see describe(config).
  • the configuration hook and the inherited flag are forwarded to the application.

- describe(config): effective help description.
  • base description
  • + "Accepts a single value." / "Accepts multiple values." when describe_arity
  • + "Values: abc, def, ghi." (sorted representations) when describe_values

- EnumOption[_E]: facade over a registered option slot.
  • values: lazily resolved members, recomputed from the slot on every access.
  • value: the first resolved member.
  • template, short_name, long_name, symbol_name, value_name, description,
    show_in_help_text, inherited: forwarded to the slot (read and write).
  • arity: forwarded to the slot (read-only).

Invalid tokens
- throw_on_invalid_option=False (default): tokens without a representation are skipped.
- throw_on_invalid_option=True: the first such token raises UnknownTokenError and
  aborts the iteration.

Quick example:
    >>> app = CommandLineApplication("paint")
    >>> color = enum_option(config, app)
    >>> selected = app.parse("--color", "RED", "--color", "teal")
    >>> list(color.values)
    [<Color.RED: 1>]
"""
import logging
from collections.abc import Mapping
from enum import Enum

from .application import OptionArity
from .configs import EnumOptionConfig
from .faults import UnknownTokenError, NoValuePresentError
from .utils import *
from .values import ValueMap

logger = logging.getLogger(__name__)


def describe(config, /):
    """
    Build the effective description of an enum-backed option.

    With both describe_arity and describe_values off, the base description is
    returned unchanged (even when empty).
    """
    if not isinstance(config, EnumOptionConfig):
        raise TypeError("describe() argument must be an enum option configuration")

    parts = [config.description]
    if config.describe_arity:
        parts.append("Accepts multiple values." if config.allow_multiple else "Accepts a single value.")
    if config.describe_values:
        parts.append("Values: %s." % ", ".join(sorted(config.values)))
    return " ".join(part for part in parts if part)


class EnumOption[_E: Enum](metaclass=IntrospectableType):
    """
    Typed facade over an option slot owned by a command-line application.

    Parameters
    - option: CommandOption
      The registered slot. It is referenced, never copied or owned.
    - values: ValueMap[_E] | Mapping[str, _E]
      Representation map; a plain mapping is wrapped into a case-insensitive ValueMap.
    - throw_on_invalid_option: bool
      Invalid-token policy (True → fail, False → ignore).

    Notes
    - The facade holds no state of its own besides the map and the policy:
      resolution reads the slot's raw values on every access, so results
      follow the slot across parses.
    """

    __displayable__ = (
        "template",
        "arity",
        "description",
        "inherited",
        "throw_on_invalid_option",
    )

    template = forward("template")
    short_name = forward("short_name")
    long_name = forward("long_name")
    symbol_name = forward("symbol_name")
    value_name = forward("value_name")
    description = forward("description")
    show_in_help_text = forward("show_in_help_text")
    inherited = forward("inherited")
    arity = forward("arity", readonly=True)

    def __init__(self, option, values, throw_on_invalid_option=False):
        if not isinstance(values, Mapping):
            raise TypeError(f"{type(self).__typename__} 'values' must be a mapping")
        self._option = option
        self._values = values if isinstance(values, ValueMap) else ValueMap(values)
        self._throw_on_invalid_option = bool(throw_on_invalid_option)

    @property
    def option(self):
        return self._option

    @property
    def value_map(self):
        return self._values

    @property
    def throw_on_invalid_option(self):
        return self._throw_on_invalid_option

    def _resolve(self, token):
        try:
            return self._values[token]
        except KeyError:
            if self._throw_on_invalid_option:
                raise UnknownTokenError(
                    "no value configured for %r" % token,
                    token=token,
                    template=self._option.template,
                    hint="use one of: %s" % ", ".join(sorted(self._values)),
                ) from None
            logger.debug("ignoring unknown token %r for option %r", token, self._option.template)
            return Unset

    @property
    def values(self):
        """
        Lazily resolved members for the raw values currently on the slot.

        A new generator is returned on every access; each one reflects the slot
        at iteration time.
        """
        return (value for value in map(self._resolve, self._option.values) if value is not Unset)

    @property
    def value(self):
        """
        The first resolved member.

        Raises
        - NoValuePresentError: no raw value resolved to a member.
        - UnknownTokenError: an invalid token was met first under the "fail" policy.
        """
        if (value := next(self.values, Unset)) is Unset:
            raise NoValuePresentError(
                "no value present for option %r" % self._option.template,
                template=self._option.template,
                hint="pass one of: %s" % ", ".join(sorted(self._values)),
            )
        return value

    def has_value(self):
        """
        Whether the slot holds at least one raw value (resolvable or not).
        """
        return self._option.has_value()


def enum_option(config, application, /):
    """
    Register an enum-backed option on an application and return its facade.

    Parameters
    - config: EnumOptionConfig
    - application: CommandLineApplication (or any object exposing a compatible
      option(template, description, arity, configuration, inherited) method)

    Returns
    - EnumOption wrapping the registered slot.

    Notes
    - Errors raised by the application (e.g. a malformed template) propagate unchanged.
    """
    if not isinstance(config, EnumOptionConfig):
        raise TypeError("enum_option() first argument must be an enum option configuration")

    arity = OptionArity.MULTIPLE_VALUE if config.allow_multiple else OptionArity.SINGLE_VALUE
    option = application.option(
        config.template,
        describe(config),
        arity,
        config.configuration,
        config.inherited,
    )
    logger.debug("bound enum option %r with %d representation(s)", config.template, len(config.values))

    return EnumOption(option, config.values, config.throw_on_invalid_option)


__all__ = (
    "EnumOption",
    "enum_option",
    "describe",
)
