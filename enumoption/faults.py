"""
Enumoption faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every failure the package
  surfaces. Codes are grouped by domain (configuration, resolution, parsing).
- EnumOptionException: base type carrying a message + read-only options, able to
  render itself with rich and to decide whether it is raised or printed.
- trigger(): central entry point to surface a fault with runtime options
  (shell/colorful/fancy/deferred/prog).

Error kinds
- configuration (21xxx): raised while a CLI author assembles an option; these are
  programming errors and always surface at the point of misuse.
  • AlreadyConfiguredError, DuplicateRepresentationError, EmptyConfigurationError
- resolution (22xxx): raised while reading typed values from a parsed option.
  • UnknownTokenError (only under the "fail" invalid-token policy), NoValuePresentError
- parsing (23xxx): raised by the bundled command-line application.
  • UnrecognizedOptionError, MissingOptionValueError, UnexpectedOptionValueError

Integration
- Library code raises faults directly. CommandLineApplication.execute() routes the
  faults it catches through trigger(fault, shell=...): outside shell mode they are
  re-raised; in shell mode they are rendered to stderr via rich.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the package (stable identifiers).

    grouping (by high-level domain)
    - configuration (211xx)
      • ALREADY_CONFIGURED, DUPLICATE_REPRESENTATION, EMPTY_CONFIGURATION
    - resolution (221xx)
      • UNKNOWN_TOKEN, NO_VALUE_PRESENT
    - parsing (231xx)
      • UNRECOGNIZED_OPTION, MISSING_OPTION_VALUE, UNEXPECTED_OPTION_VALUE

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- configuration errors (21xxx) ---
    ALREADY_CONFIGURED          = 21101
    DUPLICATE_REPRESENTATION    = 21102
    EMPTY_CONFIGURATION         = 21103

    # --- resolution errors (22xxx) ---
    UNKNOWN_TOKEN               = 22101
    NO_VALUE_PRESENT            = 22102

    # --- parsing errors (23xxx) ---
    UNRECOGNIZED_OPTION         = 23101
    MISSING_OPTION_VALUE        = 23102
    UNEXPECTED_OPTION_VALUE     = 23103

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class EnumOptionException(Exception):
    """
    base class of every fault raised by the package.

    attributes
    - message: str, one lowercase sentence describing what went wrong.
    - options: read-only mapping of context (hint, token, setting, ...) and
      rendering switches merged in by trigger().
    - code / title: class-level defaults, overridable through options.
    """
    code = Unset
    title = "enum option error"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = coalesce(message, self.title)
        self.options = MappingProxyType(options)
        super().__init__(self.message)

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if isinstance(fragment, Text):
                return fragment if colorful else Text(fragment.plain)
            return Text(str(fragment), style)

        code = self.options.get("code", self.code)
        prog = text(getattr(main, "__prog__", self.options.get("prog") or "enumoption"), styler("prog-name"))

        header = Text.assemble(
            "[ ",
            prog,
            " - ",
            text(code.normalize() if isinstance(code, FaultCode) else "-", styler("code")),
            " | ",
            text(self.options.get("title", self.title).title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        renders = [message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

        if self.options.get("fancy", False):
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        if self.options.get("deferred", False):
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ConfigurationError(EnumOptionException):
    title = "invalid configuration"


class AlreadyConfiguredError(ConfigurationError):
    code = FaultCode.ALREADY_CONFIGURED
    title = "already configured"


class DuplicateRepresentationError(ConfigurationError):
    code = FaultCode.DUPLICATE_REPRESENTATION
    title = "duplicate representation"


class EmptyConfigurationError(ConfigurationError):
    code = FaultCode.EMPTY_CONFIGURATION
    title = "empty configuration"


class UnknownTokenError(EnumOptionException, ValueError):
    code = FaultCode.UNKNOWN_TOKEN
    title = "unknown value"


class NoValuePresentError(EnumOptionException, LookupError):
    code = FaultCode.NO_VALUE_PRESENT
    title = "missing value"


class ParsingError(EnumOptionException):
    title = "invalid command line"


class UnrecognizedOptionError(ParsingError):
    code = FaultCode.UNRECOGNIZED_OPTION
    title = "unknown option"


class MissingOptionValueError(ParsingError):
    code = FaultCode.MISSING_OPTION_VALUE
    title = "option value required"


class UnexpectedOptionValueError(ParsingError):
    code = FaultCode.UNEXPECTED_OPTION_VALUE
    title = "unexpected option value"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see EnumOptionException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via the rich console; otherwise, the fault is raised.

    typical options
    - shell, fancy, colorful, deferred, prog, and any context the renderer may show.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "FaultCode",
    "EnumOptionException",
    "ConfigurationError",
    "AlreadyConfiguredError",
    "DuplicateRepresentationError",
    "EmptyConfigurationError",
    "UnknownTokenError",
    "NoValuePresentError",
    "ParsingError",
    "UnrecognizedOptionError",
    "MissingOptionValueError",
    "UnexpectedOptionValueError",
    "trigger",
)
