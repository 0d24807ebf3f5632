"""
Enumoption command-line application: option slots, subcommands, and parsing.

What this module provides
- OptionArity: how many values an option slot accepts (multiple, single, none).
- CommandOption: a live option slot. It is created from a template such as
  "-t | --test <value>", keeps mutable help metadata (names, description,
  visibility, inheritance) and collects the raw string values found on the
  command line.
- CommandLineApplication: a command owning option slots and subcommands. It
  registers options, parses argument lists into its slots, runs the selected
  command's callback, and renders help with rich.

Template grammar
- Parts are separated by '|' and/or whitespace.
  • "--name"   → long_name "name"
  • "-x"       → short_name "x" (any length, e.g. "-xy" → "xy")
  • "-?"       → symbol_name "?" (a single non-letter character)
  • "<value>"  → value_name "value"
- A template must define at least one of long/short/symbol name.

Parsing rules
- "--name value", "--name=value", "--name:value" (long names)
- "-x value", "-x=value", "-x:value", "-?" (short and symbol names)
- Options are looked up on the current command first, then on the ancestors'
  options flagged as inherited.
- A bare word naming a subcommand switches parsing to that subcommand.
- "--" stops option parsing; everything after it is kept verbatim.
- Other bare words are collected in remaining_arguments.

Quick start
    app = CommandLineApplication("paint")
    color = app.option("-c | --color <color>", "Paint color.", OptionArity.SINGLE_VALUE)

    @app.on_execute
    def run():
        print(color.value())
        return 0

    app.execute("--color", "red")
"""
import io
import logging
import re
from collections import defaultdict, deque
from enum import Enum

from rich.box import ROUNDED
from rich.console import Console, Group
from rich.table import Table
from rich.text import Text

from .faults import *
from .utils import *

logger = logging.getLogger(__name__)


class OptionArity(Enum):
    """
    Number of values an option slot accepts.
    """
    MULTIPLE_VALUE = "multiple"
    SINGLE_VALUE = "single"
    NO_VALUE = "none"


def _is_english_letter(character):
    return "a" <= character <= "z" or "A" <= character <= "Z"


class CommandOption(metaclass=IntrospectableType):
    """
    Live option slot owned by a CommandLineApplication.

    Attributes (mutable)
    - template, short_name, long_name, symbol_name, value_name: naming metadata.
      They are parsed once from the template; later assignments are kept as-is.
    - description: help description (None until set).
    - show_in_help_text: whether help rendering lists the option.
    - inherited: whether subcommands may use the option.
    - values: raw string values collected while parsing.

    Attributes (read-only)
    - arity: OptionArity given at construction.

    Raises
    - TypeError: template is not a string or arity is not an OptionArity.
    - ValueError: the template contains an unknown part or defines no name.
    """

    __displayable__ = (
        "template",
        "arity",
        "short_name",
        "long_name",
        "symbol_name",
        "value_name",
        "description",
        "show_in_help_text",
        "inherited",
        "values",
    )

    def __init__(self, template, arity):
        if not isinstance(template, str):
            raise TypeError(f"{type(self).__typename__} 'template' must be a string")
        if not isinstance(arity, OptionArity):
            raise TypeError(f"{type(self).__typename__} 'arity' must be an option arity")

        self.template = template
        self.short_name = None
        self.long_name = None
        self.symbol_name = None
        self.value_name = None
        self.description = None
        self.show_in_help_text = True
        self.inherited = False
        self.values = []
        self._arity = arity

        for part in re.split(r"[\s|]+", template.strip()):
            if not part:
                continue
            if part.startswith("--"):
                self.long_name = part[2:]
            elif part.startswith("-"):
                name = part[1:]
                # A lone non-letter character (e.g. "-?") is a symbol, not a short name.
                if len(name) == 1 and not _is_english_letter(name):
                    self.symbol_name = name
                else:
                    self.short_name = name
            elif part.startswith("<") and part.endswith(">"):
                self.value_name = part[1:-1]
            else:
                raise ValueError("invalid template pattern %r" % template)

        if not (self.long_name or self.short_name or self.symbol_name):
            raise ValueError("invalid template pattern %r" % template)

    @property
    def arity(self):
        return self._arity

    def try_parse(self, value):
        """
        Record a raw value according to the arity.

        Returns
        - False when the value does not fit: a second value for a single-value
          option, or any payload for a no-value option. True otherwise.
        """
        match self._arity:
            case OptionArity.MULTIPLE_VALUE:
                self.values.append(value)
            case OptionArity.SINGLE_VALUE:
                if self.values:
                    return False
                self.values.append(value)
            case OptionArity.NO_VALUE:
                if value is not None:
                    return False
                # Presence-only options record a marker so has_value() reports them.
                self.values.append("on")
        return True

    def has_value(self):
        return len(self.values) > 0

    def value(self):
        """
        First raw value, or None when the option was not given.
        """
        return self.values[0] if self.values else None

    def reset(self):
        self.values.clear()

    def names(self):
        """
        Spellings accepted on the command line, short forms first.
        """
        names = []
        if self.symbol_name:
            names.append("-" + self.symbol_name)
        if self.short_name:
            names.append("-" + self.short_name)
        if self.long_name:
            names.append("--" + self.long_name)
        return names


class CommandLineApplication(metaclass=IntrospectableType):
    """
    A command owning option slots and subcommands.

    Parameters
    - name: Unset | str
      Command name; subcommands are selected by it. Non-empty when provided.
    - description: Unset | str
      Help description.

    Notes
    - The application owns every CommandOption it registers. Wrappers (such as
      EnumOption) only keep references to them.
    - Parsing mutates the slots in place; parse() resets them first, so the same
      application can parse several argument lists in a row.
    """

    __displayable__ = (
        "name",
        "description",
        "options",
        "commands",
    )

    def __init__(self, name=Unset, description=Unset, *, parent=Unset):
        cls = type(self)
        if not isinstance(name, str | Unset):
            raise TypeError(f"{cls.__typename__} 'name' must be a string")
        elif isinstance(name, str) and not (name := name.strip()):
            raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
        if not isinstance(description, str | Unset):
            raise TypeError(f"{cls.__typename__} 'description' must be a string")
        if not isinstance(parent, CommandLineApplication | Unset):
            raise TypeError(f"{cls.__typename__} 'parent' must be a command-line application")

        self.name = coalesce(name)
        self.description = coalesce(description)
        self.parent = coalesce(parent)
        self.options = []
        self.commands = []
        self.remaining_arguments = []
        self._callback = Unset

    @property
    def root(self):
        command = self
        while command.parent is not None:
            command = command.parent
        return command

    @property
    def path(self):
        """
        Commands from the root down to this one.
        """
        path = deque()
        command = self
        while command is not None:
            path.appendleft(command)
            command = command.parent
        return list(path)

    def option(self, template, description, arity, configuration=Unset, inherited=False):
        """
        Register an option slot on this command.

        Parameters
        - template: str, see the module documentation for the grammar.
        - description: str | None, help description.
        - arity: OptionArity.
        - configuration: Unset | Callable[[CommandOption], Any]
          Hook called with the registered option.
        - inherited: bool, whether subcommands may use the option.

        Returns
        - CommandOption: the registered slot.

        Raises
        - TypeError / ValueError: malformed template or arity (from CommandOption).
        """
        if configuration is not Unset and not callable(configuration):
            raise TypeError("option() 'configuration' must be callable")

        option = CommandOption(template, arity)
        option.description = description
        option.inherited = bool(inherited)
        self.options.append(option)

        if configuration is not Unset:
            configuration(option)

        logger.debug("registered option %r on %r (%s)", option.template, self.name, option.arity.value)
        return option

    def command(self, name, configuration=Unset):
        """
        Register a subcommand, optionally configuring it through a hook.
        """
        command = type(self)(name, parent=self)
        self.commands.append(command)
        if configuration is not Unset:
            configuration(command)
        return command

    def enum_option(self, config, /):
        """
        Register an enum-backed option on this command (see enumoption.options.enum_option).
        """
        from .options import enum_option
        return enum_option(config, self)

    def on_execute(self, callback, /):
        """
        Set the callback run by execute() when this command is selected.

        Usable as a decorator; the callback is returned unchanged.
        """
        if not callable(callback):
            raise TypeError("on_execute() argument must be callable")
        self._callback = callback
        return callback

    def _walk(self):
        yield self
        for command in self.commands:
            yield from command._walk()

    def _lookup(self, predicate):
        command = self
        while command is not None:
            for option in command.options:
                if (command is self or option.inherited) and predicate(option):
                    return option
            command = command.parent
        return None

    def _visible_options(self):
        seen = []
        command = self
        while command is not None:
            for option in command.options:
                if (command is self or option.inherited) and option.show_in_help_text:
                    seen.append(option)
            command = command.parent
        return seen

    def _fault(self, fault, /):
        return fault.__replace__(prog=self.root.name, command=" ".join(filter(None, (step.name for step in self.path))))

    def _consume(self, option, token, value, tokens):
        if option.arity is OptionArity.NO_VALUE:
            if value is not None:
                raise self._fault(UnexpectedOptionValueError(
                    "option %r does not take a value (got %r)" % (token, value),
                    token=token,
                    option=option,
                    hint="remove everything from the separator (for example: %s)" % token.split("=")[0],
                ))
            option.try_parse(None)
            return

        if value is None:
            if not tokens:
                raise self._fault(MissingOptionValueError(
                    "missing value for option %r" % token,
                    token=token,
                    option=option,
                    hint="pass a value after a space or after '=' (for example: %s=<value>)" % token,
                ))
            value = tokens.popleft()

        if not option.try_parse(value):
            raise self._fault(UnexpectedOptionValueError(
                "unexpected value %r for option %r, it accepts a single value" % (value, token),
                token=token,
                option=option,
                value=value,
                hint="specify the option only once",
            ))

    def parse(self, *args):
        """
        Parse raw command-line arguments into the option slots.

        Parameters
        - *args: str, arguments without the program name.

        Returns
        - CommandLineApplication: the selected command (self or a subcommand).

        Raises
        - UnrecognizedOptionError, MissingOptionValueError, UnexpectedOptionValueError.
        """
        for command in self._walk():
            command.remaining_arguments.clear()
            for option in command.options:
                option.reset()

        command = self
        tokens = deque(args)

        while tokens:
            token = tokens.popleft()
            if not isinstance(token, str):
                raise TypeError("parse() arguments must be strings")

            if token == "--":
                command.remaining_arguments.extend(tokens)
                break

            if match := re.fullmatch(r"--(?P<name>[^=:]+)([=:](?P<value>.*))?", token, re.DOTALL):
                name = match["name"]
                option = command._lookup(lambda option: option.long_name == name)
            elif match := re.fullmatch(r"-(?P<name>[^=:]+)([=:](?P<value>.*))?", token, re.DOTALL):
                name = match["name"]
                option = command._lookup(lambda option: name in (option.short_name, option.symbol_name))
            else:
                for subcommand in command.commands:
                    if subcommand.name == token:
                        command = subcommand
                        break
                else:
                    command.remaining_arguments.append(token)
                continue

            if option is None:
                raise command._fault(UnrecognizedOptionError(
                    "unrecognized option %r" % token,
                    token=token,
                    hint="run with --help to see the available options",
                ))

            command._consume(option, token, match["value"], tokens)

        logger.debug("parsed %d argument(s), selected command %r", len(args), command.name)
        return command

    def execute(self, *args, shell=False, colorful=True, fancy=False):
        """
        Parse the arguments and run the selected command's callback.

        Returns
        - int: the callback's result (0 when it returns None or no callback is set),
          or 1 when a fault was rendered in shell mode.

        Notes
        - Faults raised while parsing or inside the callback are routed through
          trigger(): raised when shell is False, rendered to stderr otherwise.
        """
        try:
            command = self.parse(*args)
            if command._callback is Unset:
                return 0
            return command._callback() or 0
        except EnumOptionException as fault:
            trigger(fault, shell=shell, colorful=colorful, fancy=fancy, deferred=True, prog=self.root.name)
            return 1

    def _render_help(self, *, colorful=True):
        styles = defaultdict(str, {
            "usage-label": "bold #00E6FF",
            "program-name": "bold #FF4D94",
            "description-section": "italic #A3A3A3",
            "group-label": "bold #FFFFFF",
            "option-name": "bold #00E6FF",
            "metavar": "bold #FFD600",
            "argument-description": "#9CA3AF",
            "children": "bold #36C5F0",
            "children-table": "#4B5563",
        } | getattr(__import__("__main__"), "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        renders = []
        usage = Text.assemble(
            ("usage: ", styler("usage-label")),
            (" ".join(filter(None, (step.name for step in self.path))) or "<command>", styler("program-name")),
        )
        if self.commands:
            usage.append(" [command]")
        if options := self._visible_options():
            usage.append(" [options]")
        renders.append(usage)

        if self.description:
            renders.append(Text(self.description, styler("description-section")))

        if options:
            table = Table(box=None, show_header=False, padding=(0, 2, 0, 0))
            table.add_column("name", no_wrap=True)
            table.add_column("description")
            for option in options:
                name = Text(" | ").join(Text(name, styler("option-name")) for name in option.names())
                if option.value_name:
                    name.append(" <%s>" % option.value_name, styler("metavar"))
                table.add_row(name, Text(option.description or "", styler("argument-description")))
            renders.append(Text("options:", styler("group-label")))
            renders.append(table)

        if self.commands:
            table = Table(box=ROUNDED, show_header=False, border_style=styler("children-table"))
            table.add_column("name", no_wrap=True)
            table.add_column("description")
            for command in self.commands:
                table.add_row(Text(command.name, styler("children")), Text(command.description or ""))
            renders.append(Text("commands:", styler("group-label")))
            renders.append(table)

        return Group(*renders)

    def help_text(self, *, width=100):
        """
        Render the help screen as plain text.
        """
        console = Console(file=io.StringIO(), width=width, color_system=None, highlight=False)
        console.print(self._render_help(colorful=False))
        return console.file.getvalue()

    def show_help(self, *, colorful=True):
        """
        Print the help screen to stdout.
        """
        Console(highlight=False).print(self._render_help(colorful=colorful))


__all__ = (
    "OptionArity",
    "CommandOption",
    "CommandLineApplication",
)
