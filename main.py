import sys
from enum import Enum

from rich.pretty import pprint

from enumoption import *


class Color(Enum):
    RED = 1
    GREEN = 2
    BLUE = 3


app = CommandLineApplication("paint", "Paint things in one or more colors.")
colors = app.enum_option(
    EnumOptionConfigBuilder(Color, "-c | --color <color>", "Colors to use.")
    .use_all()
    .use("crimson", Color.RED)
    .throw_on_invalid_option(True)
    .build()
)
helper = app.option("-? | -h | --help", "Show help.", OptionArity.NO_VALUE, inherited=True)


@app.on_execute
def callback():
    if helper.has_value():
        return app.show_help()
    pprint(colors)
    pprint(list(colors.values))


if __name__ == '__main__':
    sys.exit(app.execute(*sys.argv[1:], shell=True))
