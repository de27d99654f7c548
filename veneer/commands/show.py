"""Show resolved palette values with colour swatches.

Prints each section (light/dark colours, accents, the four ANSI rows) as a
table of key, 24-bit terminal swatch, and canonical hex. References are
shown already resolved.

Swatches are plain blanks with --no-color or when NO_COLOR is set.
--json prints the resolved palette instead, shaped like the source TOML.
--png also writes a swatch sheet image (one row per section).

Example:
    veneer show
    veneer show --palette palettes/ember.toml --json
    veneer show --png ./tmp/swatches.png
"""

import os
import sys

from veneer.core.palette import load_palette_file
from veneer.core.report import format_json, format_text
from veneer.core.swatch import save_swatch_sheet
from veneer.core.types import Command

command = Command(
    name='show',
    help='Show palette values with colour swatches.',
)


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('-j', '--json', action='store_true', help='Output JSON instead of swatches')
    parser.add_argument('--png', metavar='PATH', default=None, help='Also write a PNG swatch sheet')
    parser.add_argument('--no-color', action='store_true', help='Do not emit ANSI colour codes')


@command.run
def run(args) -> None:
    palette = load_palette_file(args.palette)

    if args.json:
        print(format_json(palette))
    else:
        ansi = not (args.no_color or os.environ.get('NO_COLOR'))
        print(format_text(palette, palette_path=args.palette, ansi=ansi))

    if args.png:
        path = save_swatch_sheet(palette, args.png)
        print(f'veneer: wrote {path}', file=sys.stderr)
