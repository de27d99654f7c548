"""Validate the palette and render templates without writing anything.

Resolves the palette (catching bad hex literals, missing paths and reference
cycles), then renders TEMPLATE, or every template under a directory, and
discards the output. Exits 1 on the first problem.

Example:
    veneer check templates/vscode/themes/theme.json.tera
    veneer check templates/ --palette palettes/ember.toml
"""

import sys
from pathlib import Path

from veneer.core import render
from veneer.core.palette import load_palette_file
from veneer.core.types import Command

command = Command(
    name='check',
    help='Validate palette + template(s) without writing outputs.',
)


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('template', help='Template file or directory of templates')


@command.run
def run(args) -> None:
    palette = load_palette_file(args.palette)
    for template in render.check(palette, Path(args.template)):
        print(f'veneer: ok {template}', file=sys.stderr)
