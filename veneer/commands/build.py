"""Render a template, or every template under a directory, against the palette.

SRC is a template file ending in .tera, .j2 or .jinja, or a directory that
is searched recursively for such files. Outputs are named after the template
with the suffix stripped: theme.json.tera -> theme.json.

DEST is optional:
  - omitted: outputs go to the current directory
  - an existing directory: outputs go inside it
  - anything else: the output file (single template) or output root
    (directory of templates); parent directories are created

Every template is rendered before any file is written.

Example:
    veneer build templates/vscode/themes/theme.json.tera out/
    veneer build templates/ dist/ --palette palettes/ember.toml
"""

import sys
from pathlib import Path

from veneer.core import render
from veneer.core.palette import load_palette_file
from veneer.core.types import Command

command = Command(
    name='build',
    help='Render a template (or a directory of templates) to an output path.',
)


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('src', help='Template file (.tera/.j2/.jinja) or directory of templates')
    parser.add_argument('dest', nargs='?', default=None, help='Output file or directory (default: cwd)')


@command.run
def run(args) -> None:
    palette = load_palette_file(args.palette)
    dest = Path(args.dest) if args.dest else None
    for out in render.build(palette, Path(args.src), dest):
        print(f'veneer: wrote {out}', file=sys.stderr)
