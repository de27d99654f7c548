"""Template rendering against a resolved palette (Jinja2).

Templates see:
  meta                 name / version / slug
  light, dark          colors.light / colors.dark
  accents
  ansi                 ansi.<light|dark>.<normal|bright>.<colour>

Colours render as canonical hex. The helpers and filters from
veneer.core.transforms are registered as globals and filters.

A template `foo/theme.json.tera` renders to `theme.json`; the template suffix
(.tera, .j2, .jinja) is stripped. When SRC is a directory every template
below it is rendered, mirroring the tree into the destination. All templates
are rendered before anything is written, so a broken template leaves no
partial output.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

from veneer.core.errors import PaletteError, RenderError
from veneer.core.transforms import FILTERS, HELPERS
from veneer.core.types import ResolvedPalette

TEMPLATE_SUFFIXES = ('.tera', '.j2', '.jinja')


def template_context(palette: ResolvedPalette) -> dict[str, Any]:
    return {
        'meta': palette.meta.to_dict(),
        'light': dict(palette.light),
        'dark': dict(palette.dark),
        'accents': dict(palette.accents),
        'ansi': {
            tone: {level: dict(row) for level, row in levels.items()} for tone, levels in palette.ansi.items()
        },
    }


def make_environment(search_dir: Path | None = None) -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(search_dir)) if search_dir is not None else None,
        autoescape=False,
        undefined=jinja2.StrictUndefined,
        keep_trailing_newline=True,
    )
    env.globals.update(HELPERS)
    env.filters.update(FILTERS)
    return env


def render_string(palette: ResolvedPalette, text: str, name: str = '<string>') -> str:
    """Render template source text. Mainly for tests and one-off snippets."""
    try:
        return make_environment().from_string(text).render(template_context(palette))
    except (jinja2.TemplateError, PaletteError, ValueError, TypeError) as exc:
        raise RenderError(name, _describe(exc)) from exc


def render_template(palette: ResolvedPalette, template_path: Path) -> str:
    """Render one template file. Includes resolve relative to its directory."""
    template_path = Path(template_path)
    if not template_path.is_file():
        raise RenderError(str(template_path), 'template not found')
    env = make_environment(template_path.parent)
    try:
        template = env.get_template(template_path.name)
        return template.render(template_context(palette))
    except (jinja2.TemplateError, PaletteError, ValueError, TypeError) as exc:
        raise RenderError(str(template_path), _describe(exc)) from exc


def _describe(exc: Exception) -> str:
    if isinstance(exc, jinja2.TemplateSyntaxError):
        return f'syntax error on line {exc.lineno}: {exc.message}'
    if isinstance(exc, PaletteError):
        # Helpers given a bad literal, e.g. with_alpha('#zzz', 0.5)
        return f'invalid hex colour: {exc.args[0]!r}'
    return str(exc)


def strip_template_suffix(name: str) -> str:
    for suffix in TEMPLATE_SUFFIXES:
        if name.endswith(suffix) and len(name) > len(suffix):
            return name[: -len(suffix)]
    return name


def discover_templates(root: Path) -> list[Path]:
    """Every template file below root, sorted."""
    return sorted(p for p in Path(root).rglob('*') if p.is_file() and p.suffix in TEMPLATE_SUFFIXES)


def output_path(template_path: Path, dest: Path | None) -> Path:
    """Where a single rendered template goes.

    No dest: cwd/<name>. Existing directory: dest/<name>. Otherwise dest itself.
    """
    file_name = strip_template_suffix(Path(template_path).name) or 'output'
    if dest is None:
        return Path.cwd() / file_name
    dest = Path(dest)
    if dest.is_dir():
        return dest / file_name
    return dest


def plan_outputs(src: Path, dest: Path | None) -> list[tuple[Path, Path]]:
    """(template, output) pairs for a template file or a directory of templates."""
    src = Path(src)
    if not src.is_dir():
        return [(src, output_path(src, dest))]

    templates = discover_templates(src)
    if not templates:
        suffixes = ', '.join(f'*{s}' for s in TEMPLATE_SUFFIXES)
        raise RenderError(str(src), f'no templates found ({suffixes})')
    out_root = Path(dest) if dest is not None else Path.cwd()
    return [(t, out_root / t.relative_to(src).parent / strip_template_suffix(t.name)) for t in templates]


def check(palette: ResolvedPalette, src: Path) -> list[Path]:
    """Render without writing. Returns the templates that were checked."""
    pairs = plan_outputs(src, None)
    for template, _out in pairs:
        render_template(palette, template)
    return [template for template, _out in pairs]


def build(palette: ResolvedPalette, src: Path, dest: Path | None = None) -> list[Path]:
    """Render and write. Returns the output paths written."""
    rendered = [(out, render_template(palette, template)) for template, out in plan_outputs(src, dest)]
    for out, text in rendered:
        try:
            out.parent.mkdir(parents=True, exist_ok=True)
            out.write_text(text, encoding='utf-8')
        except OSError as exc:
            raise RenderError(str(out), f'cannot write output: {exc.strerror or exc}') from exc
    return [out for out, _text in rendered]
