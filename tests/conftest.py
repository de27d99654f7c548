"""Shared fixtures: the sample palette as decoded TOML and resolved."""

import copy
import tomllib
from pathlib import Path

import pytest
from veneer.core.palette import load_and_resolve
from veneer.core.types import ResolvedPalette

FIXTURES_DIR = Path(__file__).parent / 'fixtures'
SAMPLE_PALETTE = FIXTURES_DIR / 'veneer.toml'
TEMPLATES_DIR = FIXTURES_DIR / 'templates'

with open(SAMPLE_PALETTE, 'rb') as _f:
    _SAMPLE_RAW = tomllib.load(_f)


@pytest.fixture
def raw_palette() -> dict:
    """A fresh, mutable copy of the decoded sample palette."""
    return copy.deepcopy(_SAMPLE_RAW)


@pytest.fixture
def palette(raw_palette: dict) -> ResolvedPalette:
    return load_and_resolve(raw_palette)
