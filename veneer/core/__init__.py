"""veneer.core — Foundation layer.

Contains the colour codec, palette document model, reference resolver,
template helpers, and the renderers built on them.
This module has NO dependencies on veneer.commands or veneer.registry.
Only stdlib, jinja2, numpy, and PIL are allowed here.
"""
