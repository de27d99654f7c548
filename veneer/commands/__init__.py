"""Subcommand modules.

Every .py file in this package that defines a `command` object is
auto-registered by veneer.registry.discover().
"""
