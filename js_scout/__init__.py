"""
JsScout package initializer.
Defines package version and exposes CLI.
"""
__version__ = "1.0.2"

from .cli import cli  # экспорт для pytest
