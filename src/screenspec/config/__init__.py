"""Interpreter configuration management."""

from screenspec.config.settings import (
    InterpreterSettings,
    load_settings,
)

__all__ = [
    "InterpreterSettings",
    "load_settings",
]
