"""
screenspec - declarative multi-screen form interpreter.

Renders interactive forms purely from a specification document (screens,
components, rules and transitions) without any screen-specific code.
"""

__version__ = "0.1.0"

from screenspec.runtime.session import InterpreterSession
from screenspec.schemas.document import ScreenNotFoundError, SpecificationDocument

__all__ = [
    "InterpreterSession",
    "ScreenNotFoundError",
    "SpecificationDocument",
]
