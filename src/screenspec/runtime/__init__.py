"""
Runtime components of the specification interpreter.

Leaf-first:
1. Field validation - validators
2. Guard conditions - conditions
3. Template interpolation - templating
4. Image assets - assets
5. Transitions - navigation
6. Rule chains - rule_engine
7. Runtime state and entry points - session

The Streamlit painter (widget_factory, streamlit_app) is not imported here so
that the interpreter can be used without a UI toolkit loaded.
"""

from screenspec.runtime.assets import AssetRegistry, AssetResolver
from screenspec.runtime.conditions import evaluate_condition, evaluate_guards
from screenspec.runtime.document_loader import Bundle, DocumentLoadError, load_bundle, load_document
from screenspec.runtime.navigation import NavigationResolver
from screenspec.runtime.rule_engine import RuleEngine
from screenspec.runtime.session import InterpreterSession
from screenspec.runtime.templating import render_template
from screenspec.runtime.validators import validate_field

__all__ = [
    "AssetRegistry",
    "AssetResolver",
    "Bundle",
    "DocumentLoadError",
    "InterpreterSession",
    "NavigationResolver",
    "RuleEngine",
    "evaluate_condition",
    "evaluate_guards",
    "load_bundle",
    "load_document",
    "render_template",
    "validate_field",
]
