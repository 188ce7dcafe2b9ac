"""Test fixtures module."""

from .bundle_fixtures import (
    FIXTURE_BUNDLE_DIR,
    button,
    make_document,
    temporary_bundle,
    text_field,
)

__all__ = [
    "FIXTURE_BUNDLE_DIR",
    "button",
    "make_document",
    "temporary_bundle",
    "text_field",
]
