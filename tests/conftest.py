"""
Pytest fixtures and configuration for screenspec tests.
Provides the fixture bundle, a validated login document and a fresh session.
"""

import copy
import json
import os

import pytest

from fixtures.bundle_fixtures import FIXTURE_BUNDLE_DIR
from screenspec.runtime.document_loader import load_bundle
from screenspec.runtime.session import InterpreterSession
from screenspec.schemas.document import SpecificationDocument
from screenspec.startup import reset_initialization


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Drop SCREENSPEC_* overrides and cached startup state around every test."""
    for name in list(os.environ):
        if name.startswith("SCREENSPEC_"):
            monkeypatch.delenv(name, raising=False)
    reset_initialization()
    yield
    reset_initialization()


@pytest.fixture
def bundle_dir():
    """Path to the checked-in login bundle."""
    return FIXTURE_BUNDLE_DIR


@pytest.fixture
def login_document_data():
    """Raw login document, safe to modify."""
    with open(FIXTURE_BUNDLE_DIR / "bundle.json", "r", encoding="utf-8") as f:
        return copy.deepcopy(json.load(f))


@pytest.fixture
def login_document(login_document_data):
    """Validated login document."""
    return SpecificationDocument.model_validate(login_document_data)


@pytest.fixture
def login_bundle(bundle_dir):
    """Loaded login bundle (document plus assets)."""
    return load_bundle(bundle_dir)


@pytest.fixture
def login_session(login_bundle):
    """Fresh session on the login screen."""
    return InterpreterSession(login_bundle.document, assets=login_bundle.assets)
