"""FastAPI dependencies for the interpreter host.

The host serves a single bundle and a single session. ``create_app`` installs
them up front; otherwise they are loaded lazily from settings on first use.
"""

import logging
import threading
from typing import Optional

from screenspec.runtime.document_loader import Bundle, load_bundle
from screenspec.runtime.session import InterpreterSession
from screenspec.startup import ensure_initialized

logger = logging.getLogger(__name__)

_bundle: Optional[Bundle] = None
_session: Optional[InterpreterSession] = None

# Sync endpoints run in a thread pool; one event is applied at a time.
session_lock = threading.Lock()


def set_bundle(bundle: Optional[Bundle]) -> None:
    """Install (or clear) the served bundle and start a fresh session."""
    global _bundle, _session
    _bundle = bundle
    _session = InterpreterSession(bundle.document, assets=bundle.assets) if bundle else None


def get_bundle() -> Bundle:
    """Get the served bundle, loading it from settings if needed.

    Raises:
        DocumentLoadError: If the configured bundle cannot be loaded.
    """
    if _bundle is None:
        settings = ensure_initialized().settings
        logger.info(f"Loading bundle from {settings.bundle_dir}")
        set_bundle(load_bundle(settings.bundle_dir, settings))
    return _bundle


def get_session() -> InterpreterSession:
    """Get the session singleton."""
    if _session is None:
        get_bundle()
    return _session
