"""
FastAPI host for specification-driven forms.

Serves one bundle and one interpreter session so a remote view layer can
paint screens and forward user events:

    GET  /api/view          current snapshot
    POST /api/view/input    field edit
    POST /api/view/click    button press
    POST /api/view/reset    back to the initial screen
    GET  /api/health
"""

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from screenspec import __version__
from screenspec.api.dependencies import set_bundle
from screenspec.api.routers import system, view
from screenspec.runtime.document_loader import Bundle


def create_app(bundle: Optional[Bundle] = None) -> FastAPI:
    """Build the app, optionally pinned to an already-loaded bundle."""
    if bundle is not None:
        set_bundle(bundle)

    api = FastAPI(
        title="Screenspec Interpreter API",
        description="Screen snapshots and event handling for declarative forms",
        version=__version__,
    )

    # Local dev frontends
    api.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173", "http://localhost:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api.include_router(system.router)
    api.include_router(view.router)
    return api


app = create_app()
