"""View router - the screen snapshot and the events that change it."""

import logging

from fastapi import APIRouter, HTTPException

from screenspec.api.dependencies import get_session, session_lock
from screenspec.api.models import ButtonClickRequest, InputChangeRequest
from screenspec.schemas.document import ScreenNotFoundError
from screenspec.schemas.view import ViewSnapshot

logger = logging.getLogger(__name__)

router = APIRouter(tags=["view"])


@router.get("/api/view", response_model=ViewSnapshot)
def get_view():
    """Render-ready snapshot of the active screen."""
    with session_lock:
        return get_session().snapshot()


@router.post("/api/view/input", response_model=ViewSnapshot)
def input_change(request: InputChangeRequest):
    """
    Apply a field edit.

    Unknown component ids are logged and leave the view unchanged; an unknown
    screen id is a 404.
    """
    with session_lock:
        try:
            return get_session().input_change(request.screen_id, request.field_id, request.value)
        except ScreenNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))


@router.post("/api/view/click", response_model=ViewSnapshot)
def button_click(request: ButtonClickRequest):
    """
    Trigger a button's action and run the matching rules.

    Returns the view after the rules ran, which may be a different screen.
    """
    with session_lock:
        try:
            return get_session().button_click(request.screen_id, request.button_id)
        except ScreenNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))


@router.post("/api/view/reset", response_model=ViewSnapshot)
def reset_view():
    """Return to the initial screen with empty values and errors."""
    with session_lock:
        session = get_session()
        session.reset()
        logger.info(f"Session reset to '{session.active_screen_id}'")
        return session.snapshot()
