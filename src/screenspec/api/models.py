"""Request bodies for the view endpoints."""

from pydantic import BaseModel, Field


class InputChangeRequest(BaseModel):
    """A field edit addressed by screen and component id."""

    screen_id: str
    field_id: str
    value: str = ""


class ButtonClickRequest(BaseModel):
    """A button press addressed by screen and component id."""

    screen_id: str
    button_id: str


class HealthResponse(BaseModel):
    status: str = "healthy"
    version: str
    bundle_dir: str = Field("", description="Root of the bundle being served")
