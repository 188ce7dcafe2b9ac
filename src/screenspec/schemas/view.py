"""Render-ready view snapshots.

A snapshot is everything the rendering layer needs to paint the active
screen: the ordered component list with bound values, errors, interpolated
text and resolved image sources. It is also the payload returned by the HTTP
host, so the same shape is used in-process and over the wire.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ComponentView(BaseModel):
    """One component, resolved against the current values."""

    id: str
    type: str
    props: Dict[str, Any] = Field(default_factory=dict, description="Raw component definition")
    binding_key: Optional[str] = Field(None, description="Set for text fields")
    value: Optional[str] = Field(None, description="Bound value for text fields")
    error: Optional[str] = Field(None, description="Validation error for text fields")
    text: Optional[str] = Field(None, description="Interpolated text for text components")
    src: Optional[str] = Field(None, description="Displayable payload for images ('' if unresolved)")


class ViewSnapshot(BaseModel):
    """Active screen plus the value and error maps."""

    screen_id: str
    title: Optional[str] = None
    layout: Dict[str, Any] = Field(default_factory=dict)
    components: List[ComponentView] = Field(default_factory=list)
    values: Dict[str, str] = Field(default_factory=dict)
    errors: Dict[str, str] = Field(default_factory=dict)
