"""Pydantic schemas for specification documents and interpreter outputs."""

from screenspec.schemas.document import (
    ButtonComponent,
    ConditionSpec,
    ImageComponent,
    RuleScope,
    RuleSpec,
    ScreenNotFoundError,
    ScreenSpec,
    SpecificationDocument,
    StartOperationStep,
    TextComponent,
    TextFieldComponent,
    TransitionSpec,
    UnknownComponent,
    UnknownStep,
    ValidateFieldsStep,
)
from screenspec.schemas.state import EngineResult, RuntimeState
from screenspec.schemas.trace import TraceAction, TraceStep
from screenspec.schemas.view import ComponentView, ViewSnapshot

__all__ = [
    "ButtonComponent",
    "ComponentView",
    "ConditionSpec",
    "EngineResult",
    "ImageComponent",
    "RuleScope",
    "RuleSpec",
    "RuntimeState",
    "ScreenNotFoundError",
    "ScreenSpec",
    "SpecificationDocument",
    "StartOperationStep",
    "TextComponent",
    "TextFieldComponent",
    "TraceAction",
    "TraceStep",
    "TransitionSpec",
    "UnknownComponent",
    "UnknownStep",
    "ValidateFieldsStep",
    "ViewSnapshot",
]
