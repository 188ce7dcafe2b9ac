"""Pydantic schemas for rule-engine execution traces."""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class TraceAction(str, Enum):
    """What happened at one point of an event's rule chain."""

    MATCHED = "matched"  # Rule selected and guards passed
    SKIPPED = "skipped"  # Rule guards failed
    VALIDATED = "validated"  # Field passed validation
    FAILED = "failed"  # Field failed validation
    NAVIGATED = "navigated"  # Transition found and committed
    UNRESOLVED = "unresolved"  # Something referenced could not be found
    IGNORED = "ignored"  # Unsupported step tag
    HALTED = "halted"  # stop_on_error aborted the chain


class TraceStep(BaseModel):
    """One record in an event's execution trace."""

    stage: str = Field(..., description="Engine stage: rule, validate_fields, start_operation, ...")
    action: TraceAction
    reasoning: str = Field(..., description="Human-readable explanation")
    rule_id: Optional[str] = Field(None, description="Rule being executed, if any")
    detail: Optional[Dict[str, Any]] = None
