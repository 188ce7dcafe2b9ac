"""Trace builder for rule-engine executions.

Accumulates TraceStep records as an event flows through its rule chain.
"""

from typing import Any, Dict, List, Optional

from screenspec.schemas.trace import TraceAction, TraceStep


class TraceBuilder:
    """Accumulates trace steps for a single event."""

    def __init__(self) -> None:
        self._steps: List[TraceStep] = []

    def add(
        self,
        stage: str,
        action: TraceAction,
        reasoning: str,
        rule_id: Optional[str] = None,
        detail: Optional[Dict[str, Any]] = None,
    ) -> "TraceBuilder":
        """Append a trace step."""
        self._steps.append(
            TraceStep(
                stage=stage,
                action=action,
                reasoning=reasoning,
                rule_id=rule_id,
                detail=detail,
            )
        )
        return self

    def build(self) -> List[TraceStep]:
        """Return the accumulated trace steps."""
        return list(self._steps)
