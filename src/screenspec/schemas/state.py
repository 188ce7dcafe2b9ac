"""Mutable runtime state and rule-engine results."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from screenspec.schemas.trace import TraceStep


@dataclass
class RuntimeState:
    """State owned by an interpreter session.

    ``values`` persist across screen changes; ``errors`` are reset on every
    successful navigation.
    """

    active_screen_id: str
    values: Dict[str, str] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)


@dataclass
class EngineResult:
    """Outcome of one rule-engine invocation, ready to be committed."""

    values: Dict[str, str]
    errors: Dict[str, str]
    navigated_to: Optional[str] = None
    halted: bool = False
    rules_matched: int = 0
    trace: List[TraceStep] = field(default_factory=list)

    @property
    def navigation_requested(self) -> bool:
        """True when a navigate step resolved a transition during this run."""
        return self.navigated_to is not None
