"""
Document Linter - static checks over a loaded specification document.

Schema validation already rejects broken references (unknown screens,
duplicate ids). The linter reports what is legal but will silently do
nothing at runtime:
- Screens that can never become active
- Transitions whose event no operation ever emits
- validate_fields keys with no text field to validate
- Rules listening for events no component raises
- Components, steps and comparators this engine does not support

Findings are warnings: the interpreter runs these documents, it just skips
the affected parts.
"""

import logging
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Set

from screenspec.runtime.conditions import COMPARATORS
from screenspec.runtime.session import CLICK_EVENT_SUFFIX
from screenspec.schemas.document import (
    RuleScope,
    RuleSpec,
    ScreenSpec,
    SpecificationDocument,
    StartOperationStep,
    UnknownComponent,
    UnknownStep,
    ValidateFieldsStep,
)

logger = logging.getLogger(__name__)


class FindingType(str, Enum):
    """Types of lint findings."""
    UNREACHABLE_SCREEN = "UNREACHABLE_SCREEN"
    UNUSED_TRANSITION = "UNUSED_TRANSITION"
    UNBOUND_FIELD = "UNBOUND_FIELD"
    ORPHAN_EVENT = "ORPHAN_EVENT"
    UNSUPPORTED_COMPONENT = "UNSUPPORTED_COMPONENT"
    UNSUPPORTED_STEP = "UNSUPPORTED_STEP"
    UNSUPPORTED_COMPARATOR = "UNSUPPORTED_COMPARATOR"


@dataclass
class LintFinding:
    """Single lint finding."""
    type: FindingType
    message: str
    location: str
    rule_id: Optional[str] = None
    screen_id: Optional[str] = None


@dataclass
class LintReport:
    """All findings for one document."""
    findings: List[LintFinding]

    @property
    def summary(self) -> Dict[str, int]:
        counts: Dict[str, int] = {"total": len(self.findings)}
        for finding in self.findings:
            counts[finding.type.value] = counts.get(finding.type.value, 0) + 1
        return counts

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "summary": self.summary,
            "findings": [{**asdict(f), "type": f.type.value} for f in self.findings],
        }


def _screens_in_scope(document: SpecificationDocument, rule: RuleSpec) -> List[ScreenSpec]:
    if rule.scope == RuleScope.SCREEN:
        return [s for s in document.screens if s.id == rule.screen_id]
    return list(document.screens)


def _check_reachability(document: SpecificationDocument) -> List[LintFinding]:
    findings = []
    if not document.screens:
        return findings

    reachable: Set[str] = {document.initial_screen_id}
    frontier = [document.initial_screen_id]
    while frontier:
        current = frontier.pop()
        for transition in document.transitions:
            if transition.from_screen == current and transition.to_screen not in reachable:
                reachable.add(transition.to_screen)
                frontier.append(transition.to_screen)

    for screen in document.screens:
        if screen.id not in reachable:
            findings.append(LintFinding(
                type=FindingType.UNREACHABLE_SCREEN,
                message=f"Screen '{screen.id}' is not reachable from the initial screen",
                location=f"screens[{screen.id}]",
                screen_id=screen.id,
            ))
    return findings


def _check_transitions(document: SpecificationDocument) -> List[LintFinding]:
    emitted: Set[str] = set()
    for rule in document.rules:
        for step in rule.steps:
            if isinstance(step, StartOperationStep) and step.success_event:
                emitted.add(step.success_event)

    findings = []
    for transition in document.transitions:
        if transition.event not in emitted:
            findings.append(LintFinding(
                type=FindingType.UNUSED_TRANSITION,
                message=f"No operation emits '{transition.event}' used by transition '{transition.id}'",
                location=f"transitions[{transition.id}]",
            ))
    return findings


def _check_rules(document: SpecificationDocument) -> List[LintFinding]:
    findings = []

    for rule in document.rules:
        screens = _screens_in_scope(document, rule)

        if rule.on_event.endswith(CLICK_EVENT_SUFFIX):
            component_id = rule.on_event[: -len(CLICK_EVENT_SUFFIX)]
            raised = any(screen.find_component(component_id) for screen in screens)
        else:
            raised = False
        if not raised:
            findings.append(LintFinding(
                type=FindingType.ORPHAN_EVENT,
                message=f"No component raises '{rule.on_event}' where rule '{rule.id}' applies",
                location=f"rules[{rule.id}].on_event",
                rule_id=rule.id,
            ))

        for condition in rule.when:
            if condition.comparator not in COMPARATORS:
                findings.append(LintFinding(
                    type=FindingType.UNSUPPORTED_COMPARATOR,
                    message=f"Comparator '{condition.comparator}' is not supported (evaluates to true)",
                    location=f"rules[{rule.id}].when",
                    rule_id=rule.id,
                ))

        for index, step in enumerate(rule.steps):
            if isinstance(step, UnknownStep):
                findings.append(LintFinding(
                    type=FindingType.UNSUPPORTED_STEP,
                    message=f"Step type '{step.type}' is not supported and will be skipped",
                    location=f"rules[{rule.id}].steps[{index}]",
                    rule_id=rule.id,
                ))
            elif isinstance(step, ValidateFieldsStep):
                for key in step.fields:
                    if not any(screen.find_text_field(key) for screen in screens):
                        findings.append(LintFinding(
                            type=FindingType.UNBOUND_FIELD,
                            message=f"No text field bound to '{key}' where rule '{rule.id}' applies",
                            location=f"rules[{rule.id}].steps[{index}].fields",
                            rule_id=rule.id,
                        ))

    return findings


def _check_components(document: SpecificationDocument) -> List[LintFinding]:
    findings = []
    for screen in document.screens:
        for component in screen.components:
            if isinstance(component, UnknownComponent):
                findings.append(LintFinding(
                    type=FindingType.UNSUPPORTED_COMPONENT,
                    message=f"Component type '{component.type}' is not supported",
                    location=f"screens[{screen.id}].components[{component.id}]",
                    screen_id=screen.id,
                ))
    return findings


def lint_document(document: SpecificationDocument) -> LintReport:
    """
    Run every check over a document.

    Args:
        document: Validated specification document

    Returns:
        LintReport with findings in check order
    """
    findings: List[LintFinding] = []
    findings.extend(_check_reachability(document))
    findings.extend(_check_transitions(document))
    findings.extend(_check_rules(document))
    findings.extend(_check_components(document))

    logger.debug(f"Lint finished with {len(findings)} findings")
    return LintReport(findings=findings)
