"""Rule engine for event-driven form logic.

For one event raised on one screen, the engine:
1. Selects candidate rules (global, or bound to the screen) reacting to the
   event, in document order
2. Skips rules whose guard conditions do not all hold on the working values
3. Runs each remaining rule's steps in order:
   - validate_fields: validate the listed fields, record/clear errors
   - start_operation: navigate via the operation's success_event
   - anything else: logged and ignored
4. Stops the WHOLE chain (not just the current rule) as soon as a
   validate_fields step with stop_on_error reports a failure

The engine never mutates its inputs. It works on copies of the values and
errors and returns them in an EngineResult for the caller to commit.
"""

import logging
from typing import Dict, List, Mapping, Optional, Tuple

from screenspec.runtime.conditions import evaluate_guards
from screenspec.runtime.navigation import NavigationResolver
from screenspec.runtime.trace import TraceBuilder
from screenspec.runtime.validators import validate_field
from screenspec.schemas.document import (
    RuleSpec,
    ScreenSpec,
    SpecificationDocument,
    StartOperationStep,
    ValidateFieldsStep,
)
from screenspec.schemas.state import EngineResult
from screenspec.schemas.trace import TraceAction

logger = logging.getLogger(__name__)


class RuleEngine:
    """Executes a document's rules for events raised on its screens.

    The engine holds no per-session state and can be shared by sessions
    using the same document.
    """

    def __init__(self, document: SpecificationDocument, navigator: Optional[NavigationResolver] = None):
        """Initialize the rule engine.

        Args:
            document: Specification document providing screens and rules
            navigator: Transition resolver. Built from the document if not provided.
        """
        self.document = document
        self.navigator = navigator or NavigationResolver(document.transitions)

    def select_rules(self, screen_id: str, event: str) -> List[RuleSpec]:
        """Rules reacting to ``event`` on ``screen_id``, in document order."""
        return [rule for rule in self.document.rules if rule.applies_to(screen_id, event)]

    def handle_event(
        self,
        screen_id: str,
        event: str,
        values: Mapping[str, str],
        errors: Mapping[str, str],
    ) -> EngineResult:
        """Run the rule chain for an event.

        Args:
            screen_id: Screen the event was raised on
            event: Event name (e.g. "submit.click")
            values: Current values (not modified)
            errors: Current errors (not modified)

        Returns:
            EngineResult with the working values/errors and the destination
            screen if a navigation happened

        Raises:
            ScreenNotFoundError: If ``screen_id`` is not in the document
        """
        screen = self.document.find_screen(screen_id)
        tb = TraceBuilder()

        working_values: Dict[str, str] = dict(values)
        working_errors: Dict[str, str] = dict(errors)

        candidates = self.select_rules(screen_id, event)
        if not candidates:
            logger.warning(f"No rules for event '{event}' on screen '{screen_id}'")
            tb.add("select", TraceAction.UNRESOLVED, f"No rules for event '{event}'",
                   detail={"screen_id": screen_id, "event": event})
            return EngineResult(values=working_values, errors=working_errors, trace=tb.build())

        navigated_to: Optional[str] = None
        halt_all = False
        matched = 0

        for rule in candidates:
            if rule.when and not evaluate_guards(rule.when, working_values):
                logger.debug(f"Rule '{rule.id}' skipped: guard conditions not met")
                tb.add("rule", TraceAction.SKIPPED, "Guard conditions not met", rule_id=rule.id)
                continue

            tb.add("rule", TraceAction.MATCHED, f"Rule matched event '{event}'", rule_id=rule.id)
            matched += 1

            for step in rule.steps:
                if isinstance(step, ValidateFieldsStep):
                    working_errors, has_errors = self._run_validate_fields(
                        step, rule, screen, working_values, working_errors, tb
                    )
                    if has_errors and step.stop_on_error:
                        halt_all = True
                        break

                elif isinstance(step, StartOperationStep):
                    destination = self._run_start_operation(step, rule, screen_id, tb)
                    if destination is not None:
                        navigated_to = destination
                        working_errors = {}

                else:
                    logger.warning(f"Unsupported step type '{step.type}' in rule '{rule.id}'")
                    tb.add("step", TraceAction.IGNORED, f"Unsupported step type '{step.type}'",
                           rule_id=rule.id)

            if halt_all:
                logger.debug(f"Rule chain for '{event}' halted by rule '{rule.id}'")
                tb.add("rule", TraceAction.HALTED, "Validation failed with stop_on_error; remaining rules skipped",
                       rule_id=rule.id)
                break

        return EngineResult(
            values=working_values,
            errors=working_errors,
            navigated_to=navigated_to,
            halted=halt_all,
            rules_matched=matched,
            trace=tb.build(),
        )

    def _run_validate_fields(
        self,
        step: ValidateFieldsStep,
        rule: RuleSpec,
        screen: ScreenSpec,
        values: Mapping[str, str],
        errors: Dict[str, str],
        tb: TraceBuilder,
    ) -> Tuple[Dict[str, str], bool]:
        """Validate each listed field; returns (new errors, any failure)."""
        new_errors = dict(errors)
        has_errors = False

        for binding_key in step.fields:
            component = screen.find_text_field(binding_key)
            if component is None:
                logger.warning(f"No text field bound to '{binding_key}' on screen '{screen.id}'")
                tb.add("validate_fields", TraceAction.UNRESOLVED, f"No text field bound to '{binding_key}'",
                       rule_id=rule.id, detail={"field": binding_key})
                continue

            message = validate_field(component, values.get(binding_key, ""))
            if message:
                new_errors[binding_key] = message
                has_errors = True
                tb.add("validate_fields", TraceAction.FAILED, message,
                       rule_id=rule.id, detail={"field": binding_key})
            else:
                new_errors.pop(binding_key, None)
                tb.add("validate_fields", TraceAction.VALIDATED, "Field is valid",
                       rule_id=rule.id, detail={"field": binding_key})

        return new_errors, has_errors

    def _run_start_operation(
        self,
        step: StartOperationStep,
        rule: RuleSpec,
        screen_id: str,
        tb: TraceBuilder,
    ) -> Optional[str]:
        """Fire-and-forget operation: only the success path is wired, to navigation."""
        if not step.success_event:
            logger.debug(f"Operation '{step.operation}' in rule '{rule.id}' has no success_event")
            return None

        destination = self.navigator.resolve(step.success_event, screen_id)
        if destination is None:
            tb.add("start_operation", TraceAction.UNRESOLVED,
                   f"No transition for '{step.success_event}' from '{screen_id}'",
                   rule_id=rule.id, detail={"operation": step.operation, "event": step.success_event})
            return None

        tb.add("start_operation", TraceAction.NAVIGATED, f"{screen_id} -> {destination}",
               rule_id=rule.id, detail={"operation": step.operation, "event": step.success_event})
        return destination
