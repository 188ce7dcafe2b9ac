"""Interpreter session - owner of the runtime state.

The session is the only writer of the RuntimeState. Each entry point runs to
completion before the next one starts; rule-engine results are committed in
one go, so the state is never observed half-updated.

Entry points:
- on_field_change: a text field was edited (re-validates that field only)
- on_action_triggered: an action component was activated ("<id>.click")

The host-protocol helpers (input_change, button_click) address components by
(screen id, component id) and return a fresh snapshot, which is what a
remote view layer needs.
"""

import logging
from typing import Optional

from screenspec.runtime.assets import AssetResolver
from screenspec.runtime.rule_engine import RuleEngine
from screenspec.runtime.templating import render_template
from screenspec.runtime.validators import validate_field
from screenspec.schemas.document import (
    BaseComponent,
    ImageComponent,
    ScreenSpec,
    SpecificationDocument,
    TextComponent,
    TextFieldComponent,
)
from screenspec.schemas.state import EngineResult, RuntimeState
from screenspec.schemas.view import ComponentView, ViewSnapshot

logger = logging.getLogger(__name__)

CLICK_EVENT_SUFFIX = ".click"


class InterpreterSession:
    """Runtime state plus the operations that mutate it."""

    def __init__(
        self,
        document: SpecificationDocument,
        assets: Optional[AssetResolver] = None,
        engine: Optional[RuleEngine] = None,
    ):
        """Start a session on the document's initial screen with empty maps.

        Args:
            document: Specification document (shared, never modified)
            assets: Resolver for image components. Empty registry if not provided.
            engine: Rule engine. Built from the document if not provided.
        """
        self.document = document
        self.assets = assets or AssetResolver()
        self.engine = engine or RuleEngine(document)
        self.last_result: Optional[EngineResult] = None
        self.state = self._initial_state()

    def _initial_state(self) -> RuntimeState:
        screen_id = self.document.initial_screen_id
        self.document.find_screen(screen_id)
        return RuntimeState(active_screen_id=screen_id)

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------

    @property
    def active_screen_id(self) -> str:
        return self.state.active_screen_id

    @property
    def values(self):
        return self.state.values

    @property
    def errors(self):
        return self.state.errors

    @property
    def current_screen(self) -> ScreenSpec:
        return self.find_screen(self.state.active_screen_id)

    def find_screen(self, screen_id: str) -> ScreenSpec:
        """Pure lookup; raises ScreenNotFoundError for an unknown id."""
        return self.document.find_screen(screen_id)

    def reset(self) -> None:
        """Back to the initial screen with empty values and errors."""
        self.state = self._initial_state()
        self.last_result = None

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def on_field_change(self, component: BaseComponent, raw_value: str) -> None:
        """Store the new value and re-validate that single field."""
        key = component.binding_key
        self.state.values[key] = raw_value

        if not isinstance(component, TextFieldComponent):
            logger.debug(f"Value stored for non-text component '{component.id}', not validated")
            return

        message = validate_field(component, raw_value)
        if message:
            self.state.errors[key] = message
        else:
            self.state.errors.pop(key, None)

    def on_action_triggered(self, component: BaseComponent) -> EngineResult:
        """Run the rule chain for ``<component id>.click`` and commit the result."""
        event = f"{component.id}{CLICK_EVENT_SUFFIX}"
        result = self.engine.handle_event(
            self.state.active_screen_id,
            event,
            self.state.values,
            self.state.errors,
        )

        next_screen = result.navigated_to if result.navigation_requested else self.state.active_screen_id
        self.state = RuntimeState(
            active_screen_id=next_screen,
            values=result.values,
            errors=result.errors,
        )
        self.last_result = result

        if result.navigation_requested:
            logger.info(f"Navigated to screen '{result.navigated_to}' after '{event}'")
        return result

    # ------------------------------------------------------------------
    # Host protocol: (screen id, component id) addressing
    # ------------------------------------------------------------------

    def input_change(self, screen_id: str, field_id: str, value: str) -> ViewSnapshot:
        """Apply a field edit addressed by ids and return the new view."""
        component = self.find_screen(screen_id).find_component(field_id)
        if component is None:
            logger.warning(f"Component '{field_id}' not found on screen '{screen_id}'")
        else:
            self.on_field_change(component, value)
        return self.snapshot()

    def button_click(self, screen_id: str, button_id: str) -> ViewSnapshot:
        """Trigger an action addressed by ids and return the new view."""
        screen = self.find_screen(screen_id)
        if screen_id != self.state.active_screen_id:
            logger.warning(f"Click on '{button_id}' for inactive screen '{screen_id}' ignored")
            return self.snapshot()

        component = screen.find_component(button_id)
        if component is None:
            logger.warning(f"Component '{button_id}' not found on screen '{screen_id}'")
        else:
            self.on_action_triggered(component)
        return self.snapshot()

    # ------------------------------------------------------------------
    # Render-ready view
    # ------------------------------------------------------------------

    def snapshot(self) -> ViewSnapshot:
        """Render-ready view of the active screen."""
        screen = self.current_screen
        return ViewSnapshot(
            screen_id=screen.id,
            title=screen.title,
            layout=screen.layout.model_dump(exclude_none=True),
            components=[self._component_view(component) for component in screen.components],
            values=dict(self.state.values),
            errors=dict(self.state.errors),
        )

    def _component_view(self, component: BaseComponent) -> ComponentView:
        view = ComponentView(
            id=component.id,
            type=getattr(component, "type", "unknown"),
            props=component.model_dump(exclude_none=True),
        )

        if isinstance(component, TextFieldComponent):
            key = component.binding_key
            view.binding_key = key
            view.value = self.state.values.get(key, "")
            view.error = self.state.errors.get(key)
        elif isinstance(component, TextComponent):
            view.text = render_template(component.text, self.state.values)
        elif isinstance(component, ImageComponent):
            view.src = self.assets.resolve(component)

        return view
