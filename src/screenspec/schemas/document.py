"""Pydantic schemas for the specification document.

The document is owned by whoever loaded it and is read-only to the
interpreter. All models are frozen so that a single document can be shared
by any number of sessions without copying.

Components and rule steps are tagged unions discriminated on ``type``.
Unrecognised tags never fail validation: they are routed to
``UnknownComponent`` / ``UnknownStep`` so that documents written for a newer
engine still load, and the runtime skips what it does not understand.
"""

from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, field_validator, model_validator


class ScreenNotFoundError(LookupError):
    """Raised when a screen identifier is not present in the document.

    This is the only unrecoverable lookup in the interpreter.
    """

    def __init__(self, screen_id: str):
        self.screen_id = screen_id
        super().__init__(f"Screen not found: {screen_id}")


_SPEC_CONFIG = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)
_OPEN_SPEC_CONFIG = ConfigDict(frozen=True, extra="allow", populate_by_name=True)


class LayoutSpec(BaseModel):
    """Layout hints for a screen. Opaque to the engine."""

    model_config = _OPEN_SPEC_CONFIG

    type: str = Field("vertical", description="Orientation: vertical or horizontal")
    padding: Optional[str] = None
    horizontal_alignment: Optional[str] = None
    spacing: Optional[str] = None
    align: Optional[str] = None


# ------------------------------------------------------------------------------
# Components
# ------------------------------------------------------------------------------


class BaseComponent(BaseModel):
    """Fields shared by every component variant."""

    model_config = _SPEC_CONFIG

    id: str = Field(..., min_length=1, description="Component id, unique within its screen")

    @property
    def binding_key(self) -> str:
        """Key used to read/write this component's value in the value store."""
        return self.id


class ImageComponent(BaseComponent):
    type: Literal["image"] = "image"
    file: Optional[str] = Field(None, description="Inline data URI, base64 text, or *.b64.txt reference")
    fit_mode: Optional[str] = None
    size: Optional[str] = None


class FieldValidations(BaseModel):
    """Validation constraints attached to a text field."""

    model_config = _OPEN_SPEC_CONFIG

    min_length: Optional[int] = Field(None, ge=0)


class TextFieldComponent(BaseComponent):
    type: Literal["text_field"] = "text_field"
    label: Optional[str] = None
    placeholder: Optional[str] = None
    data_model: Optional[str] = Field(None, description="Binding key into the value store")
    data_type: Optional[str] = Field(None, description="Hint: email, password, string, ...")
    required: bool = False
    validations: FieldValidations = Field(default_factory=FieldValidations)

    @field_validator("required", mode="before")
    @classmethod
    def _none_is_false(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("validations", mode="before")
    @classmethod
    def _none_means_no_constraints(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def binding_key(self) -> str:
        return self.data_model or self.id


class ButtonComponent(BaseComponent):
    type: Literal["button"] = "button"
    text: str = ""
    icon: Optional[str] = None
    style: Optional[str] = None
    width: Optional[str] = None
    on_click: List[Dict[str, Any]] = Field(default_factory=list)


class TextComponent(BaseComponent):
    type: Literal["text"] = "text"
    text: str = Field("", description="Template; {{ key }} tokens are interpolated from values")
    text_variant: Optional[str] = None
    align: Optional[str] = None


class SpacerComponent(BaseComponent):
    type: Literal["spacer"] = "spacer"
    height: Optional[float] = None


class TableComponent(BaseComponent):
    type: Literal["table"] = "table"
    columns: List[Dict[str, Any]] = Field(default_factory=list)
    rows: List[Dict[str, Any]] = Field(default_factory=list)


class UnknownComponent(BaseComponent):
    """Any component whose ``type`` this engine does not know."""

    model_config = _OPEN_SPEC_CONFIG

    type: str = "unknown"


COMPONENT_TYPES = frozenset({"image", "text_field", "button", "text", "spacer", "table"})


def _component_tag(value: Any) -> str:
    tag = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    return tag if tag in COMPONENT_TYPES else "unknown"


Component = Annotated[
    Union[
        Annotated[ImageComponent, Tag("image")],
        Annotated[TextFieldComponent, Tag("text_field")],
        Annotated[ButtonComponent, Tag("button")],
        Annotated[TextComponent, Tag("text")],
        Annotated[SpacerComponent, Tag("spacer")],
        Annotated[TableComponent, Tag("table")],
        Annotated[UnknownComponent, Tag("unknown")],
    ],
    Discriminator(_component_tag),
]


# ------------------------------------------------------------------------------
# Rules
# ------------------------------------------------------------------------------


class ConditionSpec(BaseModel):
    """Guard predicate over a single bound value."""

    model_config = _SPEC_CONFIG

    field: str = Field(..., description="Binding key to read")
    comparator: str = Field(..., description="is_not_empty, is_empty, ...")
    value: Any = None


class ValidateFieldsStep(BaseModel):
    model_config = _SPEC_CONFIG

    type: Literal["validate_fields"] = "validate_fields"
    fields: List[str] = Field(default_factory=list, description="Binding keys, validated in order")
    stop_on_error: bool = False
    show_errors: bool = True

    @field_validator("stop_on_error", mode="before")
    @classmethod
    def _none_is_false(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("show_errors", mode="before")
    @classmethod
    def _none_is_true(cls, value: Any) -> Any:
        return True if value is None else value


class StartOperationStep(BaseModel):
    model_config = _SPEC_CONFIG

    type: Literal["start_operation"] = "start_operation"
    operation: str = ""
    params: Dict[str, Any] = Field(default_factory=dict)
    success_event: Optional[str] = None
    # Reserved: no execution path consumes it.
    error_event: Optional[str] = None


class UnknownStep(BaseModel):
    """Any rule step whose ``type`` this engine does not know."""

    model_config = _OPEN_SPEC_CONFIG

    type: str = "unknown"


STEP_TYPES = frozenset({"validate_fields", "start_operation"})


def _step_tag(value: Any) -> str:
    tag = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    return tag if tag in STEP_TYPES else "unknown"


RuleStep = Annotated[
    Union[
        Annotated[ValidateFieldsStep, Tag("validate_fields")],
        Annotated[StartOperationStep, Tag("start_operation")],
        Annotated[UnknownStep, Tag("unknown")],
    ],
    Discriminator(_step_tag),
]


class RuleScope(str, Enum):
    """Where a rule listens for events."""

    GLOBAL = "global"
    SCREEN = "screen"


class RuleSpec(BaseModel):
    """Event-triggered rule: guard conditions followed by ordered steps.

    Rules have no priority; they run in document declaration order.
    """

    model_config = _SPEC_CONFIG

    id: str
    scope: RuleScope = RuleScope.GLOBAL
    screen_id: Optional[str] = None
    on_event: str
    when: List[ConditionSpec] = Field(default_factory=list)
    steps: List[RuleStep] = Field(default_factory=list)

    @field_validator("scope", mode="before")
    @classmethod
    def _missing_scope_is_global(cls, value: Any) -> Any:
        return RuleScope.GLOBAL if value is None else value

    @field_validator("when", "steps", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    def applies_to(self, screen_id: str, event: str) -> bool:
        """Whether this rule reacts to ``event`` raised on ``screen_id``."""
        if self.on_event != event:
            return False
        if self.scope == RuleScope.GLOBAL:
            return True
        return self.screen_id == screen_id


# ------------------------------------------------------------------------------
# Screens and transitions
# ------------------------------------------------------------------------------


class ScreenSpec(BaseModel):
    model_config = _SPEC_CONFIG

    id: str = Field(..., min_length=1)
    title: Optional[str] = None
    description: Optional[str] = None
    layout: LayoutSpec = Field(default_factory=LayoutSpec)
    components: List[Component] = Field(default_factory=list)

    # Carried for completeness; the interpreter does not act on them.
    targets: List[str] = Field(default_factory=list)
    access_control: Dict[str, Any] = Field(default_factory=dict)
    lifecycle_events: Dict[str, Any] = Field(default_factory=dict)
    data_sources: List[Dict[str, Any]] = Field(default_factory=list)

    def find_component(self, component_id: str) -> Optional[BaseComponent]:
        for component in self.components:
            if component.id == component_id:
                return component
        return None

    def find_text_field(self, binding_key: str) -> Optional[TextFieldComponent]:
        """First text field on this screen bound to ``binding_key``."""
        for component in self.components:
            if isinstance(component, TextFieldComponent) and component.binding_key == binding_key:
                return component
        return None


class TransitionSpec(BaseModel):
    """Named edge between two screens, selected by event and source screen."""

    model_config = _SPEC_CONFIG

    id: str
    event: str
    from_screen: str = Field(..., alias="from")
    to_screen: str = Field(..., alias="to")
    clear_stack: bool = False

    @field_validator("clear_stack", mode="before")
    @classmethod
    def _none_is_false(cls, value: Any) -> Any:
        return False if value is None else value


# ------------------------------------------------------------------------------
# Document root
# ------------------------------------------------------------------------------


class AccessRules(BaseModel):
    model_config = _OPEN_SPEC_CONFIG

    login_screen: Optional[str] = None
    unauthorized_screen: Optional[str] = None


class OperationalRules(BaseModel):
    model_config = _OPEN_SPEC_CONFIG

    access: Optional[AccessRules] = None


class DocumentMeta(BaseModel):
    model_config = _OPEN_SPEC_CONFIG

    dsl_version: Optional[str] = None
    bundle_version: Optional[str] = None
    min_engine_version: Optional[str] = None
    app_name: Optional[str] = None
    environment: Optional[str] = None


class SpecificationDocument(BaseModel):
    """Root of a specification document.

    Invariants (checked on construction):
        - screen ids are unique
        - component ids are unique within a screen
        - every transition's ``from``/``to`` names an existing screen
        - every screen-scoped rule names an existing screen
    """

    model_config = _SPEC_CONFIG

    meta: DocumentMeta = Field(default_factory=DocumentMeta)
    theme: Optional[Dict[str, Any]] = None
    device_profiles: List[Dict[str, Any]] = Field(default_factory=list)
    operations_catalog: List[Dict[str, Any]] = Field(default_factory=list)
    operational_rules: OperationalRules = Field(default_factory=OperationalRules)
    screens: List[ScreenSpec] = Field(default_factory=list)
    rules: List[RuleSpec] = Field(default_factory=list)
    transitions: List[TransitionSpec] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_references(self) -> "SpecificationDocument":
        screen_ids = set()
        for screen in self.screens:
            if screen.id in screen_ids:
                raise ValueError(f"Duplicate screen id: {screen.id}")
            screen_ids.add(screen.id)

            component_ids = set()
            for component in screen.components:
                if component.id in component_ids:
                    raise ValueError(
                        f"Duplicate component id '{component.id}' on screen '{screen.id}'"
                    )
                component_ids.add(component.id)

        for transition in self.transitions:
            for endpoint in (transition.from_screen, transition.to_screen):
                if endpoint not in screen_ids:
                    raise ValueError(
                        f"Transition '{transition.id}' references unknown screen '{endpoint}'"
                    )

        for rule in self.rules:
            if rule.scope == RuleScope.SCREEN and rule.screen_id not in screen_ids:
                raise ValueError(
                    f"Rule '{rule.id}' is screen-scoped but references unknown screen '{rule.screen_id}'"
                )

        access = self.operational_rules.access
        if access and access.login_screen and access.login_screen not in screen_ids:
            raise ValueError(f"Initial screen '{access.login_screen}' is not defined")

        return self

    @property
    def initial_screen_id(self) -> str:
        """Configured login screen, else the first declared screen."""
        access = self.operational_rules.access
        if access and access.login_screen:
            return access.login_screen
        if not self.screens:
            raise ScreenNotFoundError("")
        return self.screens[0].id

    def find_screen(self, screen_id: str) -> ScreenSpec:
        """Look up a screen by id.

        Raises:
            ScreenNotFoundError: If no screen has this id.
        """
        for screen in self.screens:
            if screen.id == screen_id:
                return screen
        raise ScreenNotFoundError(screen_id)
