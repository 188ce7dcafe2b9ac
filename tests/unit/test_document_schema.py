"""Tests for the specification document schema."""

import pytest
from pydantic import ValidationError

from fixtures.bundle_fixtures import button, make_document, text_field
from screenspec.schemas.document import (
    ButtonComponent,
    ImageComponent,
    RuleScope,
    ScreenNotFoundError,
    SpacerComponent,
    StartOperationStep,
    TableComponent,
    TextComponent,
    TextFieldComponent,
    UnknownComponent,
    UnknownStep,
    ValidateFieldsStep,
)


class TestComponentParsing:
    def test_login_components_are_typed(self, login_document):
        login = login_document.find_screen("login")
        assert [type(c) for c in login.components] == [
            ImageComponent,
            TextComponent,
            TextFieldComponent,
            TextFieldComponent,
            SpacerComponent,
            ButtonComponent,
        ]
        assert isinstance(login_document.find_screen("home").components[1], TableComponent)

    def test_unknown_component_tag_does_not_fail(self):
        doc = make_document([{"id": "s", "components": [{"id": "c", "type": "map_view", "zoom": 3}]}])
        component = doc.screens[0].components[0]
        assert isinstance(component, UnknownComponent)
        assert component.type == "map_view"

    def test_missing_component_tag_is_unknown(self):
        doc = make_document([{"id": "s", "components": [{"id": "c"}]}])
        assert isinstance(doc.screens[0].components[0], UnknownComponent)

    def test_null_required_means_optional(self):
        doc = make_document([{"id": "s", "components": [text_field("f", required=None)]}])
        assert doc.screens[0].components[0].required is False

    def test_binding_key_prefers_data_model(self):
        assert TextFieldComponent(id="f", data_model="user.email").binding_key == "user.email"
        assert TextFieldComponent(id="f").binding_key == "f"

    def test_documents_are_immutable(self, login_document):
        with pytest.raises(ValidationError):
            login_document.screens[0].title = "changed"


class TestRuleParsing:
    def test_steps_are_typed(self, login_document):
        steps = login_document.rules[0].steps
        assert isinstance(steps[0], ValidateFieldsStep)
        assert steps[0].stop_on_error is True
        assert isinstance(steps[1], StartOperationStep)
        assert steps[1].error_event == "login_error"

    def test_unknown_step_tag_does_not_fail(self):
        doc = make_document([{"id": "s"}], rules=[
            {"id": "r", "on_event": "x", "steps": [{"type": "play_sound", "file": "beep"}]},
        ])
        assert isinstance(doc.rules[0].steps[0], UnknownStep)

    def test_null_scope_when_and_steps(self):
        doc = make_document([{"id": "s"}], rules=[
            {"id": "r", "scope": None, "on_event": "x", "when": None, "steps": None},
        ])
        rule = doc.rules[0]
        assert rule.scope == RuleScope.GLOBAL
        assert rule.when == []
        assert rule.steps == []

    def test_null_step_flags_use_defaults(self):
        doc = make_document([{"id": "s"}], rules=[
            {"id": "r", "on_event": "x",
             "steps": [{"type": "validate_fields", "fields": [], "stop_on_error": None, "show_errors": None}]},
        ])
        step = doc.rules[0].steps[0]
        assert step.stop_on_error is False
        assert step.show_errors is True

    def test_null_clear_stack(self):
        doc = make_document([{"id": "a"}], transitions=[
            {"id": "t", "event": "e", "from": "a", "to": "a", "clear_stack": None},
        ])
        assert doc.transitions[0].clear_stack is False

    def test_applies_to(self):
        doc = make_document([{"id": "a"}, {"id": "b"}], rules=[
            {"id": "r", "scope": "screen", "screen_id": "a", "on_event": "go.click"},
        ])
        rule = doc.rules[0]
        assert rule.applies_to("a", "go.click")
        assert not rule.applies_to("b", "go.click")
        assert not rule.applies_to("a", "other.click")


class TestDocumentInvariants:
    def test_duplicate_screen_ids(self):
        with pytest.raises(ValidationError, match="Duplicate screen id"):
            make_document([{"id": "a"}, {"id": "a"}])

    def test_duplicate_component_ids_on_one_screen(self):
        with pytest.raises(ValidationError, match="Duplicate component id"):
            make_document([{"id": "a", "components": [button("x"), text_field("x")]}])

    def test_same_component_id_on_two_screens_is_fine(self):
        doc = make_document([{"id": "a", "components": [button("x")]}, {"id": "b", "components": [button("x")]}])
        assert len(doc.screens) == 2

    def test_transition_to_unknown_screen(self):
        with pytest.raises(ValidationError, match="unknown screen 'ghost'"):
            make_document([{"id": "a"}], transitions=[{"id": "t", "event": "e", "from": "a", "to": "ghost"}])

    def test_screen_rule_with_unknown_screen(self):
        with pytest.raises(ValidationError, match="screen-scoped"):
            make_document([{"id": "a"}], rules=[
                {"id": "r", "scope": "screen", "screen_id": "ghost", "on_event": "x"},
            ])

    def test_unknown_login_screen(self):
        with pytest.raises(ValidationError, match="Initial screen"):
            make_document([{"id": "a"}], login_screen="ghost")


class TestLookup:
    def test_initial_screen(self, login_document):
        assert login_document.initial_screen_id == "login"

    def test_find_screen_unknown(self, login_document):
        with pytest.raises(ScreenNotFoundError) as exc_info:
            login_document.find_screen("nowhere")
        assert exc_info.value.screen_id == "nowhere"
        assert isinstance(exc_info.value, LookupError)

    def test_find_text_field(self, login_document):
        login = login_document.find_screen("login")
        assert login.find_text_field("user.password").id == "password_input"
        assert login.find_text_field("submit") is None
        assert login.find_component("submit").text == "Entrar"

    def test_transition_aliases(self, login_document):
        transition = login_document.transitions[1]
        assert (transition.from_screen, transition.to_screen, transition.clear_stack) == ("home", "login", True)
