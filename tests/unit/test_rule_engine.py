"""Tests for rule selection and rule chain execution."""

import logging

import pytest

from fixtures.bundle_fixtures import button, make_document, text_field
from screenspec.runtime.rule_engine import RuleEngine
from screenspec.schemas.document import ScreenNotFoundError
from screenspec.schemas.trace import TraceAction


def _validate(fields, stop_on_error=False):
    return {"type": "validate_fields", "fields": fields, "stop_on_error": stop_on_error}


def _navigate(event, operation="op"):
    return {"type": "start_operation", "operation": operation, "success_event": event}


@pytest.fixture
def two_screen_screens():
    return [
        {
            "id": "form",
            "components": [
                text_field("name_input", data_model="name", required=True),
                text_field("email_input", data_model="email", data_type="email"),
                button("save"),
            ],
        },
        {"id": "done", "components": [button("back")]},
    ]


@pytest.fixture
def transitions():
    return [{"id": "t1", "event": "saved", "from": "form", "to": "done"}]


class TestSelectRules:
    def test_global_and_screen_rules_in_document_order(self, two_screen_screens):
        doc = make_document(two_screen_screens, rules=[
            {"id": "r_screen", "scope": "screen", "screen_id": "form", "on_event": "save.click"},
            {"id": "r_global", "scope": "global", "on_event": "save.click"},
            {"id": "r_other_screen", "scope": "screen", "screen_id": "done", "on_event": "save.click"},
            {"id": "r_other_event", "on_event": "back.click"},
        ])
        selected = RuleEngine(doc).select_rules("form", "save.click")
        assert [r.id for r in selected] == ["r_screen", "r_global"]

    def test_missing_scope_means_global(self, two_screen_screens):
        doc = make_document(two_screen_screens, rules=[{"id": "r", "on_event": "back.click"}])
        assert [r.id for r in RuleEngine(doc).select_rules("done", "back.click")] == ["r"]


class TestHandleEvent:
    def test_unknown_screen_is_fatal(self, two_screen_screens):
        doc = make_document(two_screen_screens)
        with pytest.raises(ScreenNotFoundError):
            RuleEngine(doc).handle_event("nowhere", "save.click", {}, {})

    def test_no_rules_returns_inputs_unchanged(self, two_screen_screens, caplog):
        doc = make_document(two_screen_screens)
        with caplog.at_level(logging.WARNING):
            result = RuleEngine(doc).handle_event("form", "save.click", {"name": "x"}, {"email": "bad"})
        assert result.values == {"name": "x"}
        assert result.errors == {"email": "bad"}
        assert result.navigated_to is None
        assert result.trace[0].action == TraceAction.UNRESOLVED
        assert "No rules" in caplog.text

    def test_inputs_are_not_mutated(self, two_screen_screens, transitions):
        doc = make_document(two_screen_screens, transitions=transitions, rules=[
            {"id": "r", "on_event": "save.click", "steps": [_validate(["name"])]},
        ])
        values, errors = {}, {}
        result = RuleEngine(doc).handle_event("form", "save.click", values, errors)
        assert result.errors == {"name": "Este campo es requerido"}
        assert errors == {}

    def test_valid_fields_clear_previous_errors(self, two_screen_screens):
        doc = make_document(two_screen_screens, rules=[
            {"id": "r", "on_event": "save.click", "steps": [_validate(["name"])]},
        ])
        result = RuleEngine(doc).handle_event(
            "form", "save.click", {"name": "Ana"}, {"name": "Este campo es requerido", "other": "kept"}
        )
        assert result.errors == {"other": "kept"}

    def test_failure_without_stop_continues_to_navigation(self, two_screen_screens, transitions):
        doc = make_document(two_screen_screens, transitions=transitions, rules=[
            {"id": "r", "on_event": "save.click", "steps": [_validate(["name"]), _navigate("saved")]},
        ])
        result = RuleEngine(doc).handle_event("form", "save.click", {}, {})
        assert result.navigated_to == "done"
        assert result.errors == {}
        assert result.halted is False

    def test_stop_on_error_halts_rest_of_rule(self, two_screen_screens, transitions):
        doc = make_document(two_screen_screens, transitions=transitions, rules=[
            {"id": "r", "on_event": "save.click",
             "steps": [_validate(["name"], stop_on_error=True), _navigate("saved")]},
        ])
        result = RuleEngine(doc).handle_event("form", "save.click", {}, {})
        assert result.navigated_to is None
        assert result.halted is True
        assert result.errors == {"name": "Este campo es requerido"}

    def test_stop_on_error_halts_later_rules(self, two_screen_screens, transitions):
        doc = make_document(two_screen_screens, transitions=transitions, rules=[
            {"id": "check", "on_event": "save.click", "steps": [_validate(["name"], stop_on_error=True)]},
            {"id": "go", "on_event": "save.click", "steps": [_navigate("saved")]},
        ])
        result = RuleEngine(doc).handle_event("form", "save.click", {}, {})
        assert result.navigated_to is None
        assert result.trace[-1].action == TraceAction.HALTED
        assert result.trace[-1].rule_id == "check"
        assert not any(step.rule_id == "go" for step in result.trace)

    def test_all_fields_validated_before_halting(self, two_screen_screens):
        doc = make_document(two_screen_screens, rules=[
            {"id": "r", "on_event": "save.click", "steps": [_validate(["name", "email"], stop_on_error=True)]},
        ])
        result = RuleEngine(doc).handle_event("form", "save.click", {"email": "nope"}, {})
        assert result.errors == {
            "name": "Este campo es requerido",
            "email": "Correo electrónico inválido",
        }

    def test_guard_failure_skips_rule(self, two_screen_screens, transitions):
        doc = make_document(two_screen_screens, transitions=transitions, rules=[
            {"id": "r", "on_event": "save.click",
             "when": [{"field": "name", "comparator": "is_not_empty"}],
             "steps": [_navigate("saved")]},
        ])
        engine = RuleEngine(doc)
        skipped = engine.handle_event("form", "save.click", {}, {})
        assert skipped.navigated_to is None
        assert skipped.navigation_requested is False
        assert skipped.rules_matched == 0
        passed = engine.handle_event("form", "save.click", {"name": "Ana"}, {})
        assert passed.navigated_to == "done"
        assert passed.navigation_requested is True
        assert passed.rules_matched == 1

    def test_unknown_guard_comparator_fails_open(self, two_screen_screens, transitions):
        doc = make_document(two_screen_screens, transitions=transitions, rules=[
            {"id": "r", "on_event": "save.click",
             "when": [{"field": "name", "comparator": "is_uppercase"}],
             "steps": [_navigate("saved")]},
        ])
        assert RuleEngine(doc).handle_event("form", "save.click", {}, {}).navigated_to == "done"

    def test_unknown_step_is_ignored(self, two_screen_screens, transitions, caplog):
        doc = make_document(two_screen_screens, transitions=transitions, rules=[
            {"id": "r", "on_event": "save.click",
             "steps": [{"type": "send_sms", "to": "x"}, _navigate("saved")]},
        ])
        with caplog.at_level(logging.WARNING):
            result = RuleEngine(doc).handle_event("form", "save.click", {}, {})
        assert result.navigated_to == "done"
        assert any(step.action == TraceAction.IGNORED for step in result.trace)
        assert "send_sms" in caplog.text

    def test_unmatched_success_event_does_not_navigate(self, two_screen_screens):
        doc = make_document(two_screen_screens, rules=[
            {"id": "r", "on_event": "save.click", "steps": [_navigate("nothing_listens")]},
        ])
        result = RuleEngine(doc).handle_event("form", "save.click", {}, {"name": "kept"})
        assert result.navigated_to is None
        assert result.errors == {"name": "kept"}

    def test_operation_without_success_event(self, two_screen_screens):
        doc = make_document(two_screen_screens, rules=[
            {"id": "r", "on_event": "save.click", "steps": [{"type": "start_operation", "operation": "log"}]},
        ])
        assert RuleEngine(doc).handle_event("form", "save.click", {}, {}).navigated_to is None

    def test_last_navigation_wins_and_resolves_from_origin(self, two_screen_screens):
        screens = two_screen_screens + [{"id": "summary"}]
        doc = make_document(screens, transitions=[
            {"id": "t1", "event": "saved", "from": "form", "to": "done"},
            {"id": "t2", "event": "review", "from": "form", "to": "summary"},
            {"id": "t3", "event": "review", "from": "done", "to": "form"},
        ], rules=[
            {"id": "r", "on_event": "save.click", "steps": [_navigate("saved"), _navigate("review")]},
        ])
        assert RuleEngine(doc).handle_event("form", "save.click", {}, {}).navigated_to == "summary"

    def test_unbound_validate_key_is_skipped(self, two_screen_screens, caplog):
        doc = make_document(two_screen_screens, rules=[
            {"id": "r", "on_event": "save.click", "steps": [_validate(["ghost"], stop_on_error=True)]},
        ])
        with caplog.at_level(logging.WARNING):
            result = RuleEngine(doc).handle_event("form", "save.click", {}, {})
        assert result.errors == {}
        assert result.halted is False
        assert "ghost" in caplog.text

    def test_rules_see_errors_from_earlier_rules(self, two_screen_screens, transitions):
        doc = make_document(two_screen_screens, transitions=transitions, rules=[
            {"id": "first", "on_event": "save.click", "steps": [_validate(["name"])]},
            {"id": "second", "on_event": "save.click", "steps": [_validate(["email"])]},
        ])
        result = RuleEngine(doc).handle_event("form", "save.click", {"email": "bad"}, {})
        assert set(result.errors) == {"name", "email"}
