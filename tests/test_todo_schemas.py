"""Validation layer tests (no app, no database)."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from app.errors import format_validation_errors
from app.schemas.envelope import error_payload, success_payload
from app.schemas.todo import Priority, TodoCreate, TodoRead, TodoUpdate

pytestmark = pytest.mark.unit


def test_create_trims_and_applies_defaults():
    todo = TodoCreate(title="  Buy milk  ", description="  two litres ")

    assert todo.title == "Buy milk"
    assert todo.description == "two litres"
    assert todo.priority is Priority.MEDIUM


def test_title_boundary_200_accepted_201_rejected():
    assert len(TodoCreate(title="a" * 200).title) == 200

    with pytest.raises(ValidationError) as exc_info:
        TodoCreate(title="a" * 201)
    assert exc_info.value.errors()[0]["loc"] == ("title",)


@pytest.mark.parametrize("title", ["", "   ", "\n\t"])
def test_blank_title_rejected(title):
    with pytest.raises(ValidationError):
        TodoCreate(title=title)


def test_missing_title_rejected():
    with pytest.raises(ValidationError) as exc_info:
        TodoCreate(description="no title")
    details = format_validation_errors(exc_info.value.errors())
    assert details == ["title: Field required"]


def test_description_may_be_empty_but_not_too_long():
    assert TodoCreate(title="x", description="").description == ""
    assert len(TodoCreate(title="x", description="d" * 1000).description) == 1000
    with pytest.raises(ValidationError):
        TodoCreate(title="x", description="d" * 1001)


def test_unknown_priority_rejected():
    with pytest.raises(ValidationError):
        TodoCreate(title="x", priority="urgent")


def test_all_violations_are_reported():
    with pytest.raises(ValidationError) as exc_info:
        TodoCreate(title="", description="d" * 1001, priority="urgent")

    details = format_validation_errors(exc_info.value.errors())
    assert len(details) == 3
    assert [detail.split(":")[0] for detail in details] == ["title", "description", "priority"]


def test_create_ignores_unknown_fields():
    todo = TodoCreate(title="x", completed=True, id=5)
    assert "completed" not in todo.model_dump()


def test_update_present_fields_only_contains_sent_keys():
    update = TodoUpdate(completed=True)
    assert update.present_fields() == {"completed": True}
    assert TodoUpdate().present_fields() == {}
    assert TodoUpdate(bogus="x").present_fields() == {}


def test_update_uses_create_rules_per_field():
    with pytest.raises(ValidationError):
        TodoUpdate(title="a" * 201)
    with pytest.raises(ValidationError):
        TodoUpdate(title="   ")
    assert TodoUpdate(description="").present_fields() == {"description": ""}


@pytest.mark.parametrize("field", ["title", "description", "completed", "priority"])
def test_update_rejects_explicit_null(field):
    with pytest.raises(ValidationError):
        TodoUpdate(**{field: None})


def test_update_completed_must_be_boolean():
    with pytest.raises(ValidationError):
        TodoUpdate(completed="yes")
    with pytest.raises(ValidationError):
        TodoUpdate(completed=1)


def test_read_attaches_utc_to_naive_timestamps():
    naive = datetime(2026, 1, 1, 12, 0, 0)
    todo = TodoRead(
        id=1,
        title="x",
        description=None,
        completed=False,
        priority="low",
        created_at=naive,
        updated_at=naive,
    )

    assert todo.created_at.tzinfo is timezone.utc
    assert todo.description == ""
    assert todo.model_dump(mode="json")["priority"] == "low"


def test_envelopes_leave_out_unset_members():
    assert success_payload(data=[], count=0) == {"success": True, "data": [], "count": 0}
    assert error_payload("Todo not found") == {"success": False, "error": "Todo not found"}
    assert error_payload("Validation error", ["title: Field required"]) == {
        "success": False,
        "error": "Validation error",
        "details": ["title: Field required"],
    }
