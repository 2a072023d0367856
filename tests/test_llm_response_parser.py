"""Validation of the model's itinerary reply."""

import json

import pytest

from app.llm import message_content, parse_plan_response

from helpers import completion

VALID = {
    "plan": [
        {"time": "08:00", "place": "The Workshop", "area": "District 1", "note": "Cà phê specialty"},
        {"time": "10:00", "place": "Tao Dan Park", "area": "District 1", "note": "Đi dạo"},
    ],
    "notes": "Mang theo nước",
}


def test_fenced_json_with_language_tag():
    result = parse_plan_response('```json\n{"plan":[],"notes":"x"}\n```')

    assert result is not None
    assert result.model_dump() == {"plan": [], "notes": "x", "source": "gemini"}


def test_fenced_json_without_language_tag():
    result = parse_plan_response("```\n" + json.dumps(VALID) + "\n```")

    assert result is not None
    assert [item.place for item in result.plan] == ["The Workshop", "Tao Dan Park"]


def test_unfenced_json_with_surrounding_whitespace():
    result = parse_plan_response("\n\n  " + json.dumps(VALID, ensure_ascii=False) + "  \n")

    assert result is not None
    assert result.source == "gemini"
    assert result.notes == "Mang theo nước"
    assert result.plan[0].time == "08:00"


@pytest.mark.parametrize(
    "content",
    [
        "Xin lỗi, tôi không thể tạo kế hoạch.",
        "",
        "   ",
        "[]",
        '"just a string"',
        json.dumps({"notes": "missing plan"}),
        json.dumps({"plan": {"time": "08:00"}, "notes": "plan is an object"}),
        json.dumps({"plan": [], "notes": 3}),
        json.dumps({"plan": []}),
        '```json\n{"plan": [\n```',
    ],
)
def test_rejects_unusable_content(content):
    assert parse_plan_response(content) is None


def test_rejects_item_missing_field():
    payload = {"plan": [{"time": "08:00", "place": "X", "area": "Y"}], "notes": "n"}

    assert parse_plan_response(json.dumps(payload)) is None


def test_rejects_item_with_non_string_field():
    payload = {"plan": [{"time": 8, "place": "X", "area": "Y", "note": "Z"}], "notes": "n"}

    assert parse_plan_response(json.dumps(payload)) is None


def test_rejects_non_object_item():
    payload = {"plan": ["08:00 The Workshop"], "notes": "n"}

    assert parse_plan_response(json.dumps(payload)) is None


def test_extra_item_keys_are_ignored():
    payload = {"plan": [{"time": "08:00", "place": "X", "area": "Y", "note": "Z", "cost": 5}], "notes": "n"}

    result = parse_plan_response(json.dumps(payload))

    assert result is not None
    assert result.plan[0].model_dump() == {"time": "08:00", "place": "X", "area": "Y", "note": "Z"}


def test_message_content_handles_sdk_objects_and_dicts():
    assert message_content(completion("hello")) == "hello"
    assert message_content({"choices": [{"message": {"content": "hi"}}]}) == "hi"


@pytest.mark.parametrize(
    "response",
    [
        None,
        {},
        {"choices": []},
        {"choices": [{}]},
        {"choices": [{"message": {"content": None}}]},
        completion(["not", "a", "string"]),
    ],
)
def test_message_content_treats_shape_deviations_as_empty(response):
    assert message_content(response) == ""


def test_deeply_nested_json_is_rejected_not_raised():
    assert parse_plan_response("[" * 100000 + "]" * 100000) is None
