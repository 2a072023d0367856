"""Rendering of the itinerary instruction sent to the model."""

import json
import re

from app.llm import build_plan_prompt
from app.messages import get_messages

from helpers import make_place


def _embedded_candidates(prompt: str) -> list:
    match = re.search(r"^\[\n.*?^\]", prompt, re.MULTILINE | re.DOTALL)
    assert match, "candidate JSON block not found"
    return json.loads(match.group(0))


def test_prompt_embeds_request_and_candidate_fields():
    place = make_place(1, name="Bánh Mì Huỳnh Hoa", area="District 1", type="Street food",
                       vibes="Active;Chill", tags="Food", budget="Low")

    prompt = build_plan_prompt(
        "Ho Chi Minh City", "morning", ["Chill"], ["Food", "Coffee"], "Low", "Couple", [place]
    )

    assert "Thành phố: Ho Chi Minh City" in prompt
    assert "Khung giờ: morning" in prompt
    assert "Sở thích: Food, Coffee" in prompt
    assert "Kích thước nhóm: Couple" in prompt
    assert "Bánh Mì Huỳnh Hoa" in prompt
    assert _embedded_candidates(prompt) == [
        {
            "name": "Bánh Mì Huỳnh Hoa",
            "area": "District 1",
            "type": "Street food",
            "vibes": ["Active", "Chill"],
            "budget": "Low",
            "tags": ["Food"],
        }
    ]


def test_prompt_limits_candidates_to_ten():
    places = [make_place(i) for i in range(15)]

    prompt = build_plan_prompt("Ha Noi", "evening", ["Party"], ["Nightlife"], None, None, places)

    names = [c["name"] for c in _embedded_candidates(prompt)]
    assert names == [f"Place {i}" for i in range(10)]
    assert "Place 10" not in prompt


def test_prompt_marks_missing_preferences_unspecified():
    prompt = build_plan_prompt("Can Tho", "weekend", [], [], None, None, [make_place(1)])

    assert "Vibe/Tâm trạng: Không chỉ định" in prompt
    assert "Ngân sách: Không chỉ định" in prompt
    assert "Kích thước nhóm: Không chỉ định" in prompt


def test_prompt_asks_for_bare_json_plan():
    prompt = build_plan_prompt("Can Tho", "weekend", ["Chill"], ["Nature"], None, None, [make_place(1)])

    assert "Chọn 2-4 địa điểm" in prompt
    assert '"plan"' in prompt and '"notes"' in prompt
    assert "không có code fence" in prompt


def test_prompt_does_not_mutate_candidates():
    places = [make_place(i) for i in range(12)]
    snapshot = list(places)

    build_plan_prompt("Ha Noi", "morning", ["Chill"], ["Coffee"], None, None, places)

    assert places == snapshot


def test_prompt_in_english_locale():
    prompt = build_plan_prompt(
        "Ha Noi", "morning", [], ["Coffee"], None, None, [make_place(1)], get_messages("en")
    )

    assert "City: Ha Noi" in prompt
    assert "Vibe/Mood: Not specified" in prompt
    assert "Pick the 2-4 best matching places" in prompt
