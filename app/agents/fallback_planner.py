"""Rule-based itinerary used whenever the hosted model cannot produce one."""
from __future__ import annotations

from typing import Dict, List, Sequence

from app.messages import Messages, get_messages
from app.schemas import Place, PlanItem

MAX_FALLBACK_STOPS = 3

_SLOT_TIMES: Dict[str, List[str]] = {
    "morning": ["08:00", "09:00", "10:00"],
    "afternoon": ["13:00", "14:00", "15:00"],
    "evening": ["18:00", "19:00", "20:00"],
    "full-day": ["08:00", "12:00", "17:00"],
    "weekend": ["09:00", "13:00", "18:00"],
}
_DEFAULT_TIMES = ["09:00", "13:00", "18:00"]


def slot_times(time_slot: str) -> List[str]:
    return list(_SLOT_TIMES.get((time_slot or "").strip().lower(), _DEFAULT_TIMES))


def build_fallback_plan(
    candidates: Sequence[Place],
    time_slot: str,
    messages: Messages | None = None,
) -> List[PlanItem]:
    """Turn the top ranked candidates into a timed plan of at most three stops."""
    if not candidates:
        return []

    messages = messages or get_messages()
    times = slot_times(time_slot)
    plan: List[PlanItem] = []
    for index, place in enumerate(candidates[:MAX_FALLBACK_STOPS]):
        time = times[index] if index < len(times) else f"{9 + 4 * index:02d}:00"
        plan.append(
            PlanItem(
                time=time,
                place=place.name,
                area=place.area,
                note=messages.fallback_item_note.format(place=place.name, area=place.area),
            )
        )
    return plan
