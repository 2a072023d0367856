"""User-facing copy and the itinerary prompt for each supported locale."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class Messages:
    locale: str
    empty_city: str
    fallback_notes: str
    fallback_item_note: str
    unspecified: str
    prompt_template: str


_VI_PROMPT = """Bạn là một hướng dẫn du lịch chuyên nghiệp tại {city}, Việt Nam. Hãy tạo một kế hoạch du lịch dựa trên yêu cầu của khách hàng.

Yêu cầu của khách hàng:
- Thành phố: {city}
- Khung giờ: {time_slot}
- Vibe/Tâm trạng: {vibes}
- Sở thích: {interests}
- Ngân sách: {budget}
- Kích thước nhóm: {group_size}

Các địa điểm có sẵn:
{candidates}

Hãy:
1. Chọn 2-4 địa điểm phù hợp nhất từ danh sách trên
2. Gán khung giờ thích hợp cho mỗi địa điểm
3. Tạo một kế hoạch chi tiết

Trả về CHỈ JSON (không có markdown, không có code fence) với cấu trúc sau:
{{
  "plan": [
    {{ "time": "HH:MM", "place": "Tên địa điểm", "area": "Khu vực", "note": "Mô tả ngắn" }}
  ],
  "notes": "Ghi chú tổng quát về kế hoạch"
}}"""

_EN_PROMPT = """You are a professional local guide in {city}. Build a trip plan that matches the traveller's request.

Traveller request:
- City: {city}
- Time slot: {time_slot}
- Vibe/Mood: {vibes}
- Interests: {interests}
- Budget: {budget}
- Group size: {group_size}

Available places:
{candidates}

Please:
1. Pick the 2-4 best matching places from the list above only
2. Assign a suitable time to each place
3. Write a short, practical plan

Return ONLY JSON (no markdown, no code fence) with this structure:
{{
  "plan": [
    {{ "time": "HH:MM", "place": "Place name", "area": "Area", "note": "Short description" }}
  ],
  "notes": "General notes about the plan"
}}"""

MESSAGES: Dict[str, Messages] = {
    "vi": Messages(
        locale="vi",
        empty_city="Hiện tại chưa có địa điểm phù hợp trong database cho thành phố này.",
        fallback_notes="Kế hoạch du lịch tại {city} cho khung giờ {time_slot}. Hãy kiểm tra giờ mở cửa và đặt chỗ trước!",
        fallback_item_note="Khám phá {place} tại {area}. Hãy kiểm tra giờ mở cửa và đặt chỗ trước!",
        unspecified="Không chỉ định",
        prompt_template=_VI_PROMPT,
    ),
    "en": Messages(
        locale="en",
        empty_city="There are no suitable places in the database for this city yet.",
        fallback_notes="Trip plan for {city} ({time_slot}). Check opening hours and book ahead!",
        fallback_item_note="Explore {place} in {area}. Check opening hours and book ahead!",
        unspecified="Not specified",
        prompt_template=_EN_PROMPT,
    ),
}

DEFAULT_LOCALE = "vi"


def get_messages(locale: str | None = None) -> Messages:
    """Return the copy for ``locale`` (or ``VIBE_PLANNER_LOCALE``), defaulting to Vietnamese."""
    key = (locale or os.getenv("VIBE_PLANNER_LOCALE") or DEFAULT_LOCALE).strip().lower()
    return MESSAGES.get(key) or MESSAGES.get(key.split("-")[0]) or MESSAGES[DEFAULT_LOCALE]
