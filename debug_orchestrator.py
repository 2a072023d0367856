# debug_orchestrator.py
import asyncio
import json
import sys

from app.orchestrator import generate_plan
from app.schemas import PlanRequest
from app.tools.supabase_places import InMemoryPlaceStore

SAMPLE_PLACES = [
    {
        "id": 1,
        "city": "Ho Chi Minh City",
        "name": "The Workshop Coffee",
        "address": "27 Ngô Đức Kế",
        "area": "District 1",
        "type": "Cafe",
        "vibes": "Chill; Aesthetic",
        "tags": "Coffee; Photography",
        "budget": "Medium",
        "source": "debug",
    },
    {
        "id": 2,
        "city": "Ho Chi Minh City",
        "name": "Bến Thành Market",
        "address": "Lê Lợi",
        "area": "District 1",
        "type": "Market",
        "vibes": "Active",
        "tags": "Food; Shopping",
        "budget": "Low",
        "source": "debug",
    },
    {
        "id": 3,
        "city": "Ho Chi Minh City",
        "name": "Saigon Zoo and Botanical Gardens",
        "address": "2 Nguyễn Bỉnh Khiêm",
        "area": "District 1",
        "type": "Park",
        "vibes": "Chill;Active",
        "tags": "Nature",
        "budget": "Low",
        "source": "debug",
    },
]


async def main():
    payload = {
        "city": "Ho Chi Minh City",
        "timeSlot": "morning",
        "vibes": ["Chill"],
        "interests": ["Coffee"],
        "budget": "Medium",
        "groupSize": "Couple",
    }
    prefs = PlanRequest.model_validate(payload)

    # Pass --live to query Supabase instead of the sample rows
    store = None if "--live" in sys.argv else InMemoryPlaceStore(SAMPLE_PLACES)

    result = await generate_plan(prefs, store=store)
    print("➡️ Orchestrator returned:\n")
    print(json.dumps(result.model_dump(mode="json"), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    asyncio.run(main())
