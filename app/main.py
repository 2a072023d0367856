from __future__ import annotations

import os
from typing import Any, Dict, List

from fastapi import Body, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from app.orchestrator import generate_plan
from app.schemas import BUDGET_TIERS, TIME_SLOTS, PlanRequest

app = FastAPI(title="Vibe Planner API")

# Allow local development UIs to reach the API without wrestling with browser
# CORS restrictions. Operators can scope this via VIBE_PLANNER_ALLOWED_ORIGINS.
raw_origins = os.getenv("VIBE_PLANNER_ALLOWED_ORIGINS") or "*"
allowed_origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]
if not allowed_origins:
    allowed_origins = ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

FORM_OPTIONS: Dict[str, List[str]] = {
    "cities": ["Ho Chi Minh City", "Can Tho", "Ha Noi"],
    "timeSlots": list(TIME_SLOTS),
    "vibes": ["Chill", "Active", "Party", "Aesthetic", "Romantic"],
    "interests": ["Coffee", "Food", "Photography", "Shopping", "Nature", "Nightlife"],
    "budgets": list(BUDGET_TIERS),
    "groupSizes": ["Solo", "Couple", "3-5 friends", "Big group"],
}


async def _plan_from_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Validate the incoming payload and delegate to the orchestrator."""
    try:
        prefs = PlanRequest.model_validate(payload)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False, include_context=False)) from exc

    response = await generate_plan(prefs)
    return response.model_dump(mode="json")


@app.post("/api/plan")
async def api_plan(payload: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
    """Primary endpoint consumed by the planner form."""
    return await _plan_from_payload(payload)


@app.post("/api/plan/generate", include_in_schema=False)
async def api_plan_generate(payload: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
    return await _plan_from_payload(payload)


@app.get("/api/options")
async def api_options() -> Dict[str, List[str]]:
    return FORM_OPTIONS
