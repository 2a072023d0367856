# app/orchestrator.py
from __future__ import annotations

import os
from typing import Any, Dict, List, Protocol
import asyncio
import logging

from app.schemas import Place, PlanRequest, PlanResponse
from app.llm import (
    build_plan_prompt,
    invoke_llm,
    llm_timeout,
    message_content,
    parse_plan_response,
)
from app.messages import Messages, get_messages
from app.agents.candidate_ranker import rank_candidates
from app.agents.fallback_planner import build_fallback_plan
from app.tools.supabase_places import PlaceStore, PlaceStoreError, SupabasePlaceStore

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
_level = os.getenv("VIBE_PLANNER_LOG_LEVEL", "INFO").upper()
logger.setLevel(getattr(logging, _level, logging.INFO))
logger.propagate = False


class LLMInvoker(Protocol):
    def __call__(self, messages: List[Dict[str, str]]) -> Any:
        ...


async def generate_plan(
    prefs: PlanRequest,
    *,
    store: PlaceStore | None = None,
    invoker: LLMInvoker | None = None,
    locale: str | None = None,
    timeout: float | None = None,
) -> PlanResponse:
    """Fetch candidates, ask the LLM for an itinerary and fall back to rules.

    This is the error boundary of the planner: every failure below it resolves
    to a ``PlanResponse`` whose ``source`` records which path produced it.
    """
    messages = get_messages(locale)
    logger.info(
        "Plan generation start: city=%s, time_slot=%s, vibes=%s, interests=%s, budget=%s",
        prefs.city,
        prefs.time_slot,
        prefs.vibes,
        prefs.interests,
        prefs.budget,
    )

    places = await _fetch_places(store, prefs.city)
    if not places:
        logger.info("No candidates for city '%s'; returning empty plan", prefs.city)
        return PlanResponse(plan=[], notes=messages.empty_city, source="sheet-empty")

    candidates = rank_candidates(places, prefs.vibes, prefs.interests, prefs.budget)
    logger.debug("Top candidates: %s", [place.name for place in candidates[:5]])

    parsed = await _ask_llm(
        prefs,
        candidates,
        messages,
        invoker or invoke_llm,
        timeout if timeout is not None else llm_timeout(),
    )
    if parsed is not None:
        return parsed

    return _fallback_response(prefs, candidates, messages)


async def _fetch_places(store: PlaceStore | None, city: str) -> List[Place]:
    try:
        store = store or SupabasePlaceStore()
        return list(await store.fetch(city))
    except PlaceStoreError as exc:
        logger.warning("Place store unavailable for city '%s': %s", city, exc)
    except Exception:
        logger.exception("Place store raised unexpectedly for city '%s'", city)
    return []


async def _ask_llm(
    prefs: PlanRequest,
    candidates: List[Place],
    messages: Messages,
    invoker: LLMInvoker,
    timeout: float,
) -> PlanResponse | None:
    prompt = build_plan_prompt(
        prefs.city,
        prefs.time_slot,
        prefs.vibes,
        prefs.interests,
        prefs.budget,
        prefs.group_size,
        candidates,
        messages,
    )

    try:
        response = await asyncio.wait_for(
            asyncio.to_thread(invoker, [{"role": "user", "content": prompt}]),
            timeout=timeout,
        )
    except asyncio.TimeoutError:
        logger.warning("LLM call timed out after %.1fs; using fallback plan", timeout)
        return None
    except Exception as exc:
        logger.exception("LLM call failed: %s", exc)
        return None

    content = message_content(response)
    if not content:
        logger.warning("LLM response carried no usable content; using fallback plan")
        return None

    try:
        parsed = parse_plan_response(content)
    except Exception:
        logger.exception("LLM response could not be parsed; using fallback plan")
        return None
    if parsed is None:
        return None
    if not parsed.plan:
        # an empty itinerary is reserved for cities without candidates
        logger.warning("LLM returned an empty plan despite %d candidate(s)", len(candidates))
        return None
    return parsed


def _fallback_response(prefs: PlanRequest, candidates: List[Place], messages: Messages) -> PlanResponse:
    plan = build_fallback_plan(candidates, prefs.time_slot, messages)
    logger.info("Fallback plan built with %d stop(s) for %s", len(plan), prefs.city)
    return PlanResponse(
        plan=plan,
        notes=messages.fallback_notes.format(city=prefs.city, time_slot=prefs.time_slot),
        source="fallback",
    )
