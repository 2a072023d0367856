# app/llm.py
import os
import re
import json
import logging
from typing import List, Dict, Any, Optional, Sequence
from dotenv import load_dotenv
from openai import OpenAI
from pydantic import ValidationError

from app.messages import Messages, get_messages
from app.schemas import Place, PlanItem, PlanResponse

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
_level = os.getenv("VIBE_PLANNER_LOG_LEVEL", "INFO").upper()
logger.setLevel(getattr(logging, _level, logging.INFO))
logger.propagate = False

# Load .env file if present
load_dotenv()

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"
DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_TIMEOUT_S = 15.0
MAX_PROMPT_CANDIDATES = 10

_FENCE_OPEN = re.compile(r"^```[ \t]*[\w-]*[ \t]*\n?")
_FENCE_CLOSE = re.compile(r"\n?[ \t]*```$")

_client: Optional[OpenAI] = None


class LLMUnavailableError(RuntimeError):
    """Raised when no LLM client can be built (missing API key)."""


def llm_timeout() -> float:
    try:
        return float(os.getenv("LLM_TIMEOUT_S", DEFAULT_TIMEOUT_S))
    except ValueError:
        logger.warning("LLM_TIMEOUT_S is not a number; using %.0fs", DEFAULT_TIMEOUT_S)
        return DEFAULT_TIMEOUT_S


def _get_client() -> OpenAI:
    global _client
    if _client is not None:
        return _client
    api_key = os.getenv("GEMINI_API_KEY")
    if not api_key:
        raise LLMUnavailableError("GEMINI_API_KEY not set")
    _client = OpenAI(
        api_key=api_key,
        base_url=os.getenv("GEMINI_BASE_URL", DEFAULT_BASE_URL),
        timeout=llm_timeout(),
        max_retries=0,
    )
    return _client


def invoke_llm(messages: List[Dict[str, str]], model: Optional[str] = None) -> Any:
    """Send one chat completion request and return the raw SDK response."""
    model = model or os.getenv("GEMINI_MODEL", DEFAULT_MODEL)
    client = _get_client()
    logger.info("Invoking LLM model %s with %d message(s)", model, len(messages))
    return client.chat.completions.create(
        model=model,
        messages=messages,
        temperature=0.7,
    )


def message_content(response: Any) -> str:
    """Pull ``choices[0].message.content`` out of an SDK object or a plain dict.

    Anything that does not have that shape, or whose content is not a string,
    is treated as an empty reply.
    """
    def _get(obj: Any, key: str) -> Any:
        if isinstance(obj, dict):
            return obj.get(key)
        return getattr(obj, key, None)

    choices = _get(response, "choices")
    if not isinstance(choices, (list, tuple)) or not choices:
        return ""
    content = _get(_get(choices[0], "message"), "content")
    return content if isinstance(content, str) else ""


def _candidate_payload(candidates: Sequence[Place]) -> List[Dict[str, Any]]:
    return [
        {
            "name": place.name,
            "area": place.area,
            "type": place.type,
            "vibes": list(place.vibes),
            "budget": place.budget,
            "tags": list(place.tags),
        }
        for place in list(candidates)[:MAX_PROMPT_CANDIDATES]
    ]


def build_plan_prompt(
    city: str,
    time_slot: str,
    vibes: Sequence[str],
    interests: Sequence[str],
    budget: Optional[str],
    group_size: Optional[str],
    candidates: Sequence[Place],
    messages: Optional[Messages] = None,
) -> str:
    """Render the itinerary instruction with the top candidates embedded as JSON."""
    messages = messages or get_messages()
    unspecified = messages.unspecified
    return messages.prompt_template.format(
        city=city,
        time_slot=time_slot,
        vibes=", ".join(vibes) or unspecified,
        interests=", ".join(interests) or unspecified,
        budget=budget or unspecified,
        group_size=group_size or unspecified,
        candidates=json.dumps(_candidate_payload(candidates), ensure_ascii=False, indent=2),
    )


def _strip_fences(content: str) -> str:
    text = content.strip()
    if text.startswith("```"):
        text = _FENCE_OPEN.sub("", text, count=1)
        text = _FENCE_CLOSE.sub("", text, count=1)
    return text.strip()


def parse_plan_response(content: str) -> Optional[PlanResponse]:
    """Validate the model reply; ``None`` means the caller should fall back."""
    if not isinstance(content, str) or not content.strip():
        logger.warning("LLM returned empty content")
        return None

    try:
        parsed = json.loads(_strip_fences(content))
    except (ValueError, RecursionError):
        logger.warning("LLM response was not valid JSON", exc_info=True)
        return None

    if not isinstance(parsed, dict):
        logger.warning("LLM JSON payload is a %s, expected an object", type(parsed).__name__)
        return None
    raw_plan = parsed.get("plan")
    notes = parsed.get("notes")
    if not isinstance(raw_plan, list) or not isinstance(notes, str):
        logger.warning("LLM JSON payload missing a plan list or notes string")
        return None

    try:
        plan = [PlanItem.model_validate(item) for item in raw_plan]
    except ValidationError:
        logger.warning("LLM plan contained a malformed item; rejecting response", exc_info=True)
        return None

    logger.info("LLM plan parsed successfully with %d item(s)", len(plan))
    return PlanResponse(plan=plan, notes=notes, source="gemini")
