from typing import Any, List, Literal, Optional
from pydantic import BaseModel, Field, AliasChoices, ConfigDict, StrictStr, field_validator

Budget = Literal["Low", "Medium", "High", ""]
PlanSource = Literal["gemini", "fallback", "sheet-empty"]

BUDGET_TIERS = ("Low", "Medium", "High")
TIME_SLOTS = ("morning", "afternoon", "evening", "full-day", "weekend")


def split_field(value: Any) -> List[str]:
    """Split a ``;``-joined column into trimmed, de-duplicated entries."""
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(";")
    elif isinstance(value, (list, tuple, set)):
        items = [str(v) for v in value if v is not None]
    else:
        items = [str(value)]
    cleaned: List[str] = []
    for item in items:
        item = item.strip()
        if item and item not in cleaned:
            cleaned.append(item)
    return cleaned


# ------- Store models -------
class Place(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: Any
    city: str = ""
    name: str
    address: str = ""
    area: str = ""
    type: str = ""
    vibes: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    budget: Budget = ""
    source: str = ""

    @field_validator("vibes", "tags", mode="before")
    @classmethod
    def _split_lists(cls, value: Any) -> List[str]:
        return split_field(value)

    @field_validator("budget", mode="before")
    @classmethod
    def _normalise_budget(cls, value: Any) -> str:
        if isinstance(value, str) and value.strip() in BUDGET_TIERS:
            return value.strip()
        return ""

    @field_validator("city", "name", "address", "area", "type", "source", mode="before")
    @classmethod
    def _blank_when_null(cls, value: Any) -> Any:
        return "" if value is None else value


# ------- Request models -------
class PlanRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    city: str = Field(..., min_length=1)
    time_slot: str = Field(..., min_length=1, validation_alias=AliasChoices("time_slot", "timeSlot"))
    vibes: List[str] = Field(default_factory=list)
    interests: List[str] = Field(default_factory=list)
    budget: Optional[str] = None
    group_size: Optional[str] = Field(None, validation_alias=AliasChoices("group_size", "groupSize"))

    @field_validator("city", "time_slot")
    @classmethod
    def _strip_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("budget", "group_size")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None


# ------- Response models -------
class PlanItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    time: StrictStr
    place: StrictStr
    area: StrictStr
    note: StrictStr


class PlanResponse(BaseModel):
    plan: List[PlanItem] = Field(default_factory=list)
    notes: str
    source: PlanSource
