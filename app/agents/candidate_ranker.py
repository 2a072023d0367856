"""Order candidate places by how well they match the requested vibes and interests."""
from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from app.schemas import Place

# A budget-exact match outweighs two ordinary tag matches.
BUDGET_MATCH_BONUS = 2


def score_place(
    place: Place,
    vibes: Iterable[str],
    interests: Iterable[str],
    budget: str | None = None,
) -> int:
    place_vibes = set(place.vibes)
    place_tags = set(place.tags)

    score = sum(1 for vibe in set(vibes) if vibe in place_vibes)
    # interests count whether the place lists them as a tag or as a vibe
    score += sum(1 for interest in set(interests) if interest in place_tags or interest in place_vibes)
    if budget and place.budget == budget:
        score += BUDGET_MATCH_BONUS
    return score


def rank_candidates(
    places: Sequence[Place],
    vibes: Iterable[str] = (),
    interests: Iterable[str] = (),
    budget: str | None = None,
) -> List[Place]:
    """Return ``places`` sorted by match score, highest first.

    The sort is stable so equally scored places keep the order the store
    returned them in. When nothing matches at all the input order is returned
    untouched rather than presenting an arbitrary ranking.
    """
    vibes = list(vibes or [])
    interests = list(interests or [])
    scored: List[Tuple[int, Place]] = [
        (score_place(place, vibes, interests, budget), place) for place in places
    ]
    if all(score == 0 for score, _ in scored):
        return list(places)

    scored.sort(key=lambda pair: pair[0], reverse=True)
    return [place for _, place in scored]
