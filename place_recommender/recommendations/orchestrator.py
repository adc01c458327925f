from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from ..llm.prompts import (
    ANONYMOUS_PROFILE,
    ANONYMOUS_REFINEMENT,
    EXCLUSION_TEMPLATE,
    LOOKUP_INSTRUCTION,
    PROFILE_REFINEMENT,
    PROFILE_TEMPLATE,
    REVIEW_INSTRUCTION,
    REVIEW_JSON_FIELD,
    SEARCH_INSTRUCTION,
)
from .models import RecommendationRequest, RecommendedPlace, UserProfile

logger = logging.getLogger(__name__)

LOCATION_LOOKUP = "location_lookup"
WEB_SEARCH = "web_search"

# Matched case-sensitively as substrings of the request's additional notes
TREND_KEYWORDS: tuple[str, ...] = (
    "최신",
    "요즘 인기",
    "새로 생긴",
    "이벤트",
    "트렌드",
    "핫한",
    "신상",
    "팝업",
    "latest",
    "trending",
    "newly opened",
    "event",
    "pop-up",
)


@dataclass(frozen=True)
class RequestInstructions:
    profile: str
    refinement: str
    lookup: str = ""
    search: str = ""
    review: str = ""
    review_field: str = ""
    exclusion: str = ""


@dataclass(frozen=True)
class RequestParameters:
    request: RecommendationRequest
    profile: UserProfile
    capabilities: tuple[str, ...]
    instructions: RequestInstructions
    exclude_places: tuple[str, ...] = ()

    @property
    def uses_web_search(self) -> bool:
        return WEB_SEARCH in self.capabilities


# ---------------------------------------------------------------------------
# Capability selection
# ---------------------------------------------------------------------------


def needs_web_search(additional_info: str, include_reviews: bool) -> bool:
    return include_reviews or any(k in additional_info for k in TREND_KEYWORDS)


def select_capabilities(additional_info: str, include_reviews: bool) -> tuple[str, ...]:
    if needs_web_search(additional_info, include_reviews):
        return (LOCATION_LOOKUP, WEB_SEARCH)
    return (LOCATION_LOOKUP,)


# ---------------------------------------------------------------------------
# Instruction assembly
# ---------------------------------------------------------------------------


def _profile_fragments(profile: UserProfile) -> tuple[str, str]:
    if not profile.tags:
        return ANONYMOUS_PROFILE, ANONYMOUS_REFINEMENT
    text = PROFILE_TEMPLATE.format(
        tags=", ".join(profile.tags),
        description=profile.description,
    )
    return text, PROFILE_REFINEMENT


def _exclusion_block(exclude_places: Sequence[str]) -> str:
    if not exclude_places:
        return ""
    names = "\n".join(f"- {name}" for name in exclude_places)
    return EXCLUSION_TEMPLATE.format(names=names)


def build_instructions(
    profile: UserProfile,
    request: RecommendationRequest,
    exclude_places: Sequence[str] = (),
    capabilities: Sequence[str] | None = None,
) -> RequestInstructions:
    """Only enabled capabilities contribute their usage instruction to the prompt."""
    if capabilities is None:
        capabilities = select_capabilities(request.additional_info, request.include_reviews)
    profile_text, refinement = _profile_fragments(profile)
    return RequestInstructions(
        profile=profile_text,
        refinement=refinement,
        lookup=LOOKUP_INSTRUCTION if LOCATION_LOOKUP in capabilities else "",
        search=SEARCH_INSTRUCTION if WEB_SEARCH in capabilities else "",
        review=REVIEW_INSTRUCTION if request.include_reviews else "",
        review_field=REVIEW_JSON_FIELD if request.include_reviews else "",
        exclusion=_exclusion_block(exclude_places),
    )


def build_request_parameters(
    profile: UserProfile,
    request: RecommendationRequest,
    exclude_places: Sequence[str] = (),
) -> RequestParameters:
    """Decide capabilities and instruction fragments for one completion call."""
    capabilities = select_capabilities(request.additional_info, request.include_reviews)
    return RequestParameters(
        request=request,
        profile=profile,
        capabilities=capabilities,
        instructions=build_instructions(profile, request, exclude_places, capabilities),
        exclude_places=tuple(exclude_places),
    )


# ---------------------------------------------------------------------------
# Result accumulation
# ---------------------------------------------------------------------------


def _identity(place_name: str) -> str:
    return place_name.strip().casefold()


def exclusion_list(results: Iterable[RecommendedPlace]) -> list[str]:
    """Names already shown in this session, in display order."""
    return [place.place_name for place in results]


def merge_results(
    previous: Sequence[RecommendedPlace],
    new_places: Iterable[RecommendedPlace],
) -> list[RecommendedPlace]:
    """
    Append ``new_places`` after ``previous`` without reordering either.

    A new place whose name matches one already in the set, ignoring case
    and surrounding whitespace, is dropped.
    """
    merged = list(previous)
    seen = {_identity(place.place_name) for place in merged}
    for place in new_places:
        key = _identity(place.place_name)
        if key in seen:
            logger.info("Dropping repeated recommendation %r", place.place_name)
            continue
        seen.add(key)
        merged.append(place)
    return merged
