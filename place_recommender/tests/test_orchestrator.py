from __future__ import annotations

from place_recommender.llm.prompts import (
    ANONYMOUS_PROFILE,
    ANONYMOUS_REFINEMENT,
    LOOKUP_INSTRUCTION,
    PROFILE_REFINEMENT,
)
from place_recommender.recommendations.models import (
    RecommendationRequest,
    RecommendedPlace,
    UserProfile,
)
from place_recommender.recommendations.orchestrator import (
    LOCATION_LOOKUP,
    WEB_SEARCH,
    build_instructions,
    build_request_parameters,
    exclusion_list,
    merge_results,
    select_capabilities,
)

EMPTY_PROFILE = UserProfile(tags=[], description="No preferences.")
FOODIE_PROFILE = UserProfile(
    tags=["Food hunting", "Cafe hopping"],
    description="Loves small bakeries and local markets.",
)


def _request(**overrides) -> RecommendationRequest:
    data = {"destination": "Seongsu-dong, Seoul", "purposes": ["Specialty coffee"]}
    data.update(overrides)
    return RecommendationRequest(**data)


def _place(name: str) -> RecommendedPlace:
    return RecommendedPlace(place_name=name, latitude=37.54, longitude=127.05)


# ── Capability selection ─────────────────────────────────────────────────


class TestCapabilities:
    def test_baseline_only(self):
        assert select_capabilities("quiet place to read", False) == (LOCATION_LOOKUP,)

    def test_trend_keyword_enables_search(self):
        assert select_capabilities("요즘 인기 있는 곳", False) == (LOCATION_LOOKUP, WEB_SEARCH)

    def test_english_trend_keyword(self):
        assert select_capabilities("any pop-up stores?", False) == (LOCATION_LOOKUP, WEB_SEARCH)

    def test_keyword_match_is_case_sensitive(self):
        assert select_capabilities("LATEST spots", False) == (LOCATION_LOOKUP,)

    def test_reviews_enable_search(self):
        assert select_capabilities("", True) == (LOCATION_LOOKUP, WEB_SEARCH)


# ── Instruction assembly ─────────────────────────────────────────────────


class TestInstructions:
    def test_anonymous_profile(self):
        ins = build_instructions(EMPTY_PROFILE, _request())
        assert ins.profile == ANONYMOUS_PROFILE
        assert ins.refinement == ANONYMOUS_REFINEMENT

    def test_profile_weighted(self):
        ins = build_instructions(FOODIE_PROFILE, _request())
        assert "Food hunting, Cafe hopping" in ins.profile
        assert "Loves small bakeries" in ins.profile
        assert ins.refinement == PROFILE_REFINEMENT

    def test_no_optional_fragments(self):
        ins = build_instructions(EMPTY_PROFILE, _request())
        assert ins.search == ""
        assert ins.review == ""
        assert ins.review_field == ""
        assert ins.exclusion == ""

    def test_trend_notes_add_search_but_not_review(self):
        ins = build_instructions(EMPTY_PROFILE, _request(additional_info="새로 생긴 카페"))
        assert ins.search
        assert ins.review == ""

    def test_reviews_add_search_and_review(self):
        ins = build_instructions(EMPTY_PROFILE, _request(include_reviews=True))
        assert ins.search
        assert "reviewUrl" in ins.review
        assert "reviewUrl" in ins.review_field

    def test_exclusion_block_lists_each_name(self):
        ins = build_instructions(EMPTY_PROFILE, _request(), ["Cafe Onion", "Blue Bottle"])
        assert "- Cafe Onion\n- Blue Bottle" in ins.exclusion
        assert "Do not recommend them again" in ins.exclusion

    def test_location_lookup_adds_map_instruction(self):
        ins = build_instructions(EMPTY_PROFILE, _request())
        assert ins.lookup == LOOKUP_INSTRUCTION

    def test_instructions_follow_given_capabilities(self):
        ins = build_instructions(EMPTY_PROFILE, _request(), capabilities=(WEB_SEARCH,))
        assert ins.lookup == ""
        assert ins.search


class TestRequestParameters:
    def test_first_request_has_no_exclusions(self):
        params = build_request_parameters(FOODIE_PROFILE, _request())
        assert params.exclude_places == ()
        assert params.capabilities == (LOCATION_LOOKUP,)
        assert not params.uses_web_search

    def test_exclusions_keep_order(self):
        params = build_request_parameters(FOODIE_PROFILE, _request(include_reviews=True), ["A", "B"])
        assert params.exclude_places == ("A", "B")
        assert params.uses_web_search
        assert params.request.destination == "Seongsu-dong, Seoul"


# ── Result accumulation ──────────────────────────────────────────────────


class TestMerge:
    def test_append_preserves_order(self):
        merged = merge_results([_place("A"), _place("B")], [_place("C")])
        assert [p.place_name for p in merged] == ["A", "B", "C"]

    def test_inputs_not_mutated(self):
        previous = [_place("A")]
        merge_results(previous, [_place("B")])
        assert [p.place_name for p in previous] == ["A"]

    def test_repeat_dropped_ignoring_case_and_whitespace(self):
        merged = merge_results([_place("Cafe Onion")], [_place(" cafe onion "), _place("Layered")])
        assert [p.place_name for p in merged] == ["Cafe Onion", "Layered"]

    def test_repeat_within_page_dropped(self):
        merged = merge_results([], [_place("A"), _place("A"), _place("B")])
        assert [p.place_name for p in merged] == ["A", "B"]

    def test_exclusion_list_order(self):
        assert exclusion_list([_place("A"), _place("B")]) == ["A", "B"]
