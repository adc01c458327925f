from __future__ import annotations

from typing import Iterable, Sequence

PLACE_PURPOSES: tuple[str, ...] = (
    "훌륭한 식사", "로컬 맛집", "디저트/베이커리", "이색 주점",
    "조용한 휴식", "스파/마사지", "자연 속 힐링",
    "대표 랜드마크", "숨겨진 명소", "멋진 야경",
    "명품/백화점", "소품샵/편집샵", "전통 시장",
    "하이킹/등산", "해양 스포츠", "테마파크",
    "미술관/박물관", "공연/전시", "건축물 투어",
    "감성 카페", "스페셜티 커피",
    "아이와 함께", "인생샷 명소",
)


def suggest_purposes(
    query: str,
    dynamic_purposes: Iterable[str] = (),
    selected: Sequence[str] = (),
) -> list[str]:
    """
    Autocomplete a typed purpose against destination-specific and stock purposes.

    Already selected purposes and the exact query are left out.
    """
    needle = query.strip().lower()
    if not needle:
        return []

    candidates = dict.fromkeys([*dynamic_purposes, *PLACE_PURPOSES])
    return [
        p for p in candidates
        if needle in p.lower() and p not in selected and p.lower() != needle
    ]


def collect_purposes(custom_purpose: str, selected: Iterable[str]) -> list[str]:
    """Typed purpose first, then the selected ones, dropping blanks."""
    return [p.strip() for p in [custom_purpose, *selected] if p and p.strip()]
