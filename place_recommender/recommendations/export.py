from __future__ import annotations

from typing import Sequence

from .models import RecommendedPlace


def _render_place(place: RecommendedPlace) -> str:
    lines = [
        f"### {place.place_name}",
        "",
        f"*   **Description**: {place.description}",
        f"*   **Coordinates**: {place.latitude}, {place.longitude}",
        f"*   **Highlights**: {' '.join(f'#{h}' for h in place.highlights)}",
        f"*   **Map**: [Google Maps link]({place.map_url})",
    ]
    if place.review_url:
        lines.append(f"*   **Review**: [Blog/review link]({place.review_url})")
    return "\n".join(lines) + "\n"


def render_markdown(
    destination: str,
    purposes: Sequence[str],
    places: Sequence[RecommendedPlace],
) -> str:
    """Render a result set as a Markdown document."""
    header = f"# Recommended places in '{destination}'\n\n## Purposes: {', '.join(purposes)}\n\n---\n\n"
    return header + "\n---\n\n".join(_render_place(p) for p in places)


def export_filename(destination: str) -> str:
    return f"recommended_places_{destination.replace(' ', '_')}.md"
