from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

NOT_AVAILABLE = "N/A"
LEGEND_LOW = "Low"
LEGEND_HIGH = "High"
LEGEND_CAPTION = "Annual Solar Potential"


def format_imagery_date(value: str | None) -> str:
    """Format an ISO date as e.g. "January 5, 2024".

    Missing values become "N/A"; unparsable values are returned unchanged.
    """

    if not value or not value.strip():
        return NOT_AVAILABLE
    raw = value.strip()
    parsed: date
    try:
        parsed = date.fromisoformat(raw[:10])
    except ValueError:
        try:
            parsed = datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
        except ValueError:
            return raw
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


@dataclass(frozen=True)
class FluxMapMetadata:
    imagery_date: str | None = None
    imagery_processed_date: str | None = None
    imagery_quality: str | None = None

    def display(self) -> dict[str, str]:
        return {
            "analysis_date": format_imagery_date(self.imagery_processed_date),
            "imagery_date": format_imagery_date(self.imagery_date),
            "imagery_quality": (self.imagery_quality or "").strip()
            or NOT_AVAILABLE,
        }


def legend() -> dict[str, str]:
    return {"low": LEGEND_LOW, "high": LEGEND_HIGH, "caption": LEGEND_CAPTION}
