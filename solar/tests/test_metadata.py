from __future__ import annotations

# ruff: noqa: S101
import pytest

from solar.metadata import (
    FluxMapMetadata,
    format_imagery_date,
    legend,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2024-01-05", "January 5, 2024"),
        ("2023-11-30T08:15:00Z", "November 30, 2023"),
        (None, "N/A"),
        ("", "N/A"),
        ("  ", "N/A"),
        ("sometime in spring", "sometime in spring"),
    ],
)
def test_format_imagery_date(raw: str | None, expected: str) -> None:
    assert format_imagery_date(raw) == expected


def test_metadata_display_defaults_to_not_available() -> None:
    assert FluxMapMetadata().display() == {
        "analysis_date": "N/A",
        "imagery_date": "N/A",
        "imagery_quality": "N/A",
    }


def test_metadata_display_formats_values() -> None:
    metadata = FluxMapMetadata(
        imagery_date="2022-07-03",
        imagery_processed_date="2022-09-14",
        imagery_quality="HIGH",
    )
    assert metadata.display() == {
        "analysis_date": "September 14, 2022",
        "imagery_date": "July 3, 2022",
        "imagery_quality": "HIGH",
    }


def test_legend_labels() -> None:
    assert legend() == {
        "low": "Low",
        "high": "High",
        "caption": "Annual Solar Potential",
    }
