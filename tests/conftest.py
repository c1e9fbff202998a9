"""Shared pytest fixtures."""

import json
from pathlib import Path
from typing import Any

import pytest

from sumppi.feeds.models import SeriesData
from sumppi.ui.theme import reset_theme


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point SUMPPI_CONFIG at a (missing) file inside the test's tmp dir."""
    config_file = tmp_path / "series.yaml"
    monkeypatch.setenv("SUMPPI_CONFIG", str(config_file))
    monkeypatch.delenv("SUMPPI_THEME", raising=False)
    monkeypatch.delenv("COLORFGBG", raising=False)
    reset_theme()
    return config_file


@pytest.fixture
def sample_series_dict() -> dict[str, Any]:
    """Series payload shaped like the API's ``data`` object."""
    return {
        "guid": "series-123",
        "last_modified": "2024-03-16T10:00:00Z",
        "rss_feed_url": "",
        "title": "Morning Show",
        "author": "Radio Team",
        "description": "Daily news & talk",
        "html_description": None,
        "link": "https://example.com/morning-show",
        "publication_date": "2023-01-01T00:00:00Z",
        "copyright": "Example Media",
        "publisher": "Example Media",
        "tags": ["news"],
        "categories": ["News"],
        "rankings": {"daily": 1, "weekly": 2, "monthly": 3},
        "cover_url": "https://cdn.example.com/cover.jpg",
        "episodes": [
            {
                "guid": "ep-1",
                "title": "Episode One",
                "description": "The first one",
                "publication_date": "2024-01-01T00:00:00Z",
                "audio_url": "https://cdn.example.com/ep1.mp3",
                "audio_length": 1234567,
                "audio_duration": 125,
                "html_description": None,
                "ad_tags": None,
                "audio_sample": {
                    "audio_url": "https://cdn.example.com/ep1-sample.mp3",
                    "audio_duration": 30,
                    "audio_length": 48000,
                },
                "audio_slices": [{"url": "https://cdn.example.com/s1.mp3", "start": 0, "end": 60}],
                "availability_periods": [
                    {
                        "product": None,
                        "type": "free",
                        "start_date": "2024-01-01T00:00:00Z",
                        "end_date": "2030-01-01T00:00:00Z",
                    }
                ],
            },
            {
                "guid": "ep-2",
                "title": "Episode Two",
                "description": "The second one",
                "publication_date": "2024-03-15T00:00:00Z",
                "audio_url": "https://cdn.example.com/ep2.mp3",
                "audio_length": 2048,
                "audio_duration": 3725,
            },
            {
                "guid": "ep-3",
                "title": "Episode Three",
                "description": "Date went missing",
                "publication_date": "invalid",
                "audio_url": "https://cdn.example.com/ep3.mp3",
                "audio_length": 0,
                "audio_duration": 0,
            },
        ],
    }


@pytest.fixture
def sample_series(sample_series_dict: dict[str, Any]) -> SeriesData:
    """Validated SeriesData built from ``sample_series_dict``."""
    return SeriesData.model_validate(sample_series_dict)


@pytest.fixture
def series_file(tmp_path: Path, sample_series_dict: dict[str, Any]) -> Path:
    """JSON file holding the ``{"data": ...}`` envelope."""
    path = tmp_path / "series.json"
    path.write_text(json.dumps({"data": sample_series_dict}), encoding="utf-8")
    return path
