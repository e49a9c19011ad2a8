"""Shared test fixtures and configuration."""
import json

import pytest


@pytest.fixture
def sample_feed() -> list[dict]:
    """Two events in the feed's wire format."""
    return [
        {
            "name": "TestConf 2025",
            "hyperlink": "https://testconf.example.com",
            "date": [1762752000000],
            "location": "Virtual",
            "city": "Virtual",
            "country": "Online",
            "cfp": {},
            "status": "open",
        },
        {
            "name": "DevTest Summit",
            "hyperlink": "https://devtest.example.com",
            "date": [1764048000000, 1764134400000, 1764220800000],
            "location": "Berlin, Germany",
            "city": "Berlin",
            "country": "Germany",
            "misc": "Golang and Rust tracks",
            "cfp": {
                "link": "https://devtest.example.com/cfp",
                "until": "15-August-2025",
                "untilDate": 1755216000000,
            },
            "closedCaptions": True,
            "scholarship": False,
            "status": "open",
        },
    ]


@pytest.fixture
def sample_feed_bytes(sample_feed) -> bytes:
    return json.dumps(sample_feed).encode("utf-8")
