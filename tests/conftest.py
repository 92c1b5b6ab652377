"""Shared test fixtures for online package."""

import json

import pytest

from online.catalog.dateonly import DateOnly
from online.catalog.message import Message
from online.catalog.message_type import MessageType
from online.catalog.ministry import Ministry
from online.catalog.view import View


SAMPLE_CATALOG = {
    "created": "2021-02-01T12:00:00+00:00",
    "series": [
        {
            "id": "WOLS-FAITH",
            "name": "Faith Foundations",
            "description": "Building a life on faith",
            "resource": [
                {"url": "https://example.com/faith/notes.pdf", "name": "Series Notes"}
            ],
            "visibility": "public",
            "jacket": "https://example.com/faith/jacket.pdf",
        },
        {
            "id": "",
            "name": "Study Guide",
            "booklets": [{"url": "https://example.com/guide.pdf", "name": "Guide"}],
            "visibility": "public",
        },
    ],
    "messages": [
        {
            "date": "2021-01-03",
            "name": "Faith Part 1",
            "speakers": ["Vern Peltz"],
            "ministry": "wol",
            "type": "message",
            "visibility": "public",
            "series": [{"name": "Faith Foundations", "index": 1}],
            "playlist": ["service"],
            "audio": "https://example.com/audio/faith1.mp3",
            "video": "https://youtu.be/abc123",
        },
        {
            "date": "2021-01-10",
            "name": "Faith Part 2",
            "speakers": ["Vern Peltz", "Mary Peltz"],
            "ministry": "wol",
            "type": "message",
            "visibility": "partner",
            "series": [{"name": "Faith Foundations", "index": 2}],
            "playlist": ["service"],
            "audio": "exporting",
        },
        {
            "date": "2021-01-17",
            "name": "Prayer Night",
            "speakers": ["Mary Peltz"],
            "ministry": "wol",
            "type": "prayer",
            "visibility": "public",
            "playlist": ["service"],
            "audio": "https://example.com/audio/prayer.mp3",
            "resources": [{"url": "https://example.com/prayer.pdf", "name": "Prayer List"}],
        },
    ],
}


@pytest.fixture
def sample_catalog_data():
    """Provide a fresh copy of the sample catalog JSON data."""
    return json.loads(json.dumps(SAMPLE_CATALOG))


@pytest.fixture
def sample_catalog_file(tmp_path, sample_catalog_data):
    """Create a sample catalog JSON file for testing."""
    file_path = tmp_path / "catalog.json"
    file_path.write_text(json.dumps(sample_catalog_data, indent=2))
    return file_path


@pytest.fixture
def valid_message():
    """Provide a message that passes validation."""
    return Message(
        date=DateOnly.of(2020, 2, 2),
        name="MSG",
        description="MESSAGE DESCRIPTION",
        ministry=Ministry.WORD_OF_LIFE,
        type=MessageType.MESSAGE,
        visibility=View.PUBLIC,
        audio="https://path/to/file.mp3",
        video="https://path/to/file.mp4",
    )


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point the global config at an empty temporary directory."""
    config_home = tmp_path / "config"
    config_home.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.delenv("ONLINE_CATALOG", raising=False)
    return config_home / "online" / "config.yaml"
