"""Pytest configuration and fixtures."""

import pytest

from json_field_reader.config import get_settings

SAMPLE_DOCUMENT = (
    b'{"STATS":[{"Type":"S9"},{"GHS 5s":"5904.657","GHS av":5847.82,"fan1":0,'
    b'"temp":-3.5,"ratio":1e-4,"label":"456.78 (AB)","empty":"","missing_val":null,'
    b'"a.b":"7","chains":[1,2,3]}],"id":1}'
)

SETTINGS_ENV = (
    "JSON_FIELD_READER_NAME_WIDTH",
    "JSON_FIELD_READER_ON_EXTRACT_ERROR",
    "JSON_FIELD_READER_LOG_LEVEL",
)


@pytest.fixture
def sample_document():
    """Small cgminer-like document covering each sanitizer outcome."""
    return SAMPLE_DOCUMENT


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate tests from the caller's environment and the settings cache."""
    for name in SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
