from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

from .fields import EXTRACT_ERROR_POLICIES
from .reporting import DEFAULT_NAME_WIDTH

load_dotenv()


@dataclass(frozen=True)
class Settings:
    name_width: int = DEFAULT_NAME_WIDTH
    on_extract_error: str = 'empty'  # 'empty' | 'tag'
    log_level: str = 'WARNING'


def load_settings() -> Settings:
    width_text = os.getenv("JSON_FIELD_READER_NAME_WIDTH", str(DEFAULT_NAME_WIDTH)).strip()
    try:
        name_width = int(width_text)
    except ValueError:
        raise ValueError(f"JSON_FIELD_READER_NAME_WIDTH must be an integer, got {width_text!r}") from None
    if name_width < 0:
        raise ValueError("JSON_FIELD_READER_NAME_WIDTH must not be negative.")

    on_extract_error = os.getenv("JSON_FIELD_READER_ON_EXTRACT_ERROR", "empty").strip().lower()
    if on_extract_error not in EXTRACT_ERROR_POLICIES:
        raise ValueError(
            f"JSON_FIELD_READER_ON_EXTRACT_ERROR must be one of {EXTRACT_ERROR_POLICIES}, got {on_extract_error!r}"
        )

    log_level = os.getenv("JSON_FIELD_READER_LOG_LEVEL", "WARNING").strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"JSON_FIELD_READER_LOG_LEVEL is not a logging level: {log_level!r}")

    return Settings(name_width=name_width, on_extract_error=on_extract_error, log_level=log_level)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
