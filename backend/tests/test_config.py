"""
NGO Site Backend - Settings Tests
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from ngo_api.config import Settings


def test_log_level_normalized():
    assert Settings(log_level="debug").log_level == "DEBUG"


def test_invalid_log_level_rejected():
    with pytest.raises(PydanticValidationError):
        Settings(log_level="chatty")


def test_public_base_url_trailing_slash_stripped():
    assert Settings(public_base_url="https://ngo.example.org/").public_base_url == (
        "https://ngo.example.org"
    )


def test_cors_origins_list_drops_blanks():
    config = Settings(cors_origins="https://a.example.org, ,https://b.example.org")

    assert config.cors_origins_list == ["https://a.example.org", "https://b.example.org"]


def test_unknown_backend_rejected():
    with pytest.raises(PydanticValidationError):
        Settings(storage_backend="mongodb")


def test_is_sqlite():
    assert Settings(database_url="sqlite+aiosqlite:///./x.db").is_sqlite
    assert not Settings(database_url="postgresql+asyncpg://u:p@db/x").is_sqlite


def test_production_check_flags_bad_base_url():
    with pytest.raises(ValueError, match="PUBLIC_BASE_URL"):
        Settings(public_base_url="ngo.example.org").validate_required_for_production()
