"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from hotel_desk.config import Settings


class TestSettings:
    def test_log_level_normalised(self) -> None:
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="chatty")

    def test_frontend_added_to_cors(self) -> None:
        settings = Settings(_env_file=None, frontend_url="https://desk.example.com", cors_origins=[])
        assert settings.cors_origins == ["https://desk.example.com"]

    def test_async_database_url(self) -> None:
        settings = Settings(_env_file=None, database_url="postgresql://u:p@db:5432/hotel")
        assert settings.async_database_url == "postgresql+asyncpg://u:p@db:5432/hotel"

    def test_async_url_left_alone(self) -> None:
        url = "sqlite+aiosqlite:///./hotel.db"
        assert Settings(_env_file=None, database_url=url).async_database_url == url
