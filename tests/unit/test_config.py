"""Unit tests for settings loading."""
import pytest
from pydantic import ValidationError

from reclassifier.config import ReseedSettings, Settings


class TestReseedSettings:
    """Test ReseedSettings."""

    def test_defaults(self, monkeypatch):
        for name in ("ENABLED", "THRESHOLD", "LIMIT", "COOLDOWN_MINUTES"):
            monkeypatch.delenv(f"TAXONOMY_REMAP_AUTO_RESEED_{name}", raising=False)

        config = ReseedSettings()

        assert config.enabled is True
        assert config.threshold == 100
        assert config.limit == 10000
        assert config.cooldown_minutes == 120
        assert config.running_stale_minutes == 30
        assert config.force_recover_minutes == 8
        assert config.chunk_size == 400
        assert config.require_name_backed_subcategory is True

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("TAXONOMY_REMAP_AUTO_RESEED_THRESHOLD", "50")
        monkeypatch.setenv("TAXONOMY_REMAP_AUTO_RESEED_ENABLED", "false")

        config = ReseedSettings()

        assert config.threshold == 50
        assert config.enabled is False

    @pytest.mark.parametrize("field,value", [
        ("limit", 99),
        ("threshold", -1),
        ("chunk_size", 0),
        ("cron_interval_minutes", 0),
    ])
    def test_bounds(self, field, value):
        with pytest.raises(ValidationError):
            ReseedSettings(**{field: value})

    @pytest.mark.parametrize("interval", [45, 90, 420])
    def test_uneven_cron_interval_rejected(self, interval):
        with pytest.raises(ValidationError):
            ReseedSettings(cron_interval_minutes=interval)

    @pytest.mark.parametrize("interval", [1, 15, 60, 180, 1440])
    def test_even_cron_interval_accepted(self, interval):
        assert ReseedSettings(cron_interval_minutes=interval).cron_interval_minutes == interval


class TestSettings:
    """Test application Settings."""

    def test_redis_url_with_password(self):
        config = Settings(
            database_url="postgresql+asyncpg://u:p@db:5432/catalog",
            redis_host="cache",
            redis_port=6380,
            redis_password="secret",
            redis_url=None,
        )

        assert config.redis_url == "redis://:secret@cache:6380/0"

    def test_redis_url_without_password(self):
        config = Settings(
            database_url="postgresql+asyncpg://u:p@db:5432/catalog",
            redis_host="cache",
            redis_port=6379,
            redis_password=None,
            redis_url=None,
        )

        assert config.redis_url == "redis://cache:6379/0"

    def test_explicit_redis_url_kept(self):
        config = Settings(
            database_url="postgresql+asyncpg://u:p@db:5432/catalog",
            redis_url="redis://other:1/2",
        )

        assert config.redis_url == "redis://other:1/2"
