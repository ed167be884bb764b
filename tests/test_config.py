"""Tests for settings loading."""

import pytest

from outcome_reporter.config import DEFAULT_REQUESTER, load_settings
from outcome_reporter.errors import ConfigError

REQUIRED = {
    "REPORTER_DATABASE_URL": "postgresql+psycopg://reporter@db/tasks",
    "REPORTER_TOKEN": "s3cret",
}


class TestLoadSettings:
    """Test load_settings."""

    def test_required_only(self):
        settings = load_settings(REQUIRED)

        assert settings.database_url == "postgresql+psycopg://reporter@db/tasks"
        assert settings.token == "s3cret"
        assert settings.requester == DEFAULT_REQUESTER
        assert settings.log_level == "INFO"

    def test_optional_overrides(self):
        settings = load_settings(
            {**REQUIRED, "REPORTER_REQUESTER": "spark", "REPORTER_LOG_LEVEL": "debug"}
        )

        assert settings.requester == "spark"
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize("missing", sorted(REQUIRED))
    def test_missing_required_is_fatal(self, missing):
        environ = {k: v for k, v in REQUIRED.items() if k != missing}

        with pytest.raises(ConfigError, match=missing):
            load_settings(environ)

    def test_blank_required_is_fatal(self):
        with pytest.raises(ConfigError):
            load_settings({**REQUIRED, "REPORTER_TOKEN": "  "})

    def test_reads_os_environ_by_default(self, monkeypatch):
        for name, value in REQUIRED.items():
            monkeypatch.setenv(name, value)

        assert load_settings().token == "s3cret"
