"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from nusong_client.config import Settings, get_settings


class TestSettings:
    def test_strips_trailing_slash(self) -> None:
        assert Settings(api_base_url="https://nusong.app/").api_base_url == "https://nusong.app"

    @pytest.mark.parametrize("url", ["", "nusong.app", "ftp://nusong.app"])
    def test_rejects_invalid_base_url(self, url: str) -> None:
        with pytest.raises(ValidationError):
            Settings(api_base_url=url)

    def test_rejects_non_positive_poll_interval(self) -> None:
        with pytest.raises(ValidationError, match="greater than zero"):
            Settings(music_poll_interval=0)

    def test_poll_ceiling(self) -> None:
        assert Settings(poll_max_attempts=30).poll_ceiling == 30
        assert Settings(poll_max_attempts=0).poll_ceiling is None
        assert Settings(poll_max_attempts=-1).poll_ceiling is None

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MUSIC_POLL_INTERVAL", "5")
        monkeypatch.setenv("LOGIN_PATH", "/signin")

        settings = get_settings()

        assert settings.music_poll_interval == 5.0
        assert settings.login_path == "/signin"
        assert get_settings() is settings


class TestRuntimeWarnings:
    def test_local_defaults_have_no_warnings(self) -> None:
        settings = Settings(api_base_url="http://localhost:5000", debug=False)
        assert settings.validate_runtime_config() == []

    def test_warns_about_unbounded_polling_plain_http_and_debug(self) -> None:
        settings = Settings(api_base_url="http://nusong.app", poll_max_attempts=0, debug=True)

        warnings = settings.validate_runtime_config()

        assert len(warnings) == 3
        assert any("POLL_MAX_ATTEMPTS" in w for w in warnings)
        assert any("plain HTTP" in w for w in warnings)
        assert any("DEBUG" in w for w in warnings)
