import pytest
from pydantic import ValidationError

from game.settings import RelaySettings


class TestRelaySettings:
    def test_defaults(self, monkeypatch):
        for name in ("RELAY_LOG_DIR", "RELAY_SEED", "RELAY_DEFAULT_DURATION_MINUTES"):
            monkeypatch.delenv(name, raising=False)
        settings = RelaySettings()
        assert settings.log_dir is None
        assert settings.seed is None
        assert settings.default_duration_minutes == 30

    def test_values_from_env(self, monkeypatch):
        monkeypatch.setenv("RELAY_LOG_DIR", "logs/relay")
        monkeypatch.setenv("RELAY_SEED", "c0ffee")
        monkeypatch.setenv("RELAY_DEFAULT_DURATION_MINUTES", "45")
        settings = RelaySettings()
        assert settings.log_dir == "logs/relay"
        assert settings.seed == "c0ffee"
        assert settings.default_duration_minutes == 45

    def test_invalid_seed_rejected(self):
        with pytest.raises(ValidationError, match="seed"):
            RelaySettings(seed="not-hex")

    @pytest.mark.parametrize("duration", [0, 60])
    def test_duration_out_of_range_rejected(self, duration):
        with pytest.raises(ValidationError, match="default_duration_minutes"):
            RelaySettings(default_duration_minutes=duration)

    def test_empty_log_dir_rejected(self):
        with pytest.raises(ValidationError, match="log_dir"):
            RelaySettings(log_dir="")
