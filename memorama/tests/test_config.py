"""
Tests for configuration parsing.
"""

import pytest

from ..config import GameConfig
from ..games.memorama.rendering import AssetKind


class TestGameConfig:
    def test_defaults(self):
        config = GameConfig.from_env({})

        assert config == GameConfig()
        assert config.mismatch_delay_seconds == 1.0
        assert config.tick_seconds == 1.0
        assert config.asset_kind is AssetKind.GLYPH
        assert config.allowed_origins == ["*"]

    def test_reads_environment(self):
        config = GameConfig.from_env({
            "MEMORAMA_ENV": "production",
            "MEMORAMA_MISMATCH_DELAY_MS": "750",
            "MEMORAMA_TICK_SECONDS": "0.5",
            "MEMORAMA_ASSET_KIND": "IMAGE",
            "MEMORAMA_IMAGE_BASE_URL": "https://cdn.example.com/cards",
            "MEMORAMA_TABLE_IDLE_SECONDS": "60",
            "MEMORAMA_LOG_LEVEL": "debug",
            "ALLOWED_ORIGINS": "http://localhost:3000, https://memorama.example.com",
        })

        assert config.env == "production"
        assert config.mismatch_delay_seconds == 0.75
        assert config.tick_seconds == 0.5
        assert config.asset_kind is AssetKind.IMAGE
        assert config.image_base_url == "https://cdn.example.com/cards"
        assert config.table_idle_seconds == 60
        assert config.log_level == "DEBUG"
        assert config.allowed_origins == ["http://localhost:3000", "https://memorama.example.com"]

    def test_blank_values_use_defaults(self):
        config = GameConfig.from_env({"MEMORAMA_MISMATCH_DELAY_MS": " ", "ALLOWED_ORIGINS": ""})

        assert config.mismatch_delay_seconds == 1.0
        assert config.allowed_origins == ["*"]

    @pytest.mark.parametrize("env", [
        {"MEMORAMA_MISMATCH_DELAY_MS": "soon"},
        {"MEMORAMA_MISMATCH_DELAY_MS": "-5"},
        {"MEMORAMA_TICK_SECONDS": "0"},
        {"MEMORAMA_ASSET_KIND": "sprite"},
        {"MEMORAMA_LOG_LEVEL": "LOUD"},
        {"MEMORAMA_TABLE_IDLE_SECONDS": "forever"},
    ])
    def test_bad_values_raise(self, env):
        with pytest.raises(ValueError):
            GameConfig.from_env(env)
