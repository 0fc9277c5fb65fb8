"""
Settings Tests
"""

import pytest

from tarot.config import Settings, load_settings
from tarot.content.cards import DeckMode
from tarot.errors import InvalidConfiguration
from tarot.state.rng import seed_to_long


class TestLoadSettings:

    def test_defaults(self):
        assert load_settings({}) == Settings()

    def test_seed_string(self):
        settings = load_settings({"TAROT_SEED": "ABC123"})
        assert settings.seed == seed_to_long("ABC123")

    def test_numeric_seed(self):
        assert load_settings({"TAROT_SEED": "42"}).seed == 42

    def test_blank_seed_is_time_based(self):
        assert load_settings({"TAROT_SEED": "  "}).seed is None

    def test_deck_mode(self):
        assert load_settings({"TAROT_DECK_MODE": "Reduced"}).deck_mode is DeckMode.REDUCED

    @pytest.mark.parametrize("mode", ["custom", "tiny"])
    def test_rejected_deck_modes(self, mode):
        with pytest.raises(InvalidConfiguration):
            load_settings({"TAROT_DECK_MODE": mode})

    def test_max_draw(self):
        assert load_settings({"TAROT_MAX_DRAW": "7"}).max_draw == 7

    @pytest.mark.parametrize("value", ["0", "-3", "many"])
    def test_bad_max_draw(self, value):
        with pytest.raises(InvalidConfiguration, match="TAROT_MAX_DRAW"):
            load_settings({"TAROT_MAX_DRAW": value})

    def test_log_level(self):
        assert load_settings({"TAROT_LOG_LEVEL": "debug"}).log_level == "DEBUG"
        with pytest.raises(InvalidConfiguration):
            load_settings({"TAROT_LOG_LEVEL": "chatty"})

    def test_server_settings(self):
        settings = load_settings({"TAROT_HOST": "0.0.0.0", "TAROT_PORT": "9000"})
        assert settings.host == "0.0.0.0"
        assert settings.port == 9000

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("TAROT_DECK_MODE", "reduced")
        monkeypatch.setenv("TAROT_MAX_DRAW", "3")
        settings = load_settings()
        assert settings.deck_mode is DeckMode.REDUCED
        assert settings.max_draw == 3
