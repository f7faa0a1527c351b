"""
Tests for the mood/advice decision list.
"""

import pytest

from sentio.domain.emotions import make_distribution
from sentio.domain.resolver import MOOD_LABELS, resolve


class TestRuleOrdering:
    """First matching rule wins, in the documented order."""

    def test_sad_and_angry_precedes_single_emotions(self):
        """Both at 0.4 must give the composite, not Sad or Angry."""
        result = resolve({"sadness": 0.4, "anger": 0.4, "joy": 0, "fear": 0, "surprise": 0})
        assert result.mood == "Sad & Angry"

    def test_sad_and_angry_at_exact_threshold(self):
        """0.35 is inclusive for the composite rule."""
        assert resolve({"sadness": 0.5, "anger": 0.35}).mood == "Sad & Angry"

    def test_composite_preempts_happy(self):
        """Composite wins even with a strong joy score."""
        assert resolve({"joy": 0.9, "sadness": 0.35, "anger": 0.35}).mood == "Sad & Angry"

    def test_sad_wins_over_fear(self):
        """Rule 3 is checked before rule 5."""
        assert resolve({"sadness": 0.6, "fear": 0.9}).mood == "Sad"


class TestSingleEmotionRules:
    """Each single-emotion branch."""

    def test_happy(self):
        assert resolve({"joy": 0.7, "anger": 0.1, "sadness": 0.1}).mood == "Happy"

    def test_happy_blocked_by_anger(self):
        """anger must be strictly below 0.2 for Happy."""
        assert resolve({"joy": 0.7, "anger": 0.2, "sadness": 0.0}).mood == "Neutral"

    def test_sad(self):
        assert resolve({"sadness": 0.5, "anger": 0.1}).mood == "Sad"

    def test_angry(self):
        assert resolve({"anger": 0.5, "sadness": 0.2}).mood == "Angry"

    def test_anxious(self):
        result = resolve({"fear": 0.55, "joy": 0, "sadness": 0, "anger": 0, "surprise": 0})
        assert result.mood == "Anxious"

    def test_surprised(self):
        assert resolve({"surprise": 0.6}).mood == "Surprised"

    def test_surprise_below_threshold(self):
        assert resolve({"surprise": 0.59}).mood == "Neutral"

    def test_default_neutral(self):
        assert resolve({}).mood == "Neutral"


class TestResolverContract:
    """Purity and label stability."""

    def test_idempotent(self):
        """Same input, same output, no drift between calls."""
        dist = make_distribution({"sadness": 0.4, "anger": 0.4})
        assert resolve(dist) == resolve(dist)

    def test_missing_keys_read_as_zero(self):
        assert resolve({"joy": 0.8}).mood == "Happy"

    def test_none_values_read_as_zero(self):
        assert resolve({"joy": 0.8, "anger": None, "sadness": None}).mood == "Happy"

    @pytest.mark.parametrize(
        "scores",
        [
            {"sadness": 0.4, "anger": 0.4},
            {"joy": 1.0},
            {"sadness": 1.0},
            {"anger": 1.0},
            {"fear": 1.0},
            {"surprise": 1.0},
            {},
        ],
    )
    def test_mood_is_known_label_with_advice(self, scores):
        result = resolve(scores)
        assert result.mood in MOOD_LABELS
        assert result.advice
