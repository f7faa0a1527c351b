"""
Tests for the keyword/phrase fallback classifier.
"""

import pytest

from sentio.domain.emotions import EMOTIONS, FALLBACK_EMOTIONS
from sentio.domain.fallback import NO_SIGNAL_ADVICE, KeywordEmotionClassifier
from sentio.domain.lexicon import Lexicon


@pytest.fixture
def classifier(lexicon):
    return KeywordEmotionClassifier(lexicon)


class TestCounting:
    """Phrase and word passes."""

    def test_phrase_hits_raise_sadness_and_anger(self, classifier):
        """Phrases add 2, tokens add 1 (substring match)."""
        counts = classifier.count_emotions(
            "I fell down and it made me cry, why would someone do that"
        )
        # fell down + made me cry = 4, fell/down/cry, = 3
        assert counts["sadness"] == 7
        # why would someone do that = 2, "made" contains "mad" = 1
        assert counts["anger"] == 3
        assert counts["joy"] == 0

    def test_substring_match_not_whole_word(self, classifier):
        """'goodness' contains 'good'."""
        assert classifier.count_emotions("goodness")["joy"] == 1

    def test_token_counts_once_per_emotion(self, classifier):
        """'prayed' contains both 'pray' and 'prayed' but adds 1."""
        assert classifier.count_emotions("prayed")["joy"] == 1

    def test_token_can_hit_several_emotions(self):
        lex = Lexicon.from_dict({"keywords": {"joy": ["glad"], "sadness": ["lad"]}})
        counts = KeywordEmotionClassifier(lex).count_emotions("glad")
        assert counts["joy"] == 1
        assert counts["sadness"] == 1

    def test_case_insensitive(self, classifier):
        assert classifier.count_emotions("SO HAPPY")["joy"] == 3


class TestClassify:
    """End-to-end fallback classification."""

    def test_fell_down_example_is_sad(self, classifier):
        result = classifier.classify("I fell down and it made me cry, why would someone do that")
        assert result.mood == "Sad"
        assert result.mood != "Happy"
        assert result.is_fallback is True
        assert result.emotions["sadness"] == pytest.approx(0.7)
        assert result.emotions["anger"] == pytest.approx(0.3)
        assert result.score == pytest.approx(0.7)

    def test_no_keywords_gives_neutral_default(self, classifier):
        result = classifier.classify("The meeting is at noon")
        assert result.mood == "Neutral"
        assert result.score == 1.0
        assert result.emotions["neutral"] == 1.0
        assert result.advice == NO_SIGNAL_ADVICE
        assert result.is_fallback is True

    def test_proportions_sum_to_one(self, classifier):
        result = classifier.classify("so happy but also nervous and a bit shocked")
        total = sum(result.emotions[e] for e in FALLBACK_EMOTIONS)
        assert total == pytest.approx(1.0)
        assert result.emotions["neutral"] == 0.0
        assert result.emotions["disgust"] == 0.0

    def test_all_keys_present(self, classifier):
        result = classifier.classify("angry")
        assert set(result.emotions) == set(EMOTIONS)

    def test_flat_distribution_keeps_proportions(self, classifier):
        """Max below 0.25: label neutral, proportions kept, score is raw max."""
        result = classifier.classify("happy sad angry scared shocked")
        for emotion in FALLBACK_EMOTIONS:
            assert result.emotions[emotion] == pytest.approx(0.2)
        assert result.mood == "Neutral"
        assert result.score == pytest.approx(0.2)

    def test_happy(self, classifier):
        result = classifier.classify("I am so happy today")
        assert result.mood == "Happy"

    def test_anxious(self, classifier):
        assert classifier.classify("I am nervous and scared").mood == "Anxious"

    def test_angry(self, classifier):
        assert classifier.classify("so angry and furious").mood == "Angry"

    def test_composite(self, classifier):
        assert classifier.classify("I feel sad and angry").mood == "Sad & Angry"

    def test_emotions_are_read_only(self, classifier):
        result = classifier.classify("happy")
        with pytest.raises(TypeError):
            result.emotions["joy"] = 0.0

    def test_empty_text_does_not_raise(self, classifier):
        assert classifier.classify("").mood == "Neutral"
