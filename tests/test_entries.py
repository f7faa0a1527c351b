"""
Tests for journal-entry record building and mood_data parsing.
"""

import json
from datetime import datetime, timezone

from sentio.domain.emotions import AnalysisResult, make_distribution
from sentio.domain.entries import (
    build_entry_record,
    normalize_entry,
    parse_mood_data,
    parse_timestamp,
)

NOW = datetime(2024, 5, 10, 12, 30, tzinfo=timezone.utc)


def _analysis():
    return AnalysisResult(
        mood="Sad",
        score=0.7,
        emotions=make_distribution({"sadness": 0.7, "anger": 0.3}),
        advice="Take care.",
        is_fallback=True,
    )


class TestBuildEntryRecord:
    """Record shape produced for the external store."""

    def test_fields(self):
        record = build_entry_record("user-1", "rough day", _analysis(), now=NOW)
        assert set(record) == {
            "user_id",
            "content",
            "mood",
            "mood_data",
            "sentiment_score",
            "created_at",
        }
        assert record["user_id"] == "user-1"
        assert record["mood"] == "Sad"
        assert record["sentiment_score"] == 0.7
        assert record["created_at"] == NOW.isoformat()

    def test_mood_data_is_json(self):
        record = build_entry_record("user-1", "rough day", _analysis(), now=NOW)
        mood_data = json.loads(record["mood_data"])
        assert mood_data["dominantEmotion"] == "Sad"
        assert mood_data["advice"] == "Take care."
        assert mood_data["emotions"]["sadness"] == 0.7
        assert mood_data["timestamp"] == NOW.isoformat()


class TestParseMoodData:
    """Reading stored mood_data back."""

    def test_json_string(self):
        entry = {"mood_data": json.dumps({"emotions": {"joy": 1.0}, "dominantEmotion": "Happy"})}
        assert parse_mood_data(entry)["dominantEmotion"] == "Happy"

    def test_legacy_flat_format_migrated(self):
        entry = {"mood_data": {"joy": 0.2, "sadness": 0.5, "anger": 0.1}}
        emotions = parse_mood_data(entry)["emotions"]
        assert emotions == {"joy": 0.2, "sadness": 0.5, "anger": 0.1, "fear": 0.0, "surprise": 0.0}

    def test_missing_mood_data_uses_entry_mood(self):
        entry = {"mood": "Angry", "created_at": "2024-05-10T10:00:00Z"}
        mood_data = parse_mood_data(entry)
        assert mood_data["dominantEmotion"] == "Angry"
        assert mood_data["timestamp"] == "2024-05-10T10:00:00Z"
        assert mood_data["advice"] == ""

    def test_unparseable_string(self):
        assert parse_mood_data({"mood_data": "{not json"}) is None
        assert normalize_entry({"mood_data": "{not json"}) is None

    def test_normalize_does_not_mutate(self):
        entry = {"mood_data": json.dumps({"emotions": {"joy": 1.0}})}
        normalized = normalize_entry(entry)
        assert isinstance(normalized["mood_data"], dict)
        assert isinstance(entry["mood_data"], str)


class TestParseTimestamp:
    def test_zulu_suffix(self):
        assert parse_timestamp("2024-05-10T10:00:00Z") == datetime(2024, 5, 10, 10, tzinfo=timezone.utc)

    def test_naive_assumed_utc(self):
        assert parse_timestamp("2024-05-10T10:00:00").tzinfo == timezone.utc

    def test_short_fraction_with_offset(self):
        """Stored timestamps drop trailing zeros from the fraction."""
        assert parse_timestamp("2024-05-10T09:00:00.12+00:00") == datetime(
            2024, 5, 10, 9, 0, 0, 120000, tzinfo=timezone.utc
        )

    def test_short_fraction_zulu(self):
        assert parse_timestamp("2024-05-10T09:00:00.5Z").microsecond == 500000

    def test_long_fraction_truncated(self):
        assert parse_timestamp("2024-05-10T09:00:00.1234567").microsecond == 123456
