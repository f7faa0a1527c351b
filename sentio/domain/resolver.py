# sentio/domain/resolver.py
"""
감정 분포 → 무드 라벨 + 응원 메시지 결정 규칙.

규칙은 위에서부터 순서대로 평가하고 처음 맞는 규칙을 사용한다.
임계값이 서로 겹치므로 순서를 바꾸면 안 된다.
(슬픔+분노 복합 규칙은 개별 임계값이 더 낮아도 단일 감정 규칙보다 먼저 본다.)

라벨은 화면과 저장 레코드가 그대로 쓰므로 바꾸지 말 것. 메시지 문구는 의도만 유지하면 수정 가능.
"""

from __future__ import annotations

from typing import Callable, Mapping, Tuple

from sentio.domain.emotions import MoodAdvice

SAD_AND_ANGRY = MoodAdvice(
    mood="Sad & Angry",
    advice=(
        "Oh nooo, that sounds really bad. 💔 Please take a breath, sip some water, "
        "check for any injuries, and tell a responsible adult or someone you trust. "
        "You didn't deserve that."
    ),
)

HAPPY = MoodAdvice(
    mood="Happy",
    advice=(
        "Wow, that is really nice to hear! 🌸 Keep enjoying these moments and maybe "
        "celebrate with a small treat or a message to your friend."
    ),
)

SAD = MoodAdvice(
    mood="Sad",
    advice=(
        "I'm really sorry you're going through this. 💙 Try a gentle check-in: "
        "a glass of water, slow breathing, and reach out to someone you trust."
    ),
)

ANGRY = MoodAdvice(
    mood="Angry",
    advice=(
        "It's completely valid to feel angry. 😤 When you're ready, try writing "
        "what happened and what you need right now."
    ),
)

ANXIOUS = MoodAdvice(
    mood="Anxious",
    advice=(
        "That sounds stressful. 🤗 Try 4-7-8 breathing (in 4, hold 7, out 8) and "
        "ground yourself by noticing 5 things you can see."
    ),
)

SURPRISED = MoodAdvice(
    mood="Surprised",
    advice="That was unexpected! 😮 Take a moment to process and decide what support you might want.",
)

NEUTRAL = MoodAdvice(
    mood="Neutral",
    advice=(
        "Thanks for sharing. 🌟 Keep listening to yourself. "
        "A short walk or a favorite song might help right now."
    ),
)

MOOD_LABELS = (
    SAD_AND_ANGRY.mood,
    HAPPY.mood,
    SAD.mood,
    ANGRY.mood,
    ANXIOUS.mood,
    SURPRISED.mood,
    NEUTRAL.mood,
)

Scores = Mapping[str, float]

_RULES: Tuple[Tuple[Callable[[float, float, float, float, float], bool], MoodAdvice], ...] = (
    # (joy, sadness, anger, fear, surprise) -> bool
    (lambda joy, sad, ang, fear, sur: sad >= 0.35 and ang >= 0.35, SAD_AND_ANGRY),
    (lambda joy, sad, ang, fear, sur: joy >= 0.6 and ang < 0.2 and sad < 0.2, HAPPY),
    (lambda joy, sad, ang, fear, sur: sad >= 0.5 and ang < 0.35, SAD),
    (lambda joy, sad, ang, fear, sur: ang >= 0.5 and sad < 0.35, ANGRY),
    (lambda joy, sad, ang, fear, sur: fear >= 0.5, ANXIOUS),
    (lambda joy, sad, ang, fear, sur: sur >= 0.6, SURPRISED),
)


def _score(emotions: Scores, key: str) -> float:
    return float(emotions.get(key, 0.0) or 0.0)


def resolve(emotions: Scores) -> MoodAdvice:
    """감정 분포에서 무드/조언을 결정한다. 없는 키는 0으로 본다."""
    args = (
        _score(emotions, "joy"),
        _score(emotions, "sadness"),
        _score(emotions, "anger"),
        _score(emotions, "fear"),
        _score(emotions, "surprise"),
    )
    for matches, outcome in _RULES:
        if matches(*args):
            return outcome
    return NEUTRAL
