"""Streak-driven choice between forward and reverse trials."""

import random

from .config import REVERSE_STREAK_THRESHOLD, REVERSE_PROBABILITY
from .interfaces import ReverseModeController


class SmartReverseMode(ReverseModeController):
    """Mixes in reverse trials once the learner is on a correct streak."""

    def __init__(self, rng: random.Random | None = None,
                 streak_threshold: int = REVERSE_STREAK_THRESHOLD,
                 probability: float = REVERSE_PROBABILITY):
        self._rng = rng or random.Random()
        self.streak_threshold = streak_threshold
        self.probability = probability
        self.streak = 0
        self._is_reverse = False

    @property
    def is_reverse(self) -> bool:
        return self._is_reverse

    def decide_next_mode(self) -> None:
        self.streak += 1
        if self.streak >= self.streak_threshold:
            self._is_reverse = self._rng.random() < self.probability
        else:
            self._is_reverse = False

    def record_wrong_answer(self) -> None:
        self.streak = 0
        self._is_reverse = False
