"""Adaptive unit selection weighted toward under-practiced units."""

import random

from .config import (
    DEFAULT_WEIGHT, MIN_WEIGHT, MAX_WEIGHT,
    UNSEEN_BOOST, SUCCESS_DECAY, FAILURE_PENALTY
)
from .interfaces import AdaptiveSelector


class AdaptiveWeights(AdaptiveSelector):
    """Per-unit weights shared by every trial of a session.

    A correct answer shrinks a unit's weight, a wrong one grows it, and units
    that were never shown get a boost so new material comes up early.
    """

    def __init__(self, rng: random.Random | None = None):
        self.weights = {}
        self.seen = {}
        self._rng = rng or random.Random()

    def get_weight(self, unit_id: str) -> float:
        return self.weights.get(unit_id, DEFAULT_WEIGHT)

    def _effective_weight(self, unit_id: str) -> float:
        weight = self.get_weight(unit_id)
        if not self.seen.get(unit_id):
            weight *= UNSEEN_BOOST
        return weight

    def select_weighted_character(self, candidates: list[str]) -> str | None:
        if not candidates:
            return None
        candidates = list(candidates)
        w = [self._effective_weight(c) for c in candidates]
        return self._rng.choices(candidates, weights=w, k=1)[0]

    def mark_character_seen(self, unit_id: str) -> None:
        self.seen[unit_id] = self.seen.get(unit_id, 0) + 1

    def update_character_weight(self, unit_id: str, success: bool) -> None:
        weight = self.get_weight(unit_id)
        if success:
            weight *= SUCCESS_DECAY
        else:
            weight += FAILURE_PENALTY
        self.weights[unit_id] = min(MAX_WEIGHT, max(MIN_WEIGHT, weight))

    def to_dict(self) -> dict:
        return {
            'weights': self.weights,
            'seen': self.seen
        }

    @classmethod
    def from_dict(cls, data: dict, rng: random.Random | None = None) -> 'AdaptiveWeights':
        selector = cls(rng)
        selector.weights = {k: float(v) for k, v in data.get('weights', {}).items()}
        selector.seen = {k: int(v) for k, v in data.get('seen', {}).items()}
        return selector
