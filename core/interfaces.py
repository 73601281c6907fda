"""Abstract base classes for dependency injection."""

from abc import ABC, abstractmethod


class AdaptiveSelector(ABC):
    """Weighting table over unit ids, shared across trials of a session."""

    @abstractmethod
    def select_weighted_character(self, candidates: list[str]) -> str | None:
        """Pick one id among candidates, biased toward under-practiced units."""
        pass

    @abstractmethod
    def mark_character_seen(self, unit_id: str) -> None:
        """Record that a unit was shown in a trial."""
        pass

    @abstractmethod
    def update_character_weight(self, unit_id: str, success: bool) -> None:
        """Adjust a unit's weight after a checked answer."""
        pass


class ReverseModeController(ABC):
    """Decides the direction of the next trial from recent outcomes."""

    @property
    @abstractmethod
    def is_reverse(self) -> bool:
        """Direction to use for the next generated trial."""
        pass

    @abstractmethod
    def decide_next_mode(self) -> None:
        """Called once after each correct answer."""
        pass

    @abstractmethod
    def record_wrong_answer(self) -> None:
        """Called once after each wrong answer."""
        pass


class StatsSink(ABC):
    """Receives per-trial outcome events for external persistence."""

    @abstractmethod
    def record_unit_result(self, unit_id: str, correct: bool) -> None:
        """Record the outcome for one unit of a checked word."""
        pass

    @abstractmethod
    def record_answer(self, correct: bool, unit_count: int, collection: str | None = None) -> None:
        """Record a checked answer of unit_count units as a whole."""
        pass

    @abstractmethod
    def record_score(self, score: int, delta: int) -> None:
        """Record the running score after a change of delta."""
        pass

    @abstractmethod
    def record_wrong_streak(self, streak: int) -> None:
        """Record the current number of wrong answers in a row."""
        pass

    @abstractmethod
    def record_answer_time(self, seconds: float) -> None:
        """Record the time taken for a correct answer."""
        pass


class Storage(ABC):
    """Abstract base class for per-user state storage."""

    @abstractmethod
    def load_state(self, user_id: str = "default") -> dict | None:
        """Load state for a user. Returns state dict or None if not found."""
        pass

    @abstractmethod
    def save_state(self, state: dict, user_id: str = "default") -> None:
        """Save state for a user."""
        pass

    @abstractmethod
    def list_users(self) -> list[str]:
        """List all user ids with saved state."""
        pass

    @abstractmethod
    def user_exists(self, user_id: str) -> bool:
        """Check if a user has saved state."""
        pass
