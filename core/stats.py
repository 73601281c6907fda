"""In-memory outcome statistics for a learner."""

from .config import HISTORY_LIMIT, ANSWER_TIME_LIMIT
from .interfaces import StatsSink


class SessionStats(StatsSink):
    """Accumulates trial outcomes and serializes them for storage."""

    def __init__(self):
        self.score = 0
        self.correct_answers = 0
        self.wrong_answers = 0
        self.wrong_streak = 0
        self.longest_wrong_streak = 0
        self.unit_scores = {}        # {unit_id: {correct, wrong}}
        self.collection_correct = {}  # {collection: correct unit count}
        self.unit_history = []       # Recent correctly answered unit ids
        self.answer_times = []       # Recent correct answer times in seconds

    def record_unit_result(self, unit_id: str, correct: bool) -> None:
        scores = self.unit_scores.setdefault(unit_id, {'correct': 0, 'wrong': 0})
        if correct:
            scores['correct'] += 1
            self.unit_history.append(unit_id)
            self.unit_history = self.unit_history[-HISTORY_LIMIT:]
        else:
            scores['wrong'] += 1

    def record_answer(self, correct: bool, unit_count: int, collection: str | None = None) -> None:
        if not correct:
            self.wrong_answers += 1
            return
        self.correct_answers += 1
        if collection:
            self.collection_correct[collection] = self.collection_correct.get(collection, 0) + unit_count

    def record_score(self, score: int, delta: int) -> None:
        self.score = score

    def record_wrong_streak(self, streak: int) -> None:
        self.wrong_streak = streak
        self.longest_wrong_streak = max(self.longest_wrong_streak, streak)

    def record_answer_time(self, seconds: float) -> None:
        self.answer_times.append(round(seconds, 3))
        self.answer_times = self.answer_times[-ANSWER_TIME_LIMIT:]

    @property
    def best_answer_time(self) -> float | None:
        return min(self.answer_times) if self.answer_times else None

    @property
    def average_answer_time(self) -> float | None:
        if not self.answer_times:
            return None
        return sum(self.answer_times) / len(self.answer_times)

    def get_accuracy_display(self) -> str:
        """Success percentage over all checked answers."""
        total = self.correct_answers + self.wrong_answers
        if total == 0:
            return "0%"
        return f"{round(self.correct_answers / total * 100)}%"

    def get_weakest_units(self, count: int = 5) -> list[dict]:
        """Units with the lowest success rate, most attempted first on ties."""
        rows = []
        for unit_id, s in self.unit_scores.items():
            total = s['correct'] + s['wrong']
            if total == 0:
                continue
            rows.append({
                'unit_id': unit_id,
                'correct': s['correct'],
                'wrong': s['wrong'],
                'success_rate': round(s['correct'] / total * 100, 1)
            })
        rows.sort(key=lambda r: (r['success_rate'], -(r['correct'] + r['wrong'])))
        return rows[:count]

    def to_dict(self) -> dict:
        return {
            'score': self.score,
            'correct_answers': self.correct_answers,
            'wrong_answers': self.wrong_answers,
            'wrong_streak': self.wrong_streak,
            'longest_wrong_streak': self.longest_wrong_streak,
            'unit_scores': self.unit_scores,
            'collection_correct': self.collection_correct,
            'unit_history': self.unit_history,
            'answer_times': self.answer_times
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'SessionStats':
        stats = cls()
        stats.score = max(0, int(data.get('score', 0)))
        stats.correct_answers = data.get('correct_answers', 0)
        stats.wrong_answers = data.get('wrong_answers', 0)
        stats.wrong_streak = data.get('wrong_streak', 0)
        stats.longest_wrong_streak = data.get('longest_wrong_streak', 0)
        stats.unit_scores = {
            unit_id: {'correct': s.get('correct', 0), 'wrong': s.get('wrong', 0)}
            for unit_id, s in data.get('unit_scores', {}).items()
        }
        stats.collection_correct = dict(data.get('collection_correct', {}))
        stats.unit_history = list(data.get('unit_history', []))[-HISTORY_LIMIT:]
        stats.answer_times = list(data.get('answer_times', []))[-ANSWER_TIME_LIMIT:]
        return stats
