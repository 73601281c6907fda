"""Answer checking for word-building trials."""

from .models import Trial


def is_correct(placed: list[str], trial: Trial) -> bool:
    """Check a placed tile sequence against a trial's answer.

    Order matters: the right tiles in the wrong order are wrong. There is no
    partial credit, so extra or missing tiles are wrong as well.
    """
    if len(placed) != len(trial.answer):
        return False
    return all(tile == expected for tile, expected in zip(placed, trial.answer))
