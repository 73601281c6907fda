"""Trial generation: word selection, distractors and tile shuffling."""

import logging
import random

from .config import MAX_DISTRACTORS
from .interfaces import AdaptiveSelector
from .models import Direction, Pool, Trial

logger = logging.getLogger(__name__)

_random = random.Random()


def shuffle_tiles(tiles: list[str], rng: random.Random | None = None) -> list[str]:
    """Return a uniformly shuffled copy of the tiles."""
    rng = rng or _random
    shuffled = list(tiles)
    rng.shuffle(shuffled)
    return shuffled


def distractor_count(pool_size: int, word_length: int) -> int:
    """Number of wrong tiles to add to a trial of word_length units."""
    return max(0, min(MAX_DISTRACTORS, pool_size - word_length))


def _select_units(pool: Pool, direction: Direction, word_length: int,
                  selector: AdaptiveSelector) -> tuple[list, int]:
    """Pick up to word_length distinct units. Returns (units, skipped_count)."""
    source_labels = pool.labels(direction)
    used_labels = set()
    used_answers = set()
    selected = []
    skipped = 0

    for _ in range(word_length):
        available = [label for label in source_labels if label not in used_labels]
        if not available:
            break

        candidates = []
        for label in available:
            unit = pool.resolve(direction, label)
            if unit is None or unit.id in candidates:
                continue
            # Two units sharing an answer label would put the same tile in the bag twice
            if unit.label(direction.opposite) in used_answers:
                continue
            candidates.append(unit.id)
        if not candidates:
            skipped += 1
            continue

        picked = selector.select_weighted_character(candidates)
        unit = pool.get(picked) if picked is not None else None
        if unit is None or unit.id not in candidates:
            logger.warning(f"Selector returned unresolvable unit {picked!r}, skipping slot")
            skipped += 1
            continue

        selected.append(unit)
        used_labels.add(unit.label(direction))
        used_answers.add(unit.label(direction.opposite))
        selector.mark_character_seen(unit.id)

    return selected, skipped


def _draw_distractors(pool: Pool, direction: Direction, answer: list[str],
                      count: int, rng: random.Random) -> list[str]:
    """Draw up to count answer-side labels not used by the answer."""
    source = list(dict.fromkeys(pool.labels(direction.opposite)))
    used = set(answer)
    distractors = []
    for _ in range(count):
        available = [c for c in source if c not in used and c not in distractors]
        if not available:
            break
        distractors.append(available[rng.randrange(len(available))])
    return distractors


def generate_trial(pool: Pool, direction: Direction, word_length: int,
                   selector: AdaptiveSelector, rng: random.Random | None = None) -> Trial:
    """Generate one trial from the pool.

    Never raises. A word_length below 1 or a pool smaller than word_length
    gives an empty trial, unresolvable picks give a shorter word and a lack
    of candidates gives fewer distractors.
    """
    rng = rng or _random

    if word_length < 1:
        logger.info(f"Requested word length {word_length}, returning an empty trial")
        return Trial.empty(direction, word_length)
    if len(pool) < word_length:
        logger.info(f"Pool {pool.name!r} has {len(pool)} units, need {word_length} for a trial")
        return Trial.empty(direction, word_length)

    units, skipped = _select_units(pool, direction, word_length, selector)
    displayed = [u.label(direction) for u in units]
    answer = [u.label(direction.opposite) for u in units]

    wanted = distractor_count(len(pool), word_length)
    distractors = _draw_distractors(pool, direction, answer, wanted, rng)
    tiles = shuffle_tiles(answer + distractors, rng)

    # Hints belong to forward labels: the prompt in forward mode, the tiles in reverse mode
    if direction is Direction.FORWARD:
        hinted = displayed
    else:
        hinted = tiles
    hints = {}
    for token in hinted:
        unit = pool.resolve(Direction.FORWARD, token)
        if unit is not None and unit.hint:
            hints[token] = unit.hint

    trial = Trial(direction, [u.id for u in units], displayed, answer, tiles,
                  requested_length=word_length, skipped_selections=skipped, hints=hints)
    logger.debug(
        f"Generated {direction.value} trial {displayed} -> {answer} "
        f"with {len(distractors)}/{wanted} distractors"
    )
    return trial
