"""Domain models for wordtiles."""

import logging
from enum import Enum

from .utils import first_meaning, split_meanings

logger = logging.getLogger(__name__)


class Direction(str, Enum):
    """Which label of a unit is the prompt.

    FORWARD shows forward labels (kanji) and expects reverse labels (meanings)
    as tiles. REVERSE swaps the two.
    """
    FORWARD = 'forward'
    REVERSE = 'reverse'

    @property
    def opposite(self) -> 'Direction':
        return Direction.REVERSE if self is Direction.FORWARD else Direction.FORWARD

    @classmethod
    def from_reverse(cls, is_reverse: bool) -> 'Direction':
        return cls.REVERSE if is_reverse else cls.FORWARD


class BottomBarState(str, Enum):
    CHECK = 'check'
    CORRECT = 'correct'
    WRONG = 'wrong'


class Unit:
    """A learnable item with a forward and a reverse label."""

    def __init__(self, unit_id: str, forward: str, reverse: str, hints=None, meanings=None):
        self.id = unit_id
        self.forward = forward
        self.reverse = reverse
        self.hints = tuple(hints or ())
        self.meanings = tuple(meanings or (reverse,))

    def label(self, direction: Direction) -> str:
        """Get the label shown for this unit in the given direction."""
        return self.forward if direction is Direction.FORWARD else self.reverse

    @property
    def hint(self) -> str | None:
        """First pronunciation hint, if any."""
        return self.hints[0] if self.hints else None

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'forward': self.forward,
            'reverse': self.reverse,
            'hints': list(self.hints),
            'meanings': list(self.meanings)
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Unit':
        return cls(data['id'], data['forward'], data['reverse'],
                   hints=data.get('hints'), meanings=data.get('meanings'))

    @classmethod
    def from_meanings(cls, char: str, meanings: str, hints=None) -> 'Unit':
        """Build a unit whose reverse label is the first of its comma separated meanings."""
        return cls(char, char, first_meaning(meanings), hints=hints,
                   meanings=split_meanings(meanings))

    def __eq__(self, other):
        if not isinstance(other, Unit):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self):
        return hash(self.id)

    def __repr__(self):
        return f"Unit({self.id!r}, {self.forward!r}, {self.reverse!r})"


class Pool:
    """Ordered, immutable set of units available to a session."""

    def __init__(self, units, name: str | None = None):
        self.name = name
        self.units = tuple(units)
        self._by_id = {u.id: u for u in self.units}
        self._by_forward = {u.forward: u for u in self.units}
        self._by_reverse = {}
        for unit in self.units:
            existing = self._by_reverse.get(unit.reverse)
            if existing is not None and existing.id != unit.id:
                logger.warning(
                    f"Pool {name!r}: reverse label {unit.reverse!r} shared by "
                    f"{existing.id!r} and {unit.id!r}, lookups resolve to {unit.id!r}"
                )
            self._by_reverse[unit.reverse] = unit

    def __len__(self) -> int:
        return len(self.units)

    def __iter__(self):
        return iter(self.units)

    def get(self, unit_id: str) -> Unit | None:
        return self._by_id.get(unit_id)

    def labels(self, direction: Direction) -> list[str]:
        """All labels for a direction, in pool order."""
        return [u.label(direction) for u in self.units]

    def resolve(self, direction: Direction, label: str) -> Unit | None:
        """Find the unit behind a label of the given direction."""
        if direction is Direction.FORWARD:
            return self._by_forward.get(label)
        return self._by_reverse.get(label)


class Trial:
    """One generated question: prompt tokens, answer tokens and the tile bag."""

    def __init__(self, direction: Direction, unit_ids: list[str], displayed: list[str],
                 answer: list[str], tiles: list[str], requested_length: int,
                 skipped_selections: int = 0, hints: dict | None = None):
        self.direction = direction
        self.unit_ids = list(unit_ids)
        self.displayed = list(displayed)
        self.answer = list(answer)
        self.tiles = list(tiles)
        self.requested_length = requested_length
        self.skipped_selections = skipped_selections
        self.hints = dict(hints or {})

    @classmethod
    def empty(cls, direction: Direction, requested_length: int) -> 'Trial':
        """Sentinel for a pool too small to build a word."""
        return cls(direction, [], [], [], [], requested_length)

    @property
    def is_empty(self) -> bool:
        return not self.unit_ids

    @property
    def is_short(self) -> bool:
        """True when fewer units were drawn than requested."""
        return 0 < len(self.unit_ids) < self.requested_length

    @property
    def distractors(self) -> list[str]:
        answer = set(self.answer)
        return [t for t in self.tiles if t not in answer]

    def hint_for(self, token: str) -> str | None:
        """Reading hint for a token, only defined for forward labels."""
        return self.hints.get(token)

    def to_dict(self) -> dict:
        return {
            'direction': self.direction.value,
            'unit_ids': self.unit_ids,
            'displayed': self.displayed,
            'answer': self.answer,
            'tiles': self.tiles,
            'requested_length': self.requested_length,
            'skipped_selections': self.skipped_selections,
            'hints': self.hints
        }
