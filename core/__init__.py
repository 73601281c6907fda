from .models import Direction, BottomBarState, Unit, Pool, Trial
from .interfaces import AdaptiveSelector, ReverseModeController, StatsSink, Storage
from .generator import generate_trial, shuffle_tiles
from .evaluator import is_correct
from .session import TrialStateMachine, SessionOptions, ScoreBoard
from .adaptive import AdaptiveWeights
from .reverse_mode import SmartReverseMode
from .stats import SessionStats
from .stopwatch import Stopwatch
from .config import DEFAULT_WORD_LENGTH, MAX_DISTRACTORS, DEFAULT_COLLECTION

__all__ = [
    'Direction', 'BottomBarState', 'Unit', 'Pool', 'Trial',
    'AdaptiveSelector', 'ReverseModeController', 'StatsSink', 'Storage',
    'generate_trial', 'shuffle_tiles',
    'is_correct',
    'TrialStateMachine', 'SessionOptions', 'ScoreBoard',
    'AdaptiveWeights', 'SmartReverseMode', 'SessionStats', 'Stopwatch',
    'DEFAULT_WORD_LENGTH', 'MAX_DISTRACTORS', 'DEFAULT_COLLECTION'
]
