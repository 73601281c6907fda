"""Configuration constants for wordtiles."""

DEFAULT_COLLECTION = 'nature'

# Trial generation
DEFAULT_WORD_LENGTH = 3
MAX_DISTRACTORS = 3           # Extra wrong tiles per trial, capped by pool size

# Adaptive selection weights
DEFAULT_WEIGHT = 1.0
MIN_WEIGHT = 0.1
MAX_WEIGHT = 10.0
UNSEEN_BOOST = 2.0            # Multiplier for units never shown yet
SUCCESS_DECAY = 0.8           # Weight multiplier after a correct answer
FAILURE_PENALTY = 1.5         # Weight added after a wrong answer

# Smart reverse mode
REVERSE_STREAK_THRESHOLD = 3  # Correct answers in a row before reverse trials can appear
REVERSE_PROBABILITY = 0.4     # Chance of a reverse trial once the streak is reached

# Stats
HISTORY_LIMIT = 100           # Recent correct units kept
ANSWER_TIME_LIMIT = 100       # Recent answer times kept
