"""FastAPI server for wordtiles."""

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from core.adaptive import AdaptiveWeights
from core.config import DEFAULT_COLLECTION, DEFAULT_WORD_LENGTH
from core.models import Direction
from core.session import SessionOptions, TrialStateMachine
from core.stats import SessionStats
from core.vocabulary import get_all_categories, get_category_name, get_collection_pool

from server.file_storage import FileStorage

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

MAX_WORD_LENGTH = 10
USER_ID_PATTERN = r"^[A-Za-z0-9_-]+$"


# Pydantic models for API
class StartSessionRequest(BaseModel):
    user_id: str = Field("default", pattern=USER_ID_PATTERN)
    collection: str = DEFAULT_COLLECTION
    word_length: int = Field(DEFAULT_WORD_LENGTH, ge=1, le=MAX_WORD_LENGTH)
    direction: Optional[Direction] = None  # None lets smart reverse mode decide


class UserRequest(BaseModel):
    user_id: str = Field("default", pattern=USER_ID_PATTERN)


class TileRequest(BaseModel):
    token: str
    user_id: str = Field("default", pattern=USER_ID_PATTERN)


class VisibilityRequest(BaseModel):
    hidden: bool
    user_id: str = Field("default", pattern=USER_ID_PATTERN)


class TokenView(BaseModel):
    token: str
    hint: Optional[str] = None


class TileView(BaseModel):
    token: str
    placed: bool
    hint: Optional[str] = None


class TrialResponse(BaseModel):
    collection: Optional[str]
    direction: Direction
    state: str
    available: bool
    displayed: list[TokenView]
    tiles: list[TileView]
    placed: list[str]
    can_check: bool
    is_celebrating: bool
    feedback: Optional[str]
    score: int
    wrong_streak: int
    last_result: Optional[bool]
    action: Optional[str] = None


class CollectionInfo(BaseModel):
    key: str
    name: str
    unit_count: int


class StatsResponse(BaseModel):
    score: int
    correct_answers: int
    wrong_answers: int
    accuracy_display: str
    wrong_streak: int
    longest_wrong_streak: int
    best_answer_time: Optional[float]
    average_answer_time: Optional[float]
    collection_correct: dict
    weakest_units: list


# Global state (in production, use proper DI)
storage: FileStorage = None
user_games: dict[str, TrialStateMachine] = {}
user_stats: dict[str, SessionStats] = {}
user_selectors: dict[str, AdaptiveWeights] = {}


def get_storage() -> FileStorage:
    global storage
    if storage is None:
        storage = FileStorage()
    return storage


def load_user(user_id: str) -> tuple[SessionStats, AdaptiveWeights]:
    """Get or load the stats and selection weights for a user."""
    if user_id not in user_stats:
        state = get_storage().load_state(user_id) or {}
        user_stats[user_id] = SessionStats.from_dict(state.get('stats', {}))
        user_selectors[user_id] = AdaptiveWeights.from_dict(state.get('weights', {}))
    return user_stats[user_id], user_selectors[user_id]


def save_user(user_id: str) -> None:
    """Persist stats and weights for a user. Trials themselves are never saved."""
    if user_id in user_stats:
        get_storage().save_state({
            'stats': user_stats[user_id].to_dict(),
            'weights': user_selectors[user_id].to_dict()
        }, user_id)


def get_game(user_id: str) -> TrialStateMachine:
    game = user_games.get(user_id)
    if game is None:
        logger.warning(f"No active session for {user_id}")
        raise HTTPException(status_code=404, detail="No active session, start one first")
    return game


def trial_view(game: TrialStateMachine, action: str | None = None) -> TrialResponse:
    trial = game.trial
    return TrialResponse(
        collection=game.pool.name,
        direction=trial.direction,
        state=game.state.value,
        available=game.is_available,
        displayed=[TokenView(token=t, hint=trial.hint_for(t)) for t in trial.displayed],
        tiles=[TileView(token=t, placed=placed, hint=trial.hint_for(t))
               for t, placed in game.tile_states()],
        placed=list(game.placed),
        can_check=game.can_check,
        is_celebrating=game.is_celebrating,
        feedback=game.feedback,
        score=game.score,
        wrong_streak=game.wrong_streak,
        last_result=game.last_result,
        action=action
    )


app = FastAPI(title="Wordtiles API", description="Kanji word-building practice API")


@app.on_event("startup")
async def startup():
    """Initialize storage on startup."""
    get_storage()
    logger.info(f"Using file storage at {storage.state_dir}")


@app.get("/")
async def root():
    """Health check."""
    return {"service": "wordtiles", "status": "ok"}


@app.get("/api/collections", response_model=list[CollectionInfo])
async def list_collections():
    """List built-in kanji collections."""
    result = []
    for key in get_all_categories():
        pool = get_collection_pool(key)
        result.append(CollectionInfo(key=key, name=get_category_name(key), unit_count=len(pool)))
    return result


@app.post("/api/session", response_model=TrialResponse)
async def start_session(request: StartSessionRequest):
    """Start (or restart) a word-building session and generate its first trial."""
    pool = get_collection_pool(request.collection)
    if pool is None:
        logger.warning(f"Unknown collection {request.collection!r} requested by {request.user_id}")
        raise HTTPException(status_code=404, detail=f"Unknown collection: {request.collection}")

    stats, selector = load_user(request.user_id)
    user_id = request.user_id
    options = SessionOptions(
        direction_override=request.direction,
        on_correct=lambda unit_ids: logger.info(f"{user_id} completed {''.join(unit_ids)}"),
        on_wrong=lambda: logger.info(f"{user_id} answered wrong, streak {stats.wrong_streak}"),
        initial_score=stats.score
    )
    game = TrialStateMachine(pool, selector, stats, options=options,
                             word_length=request.word_length)
    if not game.is_available:
        raise HTTPException(
            status_code=409,
            detail=f"Collection {request.collection} has {len(pool)} kanji, "
                   f"need {request.word_length} for a word"
        )

    user_games[user_id] = game
    logger.info(f"Started {request.collection} session for {user_id} (length {request.word_length})")
    return trial_view(game)


@app.get("/api/trial", response_model=TrialResponse)
async def get_trial(user_id: str = Query("default", pattern=USER_ID_PATTERN)):
    """Get the current trial view."""
    return trial_view(get_game(user_id))


@app.post("/api/tile", response_model=TrialResponse)
async def tap_tile(request: TileRequest):
    """Place or remove a tile."""
    game = get_game(request.user_id)
    game.tap_tile(request.token)
    return trial_view(game)


@app.post("/api/clear", response_model=TrialResponse)
async def clear_placed(request: UserRequest):
    """Remove all placed tiles."""
    game = get_game(request.user_id)
    game.clear_placed()
    return trial_view(game)


@app.post("/api/action", response_model=TrialResponse)
async def primary_action(request: UserRequest):
    """Bottom-bar button: check, continue or try again depending on state."""
    game = get_game(request.user_id)
    action = game.primary_action()
    if action in ('check', 'continue'):
        save_user(request.user_id)
    return trial_view(game, action)


@app.post("/api/visibility", response_model=TrialResponse)
async def set_visibility(request: VisibilityRequest):
    """Pause or resume answer timing when the client is hidden or shown."""
    game = get_game(request.user_id)
    game.set_hidden(request.hidden)
    return trial_view(game)


@app.get("/api/stats", response_model=StatsResponse)
async def get_stats(user_id: str = Query("default", pattern=USER_ID_PATTERN)):
    """Get the user's answer statistics."""
    stats, _ = load_user(user_id)
    return StatsResponse(
        score=stats.score,
        correct_answers=stats.correct_answers,
        wrong_answers=stats.wrong_answers,
        accuracy_display=stats.get_accuracy_display(),
        wrong_streak=stats.wrong_streak,
        longest_wrong_streak=stats.longest_wrong_streak,
        best_answer_time=stats.best_answer_time,
        average_answer_time=stats.average_answer_time,
        collection_correct=stats.collection_correct,
        weakest_units=stats.get_weakest_units()
    )


def create_app():
    """Factory function for creating the app (useful for testing)."""
    return app
