"""File-based storage implementation."""

import json
import logging
import os

from core.interfaces import Storage

logger = logging.getLogger(__name__)


class FileStorage(Storage):
    """Stores each user's stats and weights as a JSON file."""

    def __init__(self, state_dir: str = None):
        self.state_dir = state_dir or os.environ.get(
            'WORDTILES_STATE_DIR',
            os.path.expanduser('~/.local/share/wordtiles')
        )
        os.makedirs(self.state_dir, exist_ok=True)

    def _get_state_file(self, user_id: str) -> str:
        """Get state file path for a user. Ids must be plain file name parts."""
        if not user_id or os.path.basename(user_id) != user_id or user_id in ('.', '..'):
            raise ValueError(f"Invalid user id: {user_id!r}")
        if user_id == "default":
            return os.path.join(self.state_dir, 'wordtiles_state.json')
        return os.path.join(self.state_dir, f'wordtiles_state_{user_id}.json')

    def load_state(self, user_id: str = "default") -> dict | None:
        state_file = self._get_state_file(user_id)
        if os.path.exists(state_file):
            try:
                with open(state_file, 'r', encoding='utf-8') as f:
                    return json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Could not read state for {user_id}: {e}")
                return None
        return None

    def save_state(self, state: dict, user_id: str = "default") -> None:
        state_file = self._get_state_file(user_id)
        with open(state_file, 'w', encoding='utf-8') as f:
            json.dump(state, f, indent=2, ensure_ascii=False)

    def list_users(self) -> list[str]:
        """List all existing user IDs."""
        users = []
        if os.path.exists(self.state_dir):
            for filename in os.listdir(self.state_dir):
                if filename == 'wordtiles_state.json':
                    users.append('default')
                elif filename.startswith('wordtiles_state_') and filename.endswith('.json'):
                    users.append(filename[len('wordtiles_state_'):-len('.json')])
        return sorted(users)

    def user_exists(self, user_id: str) -> bool:
        """Check if a user exists."""
        return os.path.exists(self._get_state_file(user_id))

    def delete_user(self, user_id: str) -> bool:
        """Delete a user's state file."""
        state_file = self._get_state_file(user_id)
        if os.path.exists(state_file):
            os.remove(state_file)
            return True
        return False
