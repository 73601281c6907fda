"""REST API client for wordtiles server."""

import requests
from typing import Optional


class TilesAPIClient:
    """Client for communicating with the wordtiles REST API."""

    def __init__(self, base_url: str = "http://localhost:8000", user_id: str = "default"):
        self.base_url = base_url.rstrip('/')
        self.user_id = user_id
        self.session = requests.Session()

    def _get(self, endpoint: str, params: dict = None) -> dict:
        """Make a GET request."""
        if params is None:
            params = {}
        params['user_id'] = self.user_id
        response = self.session.get(f"{self.base_url}{endpoint}", params=params)
        response.raise_for_status()
        return response.json()

    def _post(self, endpoint: str, data: dict = None) -> dict:
        """Make a POST request."""
        if data is None:
            data = {}
        data['user_id'] = self.user_id
        response = self.session.post(f"{self.base_url}{endpoint}", json=data)
        response.raise_for_status()
        return response.json()

    def health_check(self) -> dict:
        """Check if the server is running."""
        response = self.session.get(f"{self.base_url}/")
        response.raise_for_status()
        return response.json()

    def get_collections(self) -> list:
        """List available kanji collections."""
        response = self.session.get(f"{self.base_url}/api/collections")
        response.raise_for_status()
        return response.json()

    def start_session(self, collection: str, word_length: int,
                      direction: Optional[str] = None) -> dict:
        """Start a session and get its first trial."""
        return self._post("/api/session", {
            'collection': collection,
            'word_length': word_length,
            'direction': direction
        })

    def tap_tile(self, token: str) -> dict:
        """Place or remove a tile."""
        return self._post("/api/tile", {'token': token})

    def clear_placed(self) -> dict:
        """Remove all placed tiles."""
        return self._post("/api/clear")

    def primary_action(self) -> dict:
        """Check, continue or retry depending on the trial state."""
        return self._post("/api/action")

    def get_stats(self) -> dict:
        """Get answer statistics."""
        return self._get("/api/stats")
