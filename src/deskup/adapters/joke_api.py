"""Official Joke API adapter."""

import requests

from deskup.core.models import Joke

API_URL = "https://official-joke-api.appspot.com/jokes/random"


class JokeAdapter:
    """Fetches a random joke. No authentication."""

    def __init__(self, timeout: float = 10.0, session: requests.Session | None = None):
        self.timeout = timeout
        self._session = session or requests.Session()

    def fetch_joke(self) -> Joke:
        resp = self._session.get(API_URL, timeout=self.timeout)
        resp.raise_for_status()
        return Joke.from_api(resp.json())
