"""TMDb lookups used to refine episode titles of TV entries."""
import threading
import typing

import requests

from sanitizer.media import formatter
from sanitizer.media.classifier import MediaKind
from sanitizer.utils import TMDB_API_KEY, TMDB_BASE_URL, LogLevel, file_util, logger


class TMDbClient:
    """
    Minimal TMDb client for series search and season episode listings.

    Without an API key every lookup returns None, so callers behave exactly as
    if no metadata provider was configured. Results are cached in memory.
    """

    def __init__(self, api_key: str | None = TMDB_API_KEY, base_url: str = TMDB_BASE_URL, timeout: int = 10):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._cache = {}
        self._cache_lock = threading.Lock()

    @property
    def available(self) -> bool:
        return bool(self.api_key)

    def _request(self, path: str, params: dict, error_context: str) -> typing.Optional[dict]:
        """
        Common helper for TMDb API requests with error handling.
        Returns JSON response data or None on failure.
        """
        if not self.available:
            return None
        try:
            resp = requests.get(
                f"{self.base_url}{path}", params={"api_key": self.api_key, **params}, timeout=self.timeout
            )
            if resp.status_code != 200:
                logger.log("tmdb.http_error", LogLevel.DEBUG, context=error_context, status=resp.status_code)
                return None
            return resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.log("tmdb.error", LogLevel.DEBUG, context=error_context, error=str(e))
            return None

    def _cached(self, key: str, fetch):
        with self._cache_lock:
            if key in self._cache:
                return self._cache[key]
        value = fetch()
        with self._cache_lock:
            self._cache[key] = value
        return value

    def search_tv(self, title: str, year: typing.Optional[int] = None) -> typing.Optional[dict]:
        """Search TMDb for a TV series; returns {"tmdb_id", "name", "year"} of the best match or None."""

        def fetch():
            params = {"query": title, "include_adult": "false"}
            if year:
                params["first_air_date_year"] = str(year)
            data = self._request("/search/tv", params, f"searching TV '{title}'")
            results = (data or {}).get("results") or []
            if not results:
                return None
            show = results[0]
            first_air = show.get("first_air_date") or ""
            return {
                "tmdb_id": show.get("id"),
                "name": show.get("name"),
                "year": int(first_air[:4]) if first_air[:4].isdigit() else None,
            }

        return self._cached(f"tv:{title}:{year}", fetch)

    def get_season_episodes(self, tmdb_id: int, season: int) -> dict[int, str]:
        """Episode number -> episode name for one season; empty when unknown."""

        def fetch():
            data = self._request(f"/tv/{tmdb_id}/season/{season}", {}, f"getting season {season} of {tmdb_id}")
            episodes = {}
            for ep in (data or {}).get("episodes") or []:
                number, name = ep.get("episode_number"), ep.get("name")
                if isinstance(number, int) and name:
                    episodes[number] = name
            return episodes

        return self._cached(f"season:{tmdb_id}:{season}", fetch)

    def episode_title(self, title: str, year: int | None, season: int, episode: int) -> str | None:
        """Look up the name of one episode by series title."""
        show = self.search_tv(title, year)
        if not show or not show.get("tmdb_id"):
            logger.log("tmdb.no_match", LogLevel.DEBUG, title=title, year=year)
            return None
        return self.get_season_episodes(show["tmdb_id"], season).get(episode)


def enrich_episode_titles(entries, provider, include_edition: bool = False) -> int:
    """
    Replace the episode title of TV entries with the provider's and regenerate `new_name`.

    `provider` is anything with `episode_title(title, year, season, episode)`.
    Entries the provider knows nothing about are left untouched. Returns the
    number of entries updated.
    """
    if provider is None:
        return 0

    updated = 0
    for entry in entries:
        record = entry.record
        if entry.kind != MediaKind.TV_SHOW or record is None:
            continue
        if record.season is None or record.episode is None:
            continue

        name = provider.episode_title(record.title, record.year, record.season, record.episode)
        if not name:
            continue
        record.episode_title = file_util.sanitize_filename(name)
        entry.new_name = formatter.generate_filename(record, entry.kind, entry.extension, include_edition)
        logger.log("enrich.episode", LogLevel.DEBUG, file=entry.name, episode_title=record.episode_title)
        updated += 1
    return updated
