from datetime import datetime, timezone
from unittest.mock import Mock, patch

import pytest
import requests

from sanitizer.media import classifier, formatter
from sanitizer.media.enrich import TMDbClient, enrich_episode_titles
from sanitizer.scan import MediaEntry
from tests.fakes import FakeProvider

SEARCH_RESPONSE = {"results": [{"id": 42, "name": "The Show", "first_air_date": "2015-09-01"}]}
SEASON_RESPONSE = {"episodes": [{"episode_number": 5, "name": "The Real Title"}, {"episode_number": 6}]}


def _response(status=200, payload=None):
    response = Mock()
    response.status_code = status
    response.json.return_value = payload or {}
    return response


def _fake_get(url, params=None, timeout=None):
    if url.endswith("/search/tv"):
        return _response(payload=SEARCH_RESPONSE)
    if url.endswith("/tv/42/season/2"):
        return _response(payload=SEASON_RESPONSE)
    return _response(status=404)


def _media_entry(name):
    kind, record = classifier.parse(name)
    entry = MediaEntry(
        name=name,
        full_path=f"/media/{name}",
        parent_path="/media",
        last_modified=datetime(2024, 1, 1, tzinfo=timezone.utc),
        extension=".mkv",
        kind=kind,
        record=record,
    )
    entry.new_name = formatter.generate_filename(record, kind, entry.extension)
    return entry


# ────────────────────────────────────────────────
# TMDB CLIENT
# ────────────────────────────────────────────────

@pytest.fixture
def client():
    return TMDbClient(api_key="dummy_api_key", base_url="https://tmdb.test/3")


def test_search_tv(client):
    with patch("sanitizer.media.enrich.requests.get", side_effect=_fake_get) as get:
        show = client.search_tv("The Show")

    assert show == {"tmdb_id": 42, "name": "The Show", "year": 2015}
    assert get.call_args.kwargs["params"]["api_key"] == "dummy_api_key"


def test_episode_title_and_cache(client):
    with patch("sanitizer.media.enrich.requests.get", side_effect=_fake_get) as get:
        assert client.episode_title("The Show", None, 2, 5) == "The Real Title"
        assert client.episode_title("The Show", None, 2, 6) is None
    assert get.call_count == 2


def test_http_error_yields_no_data(client):
    with patch("sanitizer.media.enrich.requests.get", return_value=_response(status=401)):
        assert client.search_tv("The Show") is None


def test_request_exception_yields_no_data(client):
    with patch("sanitizer.media.enrich.requests.get", side_effect=requests.exceptions.ConnectionError):
        assert client.episode_title("The Show", None, 2, 5) is None


def test_without_api_key_nothing_is_requested():
    client = TMDbClient(api_key=None)
    with patch("sanitizer.media.enrich.requests.get") as get:
        assert client.available is False
        assert client.episode_title("The Show", None, 2, 5) is None
    get.assert_not_called()


# ────────────────────────────────────────────────
# EPISODE TITLE ENRICHMENT
# ────────────────────────────────────────────────

def test_enrich_updates_tv_entries_only():
    tv = _media_entry("The.Show.S02E05.Some.Title.1080p.WEBRip-GROUP.mkv")
    movie = _media_entry("Movie.Name.2014.1080p.mkv")
    provider = FakeProvider({("The Show", 2, 5): "The Real Title"})

    updated = enrich_episode_titles([tv, movie], provider)

    assert updated == 1
    assert tv.record.episode_title == "The Real Title"
    assert tv.new_name == "The Show - S02E05 - The Real Title [1080p].mkv"
    assert movie.new_name == "Movie Name (2014) [1080p].mkv"
    assert provider.calls == [("The Show", None, 2, 5)]


def test_enrich_leaves_unknown_episodes_untouched():
    tv = _media_entry("The.Show.S02E05.Some.Title.1080p.WEBRip-GROUP.mkv")
    assert enrich_episode_titles([tv], FakeProvider()) == 0
    assert tv.new_name == "The Show - S02E05 - Some Title [1080p].mkv"


def test_enrich_without_provider_is_a_no_op():
    tv = _media_entry("The.Show.S02E05.Some.Title.1080p.WEBRip-GROUP.mkv")
    assert enrich_episode_titles([tv], None) == 0


def test_enrich_with_tmdb_client(client):
    tv = _media_entry("The.Show.S02E05.Some.Title.1080p.WEBRip-GROUP.mkv")
    with patch("sanitizer.media.enrich.requests.get", side_effect=_fake_get):
        assert enrich_episode_titles([tv], client) == 1
    assert tv.new_name == "The Show - S02E05 - The Real Title [1080p].mkv"
