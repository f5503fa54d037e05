import sys
import unittest
from pathlib import Path

import httpx

_SRC = Path(__file__).resolve().parents[1] / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from adapters.omdb_client import OmdbClient
from core.config import AppSettings
from core.domain.state import ErrorKind
from core.errors import (
    SEARCH_TRANSPORT_MESSAGE,
    ConfigurationError,
    MovieNotFoundError,
    PayloadParseError,
    TransportError,
)
from core.interfaces.catalog import DetailFetcher, SearchFetcher

_SEARCH_PAYLOAD = {
    "Search": [
        {"Title": "Batman Begins", "Year": "2005", "imdbID": "tt0372784", "Type": "movie", "Poster": "https://m.media-amazon.com/bb.jpg"},
        {"Title": "Batman", "Year": "1989", "imdbID": "tt0096895", "Type": "movie", "Poster": "N/A"},
        {"Title": "Batman Begins", "Year": "2005", "imdbID": "tt0372784", "Type": "movie", "Poster": "N/A"},
    ],
    "totalResults": "3",
    "Response": "True",
}

_DETAIL_PAYLOAD = {
    "Title": "Batman Begins",
    "Year": "2005",
    "Released": "15 Jun 2005",
    "Runtime": "140 min",
    "Genre": "Action, Crime, Drama",
    "Director": "Christopher Nolan",
    "Actors": "Christian Bale, Michael Caine, Ken Watanabe",
    "Plot": "After witnessing his parents' death, Bruce learns the art of fighting.",
    "Poster": "https://m.media-amazon.com/bb.jpg",
    "Ratings": [{"Source": "Internet Movie Database", "Value": "8.2/10"}],
    "imdbRating": "8.2",
    "imdbID": "tt0372784",
    "Response": "True",
}


def _settings() -> AppSettings:
    return AppSettings(_env_file=None, omdb_api_key="test-key", omdb_base_url="http://omdb.test/")


def _client(handler) -> OmdbClient:
    return OmdbClient(_settings(), transport=httpx.MockTransport(handler))


class TestConstruction(unittest.TestCase):
    def test_missing_api_key(self):
        settings = AppSettings(_env_file=None, omdb_api_key=None)
        with self.assertRaises(ConfigurationError) as ctx:
            OmdbClient(settings)
        self.assertIn("popcorn doctor setup-key", str(ctx.exception))

    def test_explicit_key_wins(self):
        settings = AppSettings(_env_file=None, omdb_api_key=None)
        client = OmdbClient(settings, api_key="abc")
        self.assertIsInstance(client, SearchFetcher)
        self.assertIsInstance(client, DetailFetcher)


class TestSearch(unittest.IsolatedAsyncioTestCase):
    async def test_builds_request_and_keeps_service_order(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_SEARCH_PAYLOAD)

        movies = await _client(handler).search("batman begins")

        self.assertEqual(seen[0].url.host, "omdb.test")
        self.assertEqual(seen[0].url.params["apikey"], "test-key")
        self.assertEqual(seen[0].url.params["s"], "batman begins")
        self.assertEqual([m.imdb_id for m in movies], ["tt0372784", "tt0096895", "tt0372784"])
        self.assertEqual(movies[0].title, "Batman Begins")
        self.assertEqual(movies[0].year, "2005")
        self.assertEqual(movies[1].poster, "N/A")

    async def test_non_success_status(self):
        client = _client(lambda request: httpx.Response(503, text="unavailable"))
        with self.assertRaises(TransportError) as ctx:
            await client.search("batman")
        self.assertEqual(ctx.exception.message, SEARCH_TRANSPORT_MESSAGE)
        self.assertEqual(ctx.exception.kind, ErrorKind.TRANSPORT)

    async def test_response_false_is_not_found(self):
        client = _client(lambda request: httpx.Response(200, json={"Response": "False", "Error": "Movie not found!"}))
        with self.assertRaises(MovieNotFoundError) as ctx:
            await client.search("qwertyuiop")
        self.assertEqual(ctx.exception.message, "Movie not found")
        self.assertEqual(ctx.exception.kind, ErrorKind.NOT_FOUND)

    async def test_connect_error_keeps_fault_text(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Name or service not known", request=request)

        with self.assertRaises(TransportError) as ctx:
            await _client(handler).search("batman")
        self.assertEqual(ctx.exception.message, "Name or service not known")

    async def test_invalid_json(self):
        client = _client(lambda request: httpx.Response(200, text="<html>oops</html>"))
        with self.assertRaises(PayloadParseError):
            await client.search("batman")

    async def test_malformed_items(self):
        client = _client(lambda request: httpx.Response(200, json={"Response": "True", "Search": [{"Year": "2005"}]}))
        with self.assertRaises(PayloadParseError):
            await client.search("batman")


class TestDetail(unittest.IsolatedAsyncioTestCase):
    async def test_maps_fields(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_DETAIL_PAYLOAD)

        detail = await _client(handler).fetch_detail("tt0372784")

        self.assertEqual(seen[0].url.params["i"], "tt0372784")
        self.assertNotIn("s", seen[0].url.params)
        self.assertEqual(detail.title, "Batman Begins")
        self.assertEqual(detail.runtime, "140 min")
        self.assertEqual(detail.runtime_minutes, 140)
        self.assertEqual(detail.imdb_rating_value, 8.2)
        self.assertEqual(detail.released, "15 Jun 2005")
        self.assertEqual(detail.actors, "Christian Bale, Michael Caine, Ken Watanabe")

    async def test_response_false_is_returned_as_detail(self):
        client = _client(lambda request: httpx.Response(200, json={"Response": "False", "Error": "Incorrect IMDb ID."}))
        detail = await client.fetch_detail("tt0000000")
        self.assertEqual(detail.title, "")
        self.assertEqual(detail.runtime_minutes, 0)

    async def test_status_is_not_inspected(self):
        client = _client(lambda request: httpx.Response(500, json=_DETAIL_PAYLOAD))
        detail = await client.fetch_detail("tt0372784")
        self.assertEqual(detail.imdb_id, "tt0372784")

    async def test_invalid_json(self):
        client = _client(lambda request: httpx.Response(200, text="not json"))
        with self.assertRaises(PayloadParseError):
            await client.fetch_detail("tt0372784")

    async def test_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with self.assertRaises(TransportError):
            await _client(handler).fetch_detail("tt0372784")


if __name__ == "__main__":
    unittest.main()
