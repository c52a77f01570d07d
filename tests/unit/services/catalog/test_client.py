"""Unit tests for RecipeCatalogClient.

Tests cover:
- Client lifecycle
- Endpoint parsing
- Transport status classification
- Envelope decoding
- Semantic validation of recipes
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from unittest.mock import AsyncMock, patch
from uuid import UUID

import httpx
import orjson
import pytest
import respx

from recipe_catalog.core.config import Settings
from recipe_catalog.services.catalog.client import (
    NO_CACHE_HEADERS,
    RecipeCatalogClient,
    decode_envelope,
    parse_endpoint,
    validate_recipes,
)
from recipe_catalog.services.catalog.exceptions import (
    EmptyRecipesError,
    InvalidDataError,
    NetworkError,
)
from recipe_catalog.services.catalog.protocol import RecipeCatalogProtocol
from tests.fixtures.recipes import (
    BLANK_NAME_CATALOG,
    CARBONARA,
    EMPTY_CATALOG,
    MALFORMED_CATALOG,
    TWO_RECIPES,
    create_envelope,
    make_recipe,
)


pytestmark = pytest.mark.unit

CATALOG_URL = "https://catalog.test/recipes.json"


@pytest.fixture
async def client(settings: Settings) -> AsyncIterator[RecipeCatalogClient]:
    """Create an initialized client and shut it down afterwards."""
    catalog_client = RecipeCatalogClient(settings=settings)
    await catalog_client.initialize()
    yield catalog_client
    await catalog_client.shutdown()


class TestRecipeCatalogClientLifecycle:
    """Tests for client lifecycle methods."""

    async def test_initialize_creates_http_client(self, settings: Settings) -> None:
        """Should create HTTP client on initialize."""
        client = RecipeCatalogClient(settings=settings)
        assert client.is_initialized is False

        await client.initialize()

        assert isinstance(client._http_client, httpx.AsyncClient)
        assert client._http_client.timeout.read == 5.0
        await client.shutdown()

    async def test_initialize_sets_no_cache_headers(self, settings: Settings) -> None:
        """Should configure the HTTP client to bypass caches."""
        client = RecipeCatalogClient(settings=settings)
        await client.initialize()

        headers = client._http_client.headers  # type: ignore[union-attr]
        assert headers["Cache-Control"] == "no-cache"
        assert headers["Pragma"] == "no-cache"
        assert headers["User-Agent"] == "recipe-catalog-tests"
        await client.shutdown()

    async def test_shutdown_closes_owned_http_client(self, settings: Settings) -> None:
        """Should close and drop the HTTP client it created."""
        client = RecipeCatalogClient(settings=settings)
        await client.initialize()

        await client.shutdown()

        assert client._http_client is None

    async def test_shutdown_leaves_injected_http_client_open(
        self, settings: Settings
    ) -> None:
        """Should not close an HTTP client owned by the caller."""
        http_client = httpx.AsyncClient()
        client = RecipeCatalogClient(settings=settings, http_client=http_client)
        await client.initialize()

        await client.shutdown()

        assert client._http_client is http_client
        assert http_client.is_closed is False
        await http_client.aclose()

    def test_defaults_to_cached_settings(self, settings: Settings) -> None:
        """Should fall back to get_settings() when no settings are given."""
        with patch(
            "recipe_catalog.services.catalog.client.get_settings",
            return_value=settings,
        ):
            client = RecipeCatalogClient()

        assert client.timeout == 5.0

    def test_satisfies_protocol(self, settings: Settings) -> None:
        """Should be usable wherever the store expects a catalog service."""
        assert isinstance(RecipeCatalogClient(settings=settings), RecipeCatalogProtocol)

    async def test_fetch_raises_when_not_initialized(self, settings: Settings) -> None:
        """Should raise RuntimeError if the client was never initialized."""
        client = RecipeCatalogClient(settings=settings)

        with pytest.raises(RuntimeError, match="not initialized"):
            await client.fetch_recipes(CATALOG_URL)


class TestParseEndpoint:
    """Tests for parse_endpoint."""

    def test_accepts_https_url(self) -> None:
        url = parse_endpoint(CATALOG_URL)

        assert url.host == "catalog.test"
        assert url.path == "/recipes.json"

    @pytest.mark.parametrize(
        "endpoint",
        ["", "not a url", "/recipes.json", "ftp://catalog.test/recipes.json"],
    )
    def test_rejects_non_http_endpoints(self, endpoint: str) -> None:
        """Should raise InvalidDataError for anything but absolute http(s)."""
        with pytest.raises(InvalidDataError, match="Invalid catalog endpoint"):
            parse_endpoint(endpoint)

    async def test_invalid_endpoint_skips_network(
        self, client: RecipeCatalogClient
    ) -> None:
        """Should fail before any request is sent."""
        with respx.mock(assert_all_called=False) as router:
            route = router.get(url__regex=r".*").mock(return_value=httpx.Response(200))

            with pytest.raises(InvalidDataError):
                await client.fetch_recipes("not a url")

        assert route.called is False


class TestRecipeCatalogClientFetch:
    """Tests for fetch_recipes."""

    @respx.mock
    async def test_fetch_returns_recipes_in_order(
        self, client: RecipeCatalogClient
    ) -> None:
        """Should decode every field of every recipe."""
        respx.get(CATALOG_URL).mock(
            return_value=httpx.Response(200, json=TWO_RECIPES)
        )

        recipes = await client.fetch_recipes(CATALOG_URL)

        assert [r.name for r in recipes] == ["Spaghetti Carbonara", "Tacos al Pastor"]
        first, second = recipes
        assert first.cuisine == "Italian"
        assert first.id == UUID("d1a76a5f-62c2-4c08-bef5-bb839e9f95c4")
        assert str(first.photo_url_large) == "https://example.com/full_size_photo.jpg"
        assert str(first.photo_url_small) == "https://example.com/small_photo.jpg"
        assert str(first.source_url) == "https://example.com/recipe"
        assert str(first.youtube_url) == "https://youtube.com/watch?v=dQw4w9WgXcQ"
        assert second.cuisine == "Mexican"
        assert second.youtube_url is None

    @respx.mock
    async def test_fetch_sends_no_cache_headers(
        self, client: RecipeCatalogClient
    ) -> None:
        """Should ask every intermediary to revalidate with the origin."""
        route = respx.get(CATALOG_URL).mock(
            return_value=httpx.Response(200, json=TWO_RECIPES)
        )

        await client.fetch_recipes(CATALOG_URL)

        request = route.calls.last.request
        for header, value in NO_CACHE_HEADERS.items():
            assert request.headers[header] == value

    @respx.mock
    async def test_fetch_hits_origin_every_call(
        self, client: RecipeCatalogClient
    ) -> None:
        """Should issue one request per call, never reusing a prior body."""
        route = respx.get(CATALOG_URL).mock(
            side_effect=[
                httpx.Response(200, json=create_envelope(CARBONARA)),
                httpx.Response(200, json=TWO_RECIPES),
            ]
        )

        first = await client.fetch_recipes(CATALOG_URL)
        second = await client.fetch_recipes(CATALOG_URL)

        assert route.call_count == 2
        assert len(first) == 1
        assert len(second) == 2

    @respx.mock
    async def test_empty_catalog_raises_empty_recipes(
        self, client: RecipeCatalogClient
    ) -> None:
        """Should report zero recipes as EmptyRecipesError."""
        respx.get(CATALOG_URL).mock(
            return_value=httpx.Response(200, json=EMPTY_CATALOG)
        )

        with pytest.raises(EmptyRecipesError):
            await client.fetch_recipes(CATALOG_URL)

    @respx.mock
    async def test_malformed_record_raises_invalid_data(
        self, client: RecipeCatalogClient
    ) -> None:
        """Should reject the whole batch when one record fails decoding."""
        respx.get(CATALOG_URL).mock(
            return_value=httpx.Response(200, json=MALFORMED_CATALOG)
        )

        with pytest.raises(InvalidDataError):
            await client.fetch_recipes(CATALOG_URL)

    @respx.mock
    async def test_blank_name_raises_invalid_data(
        self, client: RecipeCatalogClient
    ) -> None:
        """Should reject the whole batch when one record has an empty name."""
        respx.get(CATALOG_URL).mock(
            return_value=httpx.Response(200, json=BLANK_NAME_CATALOG)
        )

        with pytest.raises(InvalidDataError, match="index 1"):
            await client.fetch_recipes(CATALOG_URL)

    @respx.mock
    async def test_corrupted_body_raises_invalid_data(
        self, client: RecipeCatalogClient
    ) -> None:
        """Should collapse JSON syntax errors into InvalidDataError."""
        respx.get(CATALOG_URL).mock(
            return_value=httpx.Response(200, content=b'{"recipes": [')
        )

        with pytest.raises(InvalidDataError) as exc_info:
            await client.fetch_recipes(CATALOG_URL)

        assert isinstance(exc_info.value.__cause__, orjson.JSONDecodeError)

    @pytest.mark.parametrize("status_code", [404, 500, 503])
    @respx.mock
    async def test_error_status_raises_network_error(
        self, client: RecipeCatalogClient, status_code: int
    ) -> None:
        """Should classify non-2xx responses as NetworkError."""
        respx.get(CATALOG_URL).mock(
            return_value=httpx.Response(status_code, json=TWO_RECIPES)
        )

        with pytest.raises(NetworkError) as exc_info:
            await client.fetch_recipes(CATALOG_URL)

        assert exc_info.value.status_code == status_code
        assert isinstance(exc_info.value.cause, httpx.HTTPStatusError)
        assert str(exc_info.value) == (
            f"The recipe catalog responded with HTTP {status_code}."
        )

    @respx.mock
    async def test_redirect_without_location_raises_network_error(
        self, client: RecipeCatalogClient
    ) -> None:
        """Should treat a 3xx that cannot be followed as a transport failure."""
        respx.get(CATALOG_URL).mock(return_value=httpx.Response(304))

        with pytest.raises(NetworkError) as exc_info:
            await client.fetch_recipes(CATALOG_URL)

        assert exc_info.value.status_code == 304

    @respx.mock
    async def test_connection_error_raises_network_error(
        self, client: RecipeCatalogClient
    ) -> None:
        """Should wrap transport faults with their description."""
        respx.get(CATALOG_URL).mock(side_effect=httpx.ConnectError("connection refused"))

        with pytest.raises(NetworkError, match="connection refused") as exc_info:
            await client.fetch_recipes(CATALOG_URL)

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @respx.mock
    async def test_timeout_raises_network_error(
        self, client: RecipeCatalogClient
    ) -> None:
        """Should wrap timeouts as NetworkError."""
        respx.get(CATALOG_URL).mock(side_effect=httpx.ReadTimeout("timed out"))

        with pytest.raises(NetworkError, match="timed out"):
            await client.fetch_recipes(CATALOG_URL)

    async def test_unclassified_transport_error_raises_network_error(
        self, client: RecipeCatalogClient
    ) -> None:
        """Should wrap errors outside httpx's hierarchy as NetworkError."""
        client._http_client.get = AsyncMock(  # type: ignore[union-attr]
            side_effect=OSError("socket closed")
        )

        with pytest.raises(NetworkError, match="socket closed"):
            await client.fetch_recipes(CATALOG_URL)


class TestDecodeEnvelope:
    """Tests for decode_envelope."""

    def test_decodes_valid_document(self) -> None:
        envelope = decode_envelope(orjson.dumps(TWO_RECIPES))

        assert len(envelope.recipes) == 2

    @pytest.mark.parametrize(
        "body",
        [
            b"",
            b"not json",
            b"[]",
            b'{"items": []}',
            b'{"recipes": null}',
            b'{"recipes": [{"cuisine": 1, "name": "x", "uuid": "d1a76a5f-62c2-4c08-bef5-bb839e9f95c4"}]}',
            b'{"recipes": [{"cuisine": "x", "name": "y", "uuid": "not-a-uuid"}]}',
        ],
    )
    def test_rejects_bad_documents(self, body: bytes) -> None:
        """Should raise InvalidDataError for any shape or type mismatch."""
        with pytest.raises(InvalidDataError):
            decode_envelope(body)


class TestValidateRecipes:
    """Tests for validate_recipes."""

    def test_returns_input_unchanged(self) -> None:
        recipes = [make_recipe("B"), make_recipe("A")]

        assert validate_recipes(recipes) is recipes

    @pytest.mark.parametrize(("name", "cuisine"), [("", "Italian"), ("Pasta", "")])
    def test_rejects_empty_required_text(self, name: str, cuisine: str) -> None:
        recipes = [make_recipe(), make_recipe(name, cuisine)]

        with pytest.raises(InvalidDataError):
            validate_recipes(recipes)

    def test_whitespace_is_not_empty(self) -> None:
        """Should only reject exactly-empty strings."""
        recipes = [make_recipe(" ", " ")]

        assert validate_recipes(recipes) == recipes
