import asyncio

import httpx
import pytest

from adapters.matrix_page import fetch_matrix
from core.config import AppSettings
from core.domain.errors import FetchError, ShapeError
from core.domain.models import CoordinatePair

URL = "https://intra.example.com/matrix"


@pytest.fixture
def settings(tmp_path, monkeypatch) -> AppSettings:
    monkeypatch.chdir(tmp_path)
    return AppSettings(user_agent="wvpa-tests")


def _transport(status: int, body: str, seen: list[httpx.Request] | None = None) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status, text=body)

    return httpx.MockTransport(handler)


def test_fetch_and_parse(settings, matrix_html, counting_tables) -> None:
    seen: list[httpx.Request] = []
    grid = asyncio.run(fetch_matrix(URL, settings=settings, transport=_transport(200, matrix_html(counting_tables), seen)))

    assert grid.get(CoordinatePair(table=2, position=15)) == 7
    assert len(seen) == 1
    assert seen[0].headers["User-Agent"] == "wvpa-tests"


def test_non_200_is_fetch_error(settings) -> None:
    with pytest.raises(FetchError) as excinfo:
        asyncio.run(fetch_matrix(URL, settings=settings, transport=_transport(503, "down")))
    assert excinfo.value.status_code == 503


def test_transport_error_is_fetch_error(settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(FetchError, match="connection refused"):
        asyncio.run(fetch_matrix(URL, settings=settings, transport=httpx.MockTransport(handler)))


def test_page_without_matrix_is_shape_error(settings) -> None:
    with pytest.raises(ShapeError):
        asyncio.run(fetch_matrix(URL, settings=settings, transport=_transport(200, "<html></html>")))


def test_selectors_come_from_settings(settings, matrix_html) -> None:
    settings = settings.model_copy(update={"table_selector": "table.grid"})
    html = matrix_html([[5] * 16] * 3, table_class="grid")
    grid = asyncio.run(fetch_matrix(URL, settings=settings, transport=_transport(200, html)))
    assert grid.get(CoordinatePair(table=0, position=0)) == 5
