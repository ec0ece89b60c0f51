"""Matomo client tests against httpx.MockTransport (no network, no real sleeps)."""

import httpx
import pytest

from trackplan.domain.exceptions import AnalyticsUnavailableException
from trackplan.infrastructure.external.analytics import MatomoClient

BASE_URL = "https://matomo.example.com/index.php"


class Recorder:
    def __init__(self, responses: list) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []
        self.sleeps: list[float] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.responses.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)


@pytest.fixture
async def make_client():
    clients: list[httpx.AsyncClient] = []

    def factory(responses: list, max_retries: int = 3) -> tuple[MatomoClient, Recorder]:
        recorder = Recorder(responses)
        http = httpx.AsyncClient(transport=httpx.MockTransport(recorder.handler))
        clients.append(http)
        client = MatomoClient(
            http,
            BASE_URL,
            "secret-token",
            max_retries=max_retries,
            initial_backoff=1.0,
            sleep=recorder.sleep,
        )
        return client, recorder

    yield factory
    for http in clients:
        await http.aclose()


async def test_daily_count_request_parameters(make_client) -> None:
    client, recorder = make_client([httpx.Response(200, json=[{"nb_events": 42}])])

    count = await client.get_daily_count(3, "Checkout > @purchase", "2026-03-09")

    assert count == 42
    params = recorder.requests[0].url.params
    assert params["method"] == "Events.getCategory"
    assert params["idSite"] == "3"
    assert params["period"] == "day"
    assert params["date"] == "2026-03-09"
    assert params["label"] == "Checkout > @purchase"
    assert params["token_auth"] == "secret-token"


@pytest.mark.parametrize("payload, expected", [([], 0), ({"nb_events": "7"}, 7), ({}, 0)])
async def test_daily_count_shapes(make_client, payload, expected: int) -> None:
    client, _ = make_client([httpx.Response(200, json=payload)])
    assert await client.get_daily_count(1, "L", "2026-03-09") == expected


async def test_range_rows_flattened_by_day(make_client) -> None:
    payload = {
        "2026-03-02": [{"label": "L", "nb_events": 3}],
        "2026-03-01": [{"label": "L", "nb_events": 5}],
        "2026-03-03": [],
    }
    client, recorder = make_client([httpx.Response(200, json=payload)])

    rows = await client.get_event_rows(1, "L", "2026-03-01", "2026-03-03")

    assert rows == [
        {"date": "2026-03-01", "label": "L", "nb_events": 5},
        {"date": "2026-03-02", "label": "L", "nb_events": 3},
    ]
    assert recorder.requests[0].url.params["date"] == "2026-03-01,2026-03-03"


async def test_retries_with_exponential_backoff(make_client) -> None:
    client, recorder = make_client(
        [
            httpx.Response(503),
            httpx.ConnectError("refused"),
            httpx.Response(200, json=[{"nb_events": 1}]),
        ]
    )

    assert await client.get_daily_count(1, "L", "2026-03-09") == 1
    assert recorder.sleeps == [1.0, 2.0]


async def test_retry_after_header_is_honored_and_capped(make_client) -> None:
    client, recorder = make_client(
        [
            httpx.Response(429, headers={"Retry-After": "5"}),
            httpx.Response(429, headers={"Retry-After": "600"}),
            httpx.Response(200, json=[{"nb_events": 1}]),
        ]
    )

    await client.get_daily_count(1, "L", "2026-03-09")

    assert recorder.sleeps == [5.0, 60.0]


async def test_gives_up_after_max_retries(make_client) -> None:
    client, recorder = make_client([httpx.Response(502)] * 3, max_retries=2)

    with pytest.raises(AnalyticsUnavailableException) as exc_info:
        await client.get_daily_count(1, "L", "2026-03-09")

    assert exc_info.value.details == {"upstream_status": 502}
    assert len(recorder.requests) == 3


async def test_client_error_is_not_retried(make_client) -> None:
    client, recorder = make_client([httpx.Response(401)])

    with pytest.raises(AnalyticsUnavailableException):
        await client.get_daily_count(1, "L", "2026-03-09")

    assert recorder.sleeps == []


async def test_api_level_error_result(make_client) -> None:
    client, _ = make_client(
        [httpx.Response(200, json={"result": "error", "message": "Invalid token"})]
    )
    with pytest.raises(AnalyticsUnavailableException) as exc_info:
        await client.get_daily_count(1, "L", "2026-03-09")
    assert exc_info.value.message == "Invalid token"


async def test_invalid_json(make_client) -> None:
    client, _ = make_client([httpx.Response(200, content=b"<html>")])
    with pytest.raises(AnalyticsUnavailableException):
        await client.get_daily_count(1, "L", "2026-03-09")
