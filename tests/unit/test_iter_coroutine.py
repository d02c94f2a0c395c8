import asyncio

import pytest

from apicore import TransportError, TransportResponse
from apicore._http import iter_coroutine


async def _perform_without_io(status_code: int) -> TransportResponse:
    return TransportResponse(status_code, {"content-type": "text/plain"}, b"ok")


def test_runs_non_suspending_dispatch_to_completion() -> None:
    response = iter_coroutine(_perform_without_io(204))
    assert response.status_code == 204
    assert response.body == b"ok"


def test_closes_the_coroutine() -> None:
    finished = []

    async def dispatch() -> None:
        try:
            return None
        finally:
            finished.append(True)

    iter_coroutine(dispatch())
    assert finished == [True]


def test_transport_errors_propagate() -> None:
    async def dispatch() -> None:
        raise TransportError("connection refused", method="GET", url="https://api.example.com")

    with pytest.raises(TransportError, match="connection refused"):
        iter_coroutine(dispatch())


def test_suspending_coroutine_needs_the_async_client() -> None:
    cleaned_up = []

    async def dispatch() -> None:
        try:
            await asyncio.sleep(0)
        finally:
            cleaned_up.append(True)

    with pytest.raises(RuntimeError, match="use the async client"):
        iter_coroutine(dispatch())

    assert cleaned_up == [True]
