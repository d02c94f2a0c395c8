"""Drive never-suspending coroutines from synchronous code."""

from __future__ import annotations

import typing

_T = typing.TypeVar("_T")


def iter_coroutine(coro: typing.Coroutine[None, None, _T]) -> _T:
    """
    Run ``coro`` to completion in a single step and return its result.

    The blocking client shares its dispatch logic with the async client as
    ``async def`` code that only awaits BlockingTransport, which never
    yields to an event loop. Such a coroutine finishes on the first
    ``send(None)``.

    Raises:
        RuntimeError: If the coroutine suspends, i.e. it awaited something
            that needs an event loop.
    """
    try:
        coro.send(None)
    except StopIteration as ex:
        return ex.value  # type: ignore [no-any-return]
    else:
        raise RuntimeError(f"coroutine {coro!r} suspended; use the async client instead")
    finally:
        coro.close()


__all__ = ["iter_coroutine"]
