"""Settled outcomes for concurrent fan-out: every branch resolves to Ok or Err."""
import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    reason: Exception


Result = Union[Ok[T], Err]


async def settle_all(*awaitables: Awaitable[Any]) -> list[Result]:
    """Run all awaitables concurrently and wait for every one of them to settle.

    One failing branch never cancels the others. Cancellation and other
    non-Exception signals are re-raised rather than captured.
    """
    outcomes = await asyncio.gather(*awaitables, return_exceptions=True)
    settled: list[Result] = []
    for outcome in outcomes:
        if isinstance(outcome, Exception):
            settled.append(Err(outcome))
        elif isinstance(outcome, BaseException):
            raise outcome
        else:
            settled.append(Ok(outcome))
    return settled
