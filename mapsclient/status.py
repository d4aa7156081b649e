"""Tagged outcomes for Maps API calls and the per-item batch runner."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Iterable, List, TypeVar, Union

from .logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")
U = TypeVar("U")

OK = "OK"
ZERO_RESULTS = "ZERO_RESULTS"

# Raised by projections when a payload does not have the expected shape.
PAYLOAD_ERRORS = (KeyError, IndexError, TypeError, ValueError)


@dataclass(frozen=True)
class Success(Generic[T]):
    payload: T

    def map(self, fn: Callable[[T], U]) -> "Outcome[U]":
        try:
            return Success(fn(self.payload))
        except PAYLOAD_ERRORS as exc:
            return Failure(f"malformed response: {exc!r}")


@dataclass(frozen=True)
class EmptyResult:
    message: str = ""

    def map(self, fn: Callable[[Any], Any]) -> "EmptyResult":
        return self


@dataclass(frozen=True)
class Failure:
    cause: str

    def map(self, fn: Callable[[Any], Any]) -> "Failure":
        return self


Outcome = Union[Success[T], EmptyResult, Failure]


def classify(data: Any) -> Outcome[dict]:
    """Branch on the ``status`` field of a Maps web service response."""
    if not isinstance(data, dict):
        return Failure("response is not a JSON object")
    status = data.get("status")
    if status == OK:
        return Success(data)
    if status == ZERO_RESULTS:
        return EmptyResult()
    message = data.get("error_message", "")
    return Failure(f"{status}: {message}" if message else str(status))


@dataclass(frozen=True)
class Notice:
    item: str
    kind: str  # "empty" or "failure"
    message: str


@dataclass
class BatchResult(Generic[T]):
    records: List[T] = field(default_factory=list)
    notices: List[Notice] = field(default_factory=list)


def notice_for(item: str, outcome: Union[EmptyResult, Failure]) -> Notice:
    if isinstance(outcome, EmptyResult):
        return Notice(item, "empty", outcome.message or f"No results found for '{item}'")
    return Notice(item, "failure", f"Failed to process '{item}': {outcome.cause}")


def run_batch(items: Iterable[Any], call: Callable[[Any], Outcome[List[T]]]) -> BatchResult[T]:
    """Apply ``call`` to each item in turn; one bad item never stops the rest."""
    batch: BatchResult[T] = BatchResult()
    for item in items:
        outcome = call(item)
        if isinstance(outcome, Success):
            batch.records.extend(outcome.payload)
            continue
        notice = notice_for(str(item), outcome)
        if notice.kind == "empty":
            logger.info(notice.message)
        else:
            logger.warning(notice.message)
        batch.notices.append(notice)
    return batch
