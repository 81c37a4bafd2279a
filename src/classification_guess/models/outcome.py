"""
Outcome of one classification attempt.

The invoker returns an Outcome by value and never raises: timeouts,
network failures and service errors all collapse into NoAnswer.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Answer:
    """Raw response body returned by the classification service."""

    text: str


@dataclass(frozen=True)
class NoAnswer:
    """No answer was obtained (timeout, transport or service error)."""

    def __bool__(self) -> bool:
        return False


NO_ANSWER = NoAnswer()

Outcome = Union[Answer, NoAnswer]
