"""Attempt ladder for workout generation.

States are Attempt(1) .. Attempt(4) followed by SyntheticFallback. advance()
is the only transition and is pure, so each rung can be tested without a
generation service. Later attempts trade variety for reliability: the
temperature drops and the prompt gets simpler.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

MAX_ATTEMPTS = 4

_TEMPERATURES = {1: 0.8, 2: 0.7, 3: 0.3, 4: 0.1}


class AttemptOutcome(StrEnum):
    SUCCESS = "success"
    MALFORMED = "malformed"
    SERVICE_ERROR = "service_error"


@dataclass(frozen=True)
class Attempt:
    number: int

    @property
    def temperature(self) -> float:
        return _TEMPERATURES[self.number]

    @property
    def detail_level(self) -> int:
        return self.number


@dataclass(frozen=True)
class SyntheticFallback:
    attempts_made: int = MAX_ATTEMPTS


LadderState = Attempt | SyntheticFallback

INITIAL_STATE = Attempt(1)


def advance(state: Attempt) -> LadderState:
    """Transition after a failed attempt."""
    if state.number >= MAX_ATTEMPTS:
        return SyntheticFallback(attempts_made=state.number)
    return Attempt(state.number + 1)


def retry_delay(state: Attempt, outcome: AttemptOutcome, base: float = 0.5, cap: float = 3.0) -> float:
    """Seconds to wait before the attempt following `state`.

    Only service errors back off; malformed output is retried immediately
    because the next attempt sends a different, simpler prompt anyway.
    """
    if outcome is not AttemptOutcome.SERVICE_ERROR or state.number >= MAX_ATTEMPTS:
        return 0.0
    return min(base * (2 ** (state.number - 1)), cap)
