"""Tests for the attempt ladder transitions and delays."""

import pytest

from workout_engine.generation.ladder import (
    INITIAL_STATE,
    MAX_ATTEMPTS,
    Attempt,
    AttemptOutcome,
    SyntheticFallback,
    advance,
    retry_delay,
)


def test_ladder_walks_four_attempts_then_fallback():
    state = INITIAL_STATE
    visited = []
    while isinstance(state, Attempt):
        visited.append(state.number)
        state = advance(state)

    assert visited == [1, 2, 3, 4]
    assert state == SyntheticFallback(attempts_made=MAX_ATTEMPTS)


def test_temperatures_decrease():
    assert [Attempt(n).temperature for n in (1, 2, 3, 4)] == [0.8, 0.7, 0.3, 0.1]


def test_detail_level_matches_attempt():
    assert [Attempt(n).detail_level for n in (1, 2, 3, 4)] == [1, 2, 3, 4]


@pytest.mark.parametrize(("number", "expected"), [(1, 0.5), (2, 1.0), (3, 2.0)])
def test_service_error_backs_off_exponentially(number, expected):
    assert retry_delay(Attempt(number), AttemptOutcome.SERVICE_ERROR) == expected


def test_delay_is_capped():
    assert retry_delay(Attempt(3), AttemptOutcome.SERVICE_ERROR, base=2.0, cap=3.0) == 3.0


def test_no_delay_after_last_attempt():
    assert retry_delay(Attempt(4), AttemptOutcome.SERVICE_ERROR) == 0.0


@pytest.mark.parametrize("number", [1, 2, 3, 4])
def test_malformed_output_retries_immediately(number):
    assert retry_delay(Attempt(number), AttemptOutcome.MALFORMED) == 0.0
