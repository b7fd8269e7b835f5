from typing import Sequence

import pytest

from mm_drill.scenarios import Scenario


class SequenceRng:
    """Replays a fixed list of uniform draws."""

    def __init__(self, values: Sequence[float]) -> None:
        self._values = list(values)
        self.consumed = 0

    def random(self) -> float:
        if self.consumed >= len(self._values):
            raise AssertionError("rng sequence exhausted")
        value = self._values[self.consumed]
        self.consumed += 1
        return value


@pytest.fixture
def seq_rng():
    return SequenceRng


@pytest.fixture
def scenario() -> Scenario:
    return Scenario(
        id="sp500-members",
        prompt="How many companies are in the S&P 500?",
        unit="companies",
        true_value=100.0,
    )
