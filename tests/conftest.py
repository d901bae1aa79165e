import pytest


class ScriptedRandom:
    """Returns queued samples in order; fails loudly if asked for more."""

    def __init__(self, samples) -> None:
        self._samples = list(samples)
        self.calls = 0

    def __call__(self) -> float:
        if self.calls >= len(self._samples):
            raise AssertionError("random source called more often than scripted")
        value = self._samples[self.calls]
        self.calls += 1
        return value


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def fitness_pairs():
    return [(0.1, 15), (0.2, 16), (0.3, 17), (0.4, 18), (0.5, 19)]
