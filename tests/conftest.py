import itertools

import numpy as np
import pytest


class RecordingCanvas:
    """Canvas stand-in that records every draw call."""
    def __init__(self, width=80, height=60):
        self.width = width
        self.height = height
        self.calls = []

    def filled_rect(self, x, y, width, height, color):
        self.calls.append(("rect", x, y, width, height, tuple(color)))

    def clear_screen(self, color):
        self.calls.append(("clear", tuple(color)))

    def render(self):
        self.calls.append(("render",))
        return True

    @property
    def rects(self):
        return [call for call in self.calls if call[0] == "rect"]


class ScriptedRng:
    """
    RNG stand-in returning a fixed cycle of floats from random() and the
    lower bound from integers().
    """
    def __init__(self, floats=(0.5,)):
        self._floats = itertools.cycle(floats)
        self.random_calls = 0

    def random(self):
        self.random_calls += 1
        return next(self._floats)

    def integers(self, low, high=None, size=None):
        if size is None:
            return low
        return np.full(size, low)


@pytest.fixture
def canvas():
    return RecordingCanvas()


@pytest.fixture
def rng():
    return np.random.default_rng(2024)
