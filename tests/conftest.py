import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest

from wireframe import RasterSurface


class RecordingSurface:
    """Drawing surface that only records the calls it receives."""

    def __init__(self, width=600, height=600):
        self.width = width
        self.height = height
        self.calls = []

    def clear(self, color):
        self.calls.append(("clear", color))

    def fill_rect(self, x, y, w, h, color):
        self.calls.append(("fill_rect", (x, y, w, h), color))

    def stroke_line(self, p1, p2, color):
        self.calls.append(("stroke_line", (p1, p2), color))

    def kinds(self):
        return [c[0] for c in self.calls]


@pytest.fixture
def recording_surface():
    return RecordingSurface()


@pytest.fixture
def raster():
    return RasterSurface(40, 30)
