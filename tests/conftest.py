"""Shared test fixtures."""

import numpy as np
import pytest

from feedback_game import constants as c
from feedback_game.scene import Microphone, SceneModel, Speaker


def make_scene(mic=(400, 500, 0, c.CARDIOID), speakers=((200, 150, 0),), volume=c.DEFAULT_VOLUME):
    """Builds a scene from plain tuples: mic=(x, y, angle, pattern), speaker=(x, y, angle)."""
    x, y, angle, pattern = mic
    speaker_list = [Speaker(sx, sy, sa, i) for i, (sx, sy, sa) in enumerate(speakers)]
    return SceneModel(Microphone(x, y, angle, pattern), speaker_list, volume)


class FakePlaceholder:
    """Records every Streamlit call made on it."""

    def __init__(self):
        self.calls = []

    def __getattr__(self, name):
        def record(*args, **kwargs):
            self.calls.append((name, args, kwargs))
        return record

    def names(self):
        return [name for name, _, _ in self.calls]


class FakeAlert:
    def __init__(self):
        self.plays = 0

    def play(self):
        self.plays += 1


@pytest.fixture
def default_scene():
    return SceneModel()


@pytest.fixture
def quiet_scene():
    """Mic and speaker point away from each other: no overlap."""
    return make_scene()


@pytest.fixture
def hot_scene():
    """Speaker above the mic, firing straight down into it."""
    return make_scene(speakers=((400, 350, 90),))


@pytest.fixture
def solid_icon():
    icon = np.zeros((c.ICON_SIZE_PX, c.ICON_SIZE_PX, 4), dtype=np.uint8)
    icon[:, :, 3] = 255
    return icon


@pytest.fixture
def placeholder():
    return FakePlaceholder()


@pytest.fixture
def alert():
    return FakeAlert()


class FakeSessionState(dict):
    """Dict with attribute access, like st.session_state."""

    def __getattr__(self, name):
        try:
            return self[name]
        except KeyError as exc:
            raise AttributeError(name) from exc

    def __setattr__(self, name, value):
        self[name] = value

    def __delattr__(self, name):
        del self[name]


@pytest.fixture
def session_state(monkeypatch):
    import streamlit as st

    state = FakeSessionState()
    monkeypatch.setattr(st, "session_state", state)
    return state
