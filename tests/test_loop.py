"""Tests for the redraw / check event handlers."""

import numpy as np
import pytest

from feedback_game import constants as c
from feedback_game import loop
from feedback_game.scene import SceneModel

from conftest import FakePlaceholder


def _controls(**overrides):
    controls = {
        "pattern": c.SUPERCARDIOID,
        "mic_angle": 360,
        "mic_position": (320, 410),
        "volume": 70,
        "speakers": {0: (45, 250, 120)},
    }
    controls.update(overrides)
    return controls


class TestApplyControls:
    def test_widget_values_reach_the_scene(self, default_scene):
        loop.apply_controls(default_scene, _controls())

        mic = default_scene.mic
        assert (mic.pattern, mic.angle, mic.x, mic.y) == (c.SUPERCARDIOID, 0, 320.0, 410.0)
        assert default_scene.volume == 70
        speaker = default_scene.get_speaker(0)
        assert (speaker.angle, speaker.x, speaker.y) == (45, 250.0, 120.0)

    def test_every_speaker_is_updated(self, default_scene):
        default_scene.add_speaker()
        loop.apply_controls(default_scene, _controls(speakers={0: (10, 0, 0), 1: (20, 5, 5)}))
        assert [s.angle for s in default_scene.speakers] == [10, 20]


class TestRunFrame:
    def test_frame_goes_to_canvas(self, hot_scene, placeholder):
        frame = loop.run_frame(placeholder, hot_scene)
        name, args, kwargs = placeholder.calls[0]
        assert name == "image"
        assert args[0] is frame
        assert kwargs["channels"] == "RGB"

    def test_history_and_chart(self, hot_scene, placeholder):
        chart = FakePlaceholder()
        history = []
        loop.run_frame(placeholder, hot_scene, chart_placeholder=chart, overlap_history=history)
        loop.run_frame(placeholder, hot_scene, chart_placeholder=chart, overlap_history=history)

        assert len(history) == 2
        assert history[0] == history[1] > 0
        assert chart.names() == ["altair_chart", "altair_chart"]

    def test_history_is_bounded(self, quiet_scene, placeholder):
        history = list(range(c.HISTORY_LENGTH))
        loop.run_frame(placeholder, quiet_scene, overlap_history=history)
        assert len(history) == c.HISTORY_LENGTH
        assert history[-1] == 0
        assert history[0] == 1

    def test_scene_is_not_mutated(self, hot_scene, placeholder):
        before = repr(hot_scene.mic)
        loop.run_frame(placeholder, hot_scene)
        assert repr(hot_scene.mic) == before


@pytest.mark.usefixtures("session_state")
class TestCheckSetup:
    def test_great_setup_in_green(self, quiet_scene, placeholder, alert):
        verdict = loop.check_setup(placeholder, quiet_scene, alert)
        name, args, _ = placeholder.calls[0]
        assert name == "markdown"
        assert ":green[" in args[0]
        assert verdict.message in args[0]
        assert alert.plays == 0

    def test_feedback_in_red_with_alert(self, hot_scene, placeholder, alert):
        verdict = loop.check_setup(placeholder, hot_scene, alert)
        assert verdict.overlap_detected
        assert ":red[" in placeholder.calls[0][1][0]
        assert alert.plays == 1

    def test_check_is_independent_of_rendering(self, placeholder):
        scene = SceneModel()
        scene.set_speaker_position(0, 400, 500)
        assert loop.check_setup(placeholder, scene).overlap_detected
        assert np.all([name == "markdown" for name in placeholder.names()])


class TestVerdictPersistence:
    def test_verdict_survives_the_next_rerun(self, hot_scene, session_state, alert):
        verdict = loop.check_setup(FakePlaceholder(), hot_scene, alert)
        assert session_state.last_verdict is verdict

        # Next interaction: the page redraws without the button being clicked
        canvas, feedback = FakePlaceholder(), FakePlaceholder()
        loop.run_frame(canvas, hot_scene)
        loop.show_verdict(feedback)

        assert feedback.names() == ["markdown"]
        assert verdict.message in feedback.calls[0][1][0]
        assert alert.plays == 1

    def test_new_check_replaces_the_verdict(self, hot_scene, session_state):
        loop.check_setup(FakePlaceholder(), hot_scene)
        hot_scene.set_speaker_orientation(0, 270)
        verdict = loop.check_setup(FakePlaceholder(), hot_scene)
        assert not verdict.overlap_detected
        assert session_state.last_verdict is verdict

    def test_nothing_shown_before_first_check(self, session_state, placeholder):
        loop.show_verdict(placeholder)
        assert placeholder.calls == []

    def test_reset_clears_the_verdict(self, hot_scene, session_state, placeholder):
        loop.get_scene()
        loop.check_setup(FakePlaceholder(), hot_scene)
        loop.reset_scene()

        assert "last_verdict" not in session_state
        loop.show_verdict(placeholder)
        assert placeholder.calls == []
