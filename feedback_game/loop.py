import logging
import streamlit as st
from . import constants as c
from . import judge
from . import overlap
from . import render
from .scene import SceneModel

logger = logging.getLogger(__name__)

# --- 1. SESSION STATE ---

def get_scene():
    """
    The one SceneModel of this browser session.
    """
    if "scene" not in st.session_state:
        st.session_state.scene = SceneModel()
        st.session_state.overlap_history = []
        logger.info("New venue session initialised")
    return st.session_state.scene

def add_speaker():
    get_scene().add_speaker()

def remove_speaker():
    get_scene().remove_speaker()

def reset_scene():
    # Widget keys go too, otherwise the sliders push the old layout back in
    for key in list(st.session_state.keys()):
        del st.session_state[key]

# --- 2. INPUT -> MODEL ---

def apply_controls(scene, controls):
    """
    Pushes the widget values of this run into the scene.
    """
    scene.set_mic_pattern(controls["pattern"])
    scene.set_mic_orientation(controls["mic_angle"])
    scene.set_mic_position(*controls["mic_position"])
    scene.set_volume(controls["volume"])

    for speaker_id, (angle, x, y) in controls["speakers"].items():
        scene.set_speaker_orientation(speaker_id, angle)
        scene.set_speaker_position(speaker_id, x, y)

# --- 3. REDRAW ---

def run_frame(canvas_placeholder, scene, speaker_icon=None, mic_icon=None,
              chart_placeholder=None, overlap_history=None):
    """
    Repaints the venue and updates the overlap monitor.
    """
    frame_scene = scene.snapshot()

    overlap_mask = overlap.compute_overlap_mask(frame_scene)

    frame = render.render_scene(frame_scene, speaker_icon, mic_icon, overlap_mask)
    canvas_placeholder.image(frame, channels="RGB")

    if overlap_history is not None:
        overlap_history.append(overlap.mask_area(overlap_mask))

        # Keep history manageable
        if len(overlap_history) > c.HISTORY_LENGTH:
            del overlap_history[:-c.HISTORY_LENGTH]

        if chart_placeholder is not None:
            render.render_chart(chart_placeholder, overlap_history)

    return frame

# --- 4. CHECK ---

def show_verdict(feedback_placeholder, verdict=None):
    """
    Writes a verdict (by default the last stored one) into the placeholder.
    """
    if verdict is None:
        verdict = st.session_state.get("last_verdict")
    if verdict is None:
        return
    feedback_placeholder.markdown(f"**:{verdict.color}[{verdict.message}]**")

def check_setup(feedback_placeholder, scene, alert=None):
    """
    Runs the feedback judgement and shows the verdict.
    The verdict stays in the session until the next check or a reset.
    """
    verdict = judge.evaluate(scene.snapshot(), alert)
    st.session_state.last_verdict = verdict

    show_verdict(feedback_placeholder, verdict)
    return verdict
