import streamlit as st
from PIL import Image
from feedback_game import assets
from feedback_game import constants as c
from feedback_game import loop
from feedback_game import render
from feedback_game.logging_config import setup_logging


# --- SETUP PAGE CONFIG ---
try:
    favicon_image = Image.open(c.MIC_ICON_PATH)
    st.set_page_config(page_title="Feedback Finder", page_icon=favicon_image, layout="wide")
except Exception:
    st.set_page_config(page_title="Feedback Finder", layout="wide")

setup_logging()

# --- ASSETS (loaded once per server process) ---
@st.cache_resource
def load_assets():
    return {
        "speaker_icon": assets.load_icon(c.SPEAKER_ICON_PATH),
        "mic_icon": assets.load_icon(c.MIC_ICON_PATH),
        "alert_clip": assets.load_alert_clip(c.ALERT_CLIP_PATH),
    }

loaded = load_assets()

# --- SESSION STATE INITIALIZATION ---
scene = loop.get_scene()

# --- SIDEBAR ---
controls, chart_placeholder = render.render_sidebar_controls(
    scene,
    add_callback=loop.add_speaker,
    remove_callback=loop.remove_speaker,
)
loop.apply_controls(scene, controls)

# --- MAIN LAYOUT ---
st.markdown("<h2 style='text-align: center;'>Speaker & Microphone Placement</h2>", unsafe_allow_html=True)
st.markdown(
    "<h4 style='text-align: center; color: gray;'>Keep the speakers out of the mic's pickup to avoid feedback</h4>",
    unsafe_allow_html=True
)

col1, col2, col3 = st.columns([1, 6, 2])

with col2:
    canvas_placeholder = st.empty()

with col3:
    st.markdown("### Check")
    check_clicked = st.button("Check Setup", type="primary", use_container_width=True)
    feedback_placeholder = st.empty()
    audio_placeholder = st.empty()

    st.markdown("---")
    st.button("Reset Venue", on_click=loop.reset_scene, type="secondary", use_container_width=True)

    with st.expander("How to play", expanded=True):
        st.markdown("""
        1. **Mic**: Pick a pickup pattern and aim the microphone.
        2. **Speakers**: Add up to 5 speakers, rotate and move them.
        3. **Volume**: Louder speakers reach further.
        4. **Check**: Red areas mean the mic hears the speakers. Remove them all!
        """)

# --- REDRAW ---
loop.run_frame(
    canvas_placeholder,
    scene,
    speaker_icon=loaded["speaker_icon"],
    mic_icon=loaded["mic_icon"],
    chart_placeholder=chart_placeholder,
    overlap_history=st.session_state.overlap_history,
)

# --- CHECK SETUP ---
if check_clicked:
    def play_through_browser(samples, sample_rate, start):
        audio_placeholder.audio(samples, sample_rate=sample_rate, start_time=start, autoplay=True)

    alert = assets.AlertCue(loaded["alert_clip"], sink=play_through_browser)
    loop.check_setup(feedback_placeholder, scene, alert)
else:
    loop.show_verdict(feedback_placeholder)
