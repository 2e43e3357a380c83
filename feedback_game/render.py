import streamlit as st
import numpy as np
import cv2
import pandas as pd
import altair as alt
from . import constants as c
from . import overlap
from . import raster

# --- 1. UI GETTERS ---

def render_sidebar_controls(scene, add_callback, remove_callback):
    """
    Draws the sidebar controls and returns the values the user picked.
    The scene is only read here (for initial widget values).
    """
    mic = scene.mic

    st.sidebar.markdown(
        "<h1 style='text-align: center;'>Venue Controls</h1>",
        unsafe_allow_html=True
    )

    # Microphone
    st.sidebar.markdown("### Microphone")
    pattern = st.sidebar.selectbox(
        "Pickup Pattern",
        c.PATTERN_KINDS,
        index=c.PATTERN_KINDS.index(mic.pattern),
        key="mic_pattern",
    )
    mic_angle = st.sidebar.slider("Mic Rotation", 0, 360, int(mic.angle), key="mic_angle")
    mic_x = st.sidebar.slider("Mic X", 0, c.CANVAS_WIDTH, int(mic.x), key="mic_x")
    mic_y = st.sidebar.slider("Mic Y", 0, c.CANVAS_HEIGHT, int(mic.y), key="mic_y")

    st.sidebar.markdown("---")

    # Speakers
    st.sidebar.markdown("### Speakers")
    volume = st.sidebar.slider(
        "Speaker Volume",
        c.MIN_VOLUME,
        c.MAX_VOLUME,
        int(scene.volume),
        key="speaker_volume",
        help="Controls the reach of every speaker cone (and slightly the mic pickup)."
    )

    sb_col1, sb_col2 = st.sidebar.columns(2)
    with sb_col1:
        st.button(
            "Add Speaker",
            on_click=add_callback,
            disabled=len(scene.speakers) >= c.MAX_SPEAKERS,
            use_container_width=True
        )
    with sb_col2:
        st.button(
            "Remove Speaker",
            on_click=remove_callback,
            disabled=len(scene.speakers) <= c.MIN_SPEAKERS,
            use_container_width=True
        )

    speaker_values = {}
    for speaker in scene.speakers:
        with st.sidebar.expander(f"Speaker {speaker.id + 1}", expanded=False):
            angle = st.slider(
                f"Speaker {speaker.id + 1} Rotation", 0, 360, int(speaker.angle),
                key=f"speaker_{speaker.id}_angle"
            )
            x = st.slider("X", 0, c.CANVAS_WIDTH, int(speaker.x), key=f"speaker_{speaker.id}_x")
            y = st.slider("Y", 0, c.CANVAS_HEIGHT, int(speaker.y), key=f"speaker_{speaker.id}_y")
        speaker_values[speaker.id] = (angle, x, y)

    st.sidebar.markdown("---")

    st.sidebar.markdown("### Overlap Monitor")
    chart_placeholder = st.sidebar.empty()
    st.sidebar.markdown("---")

    st.sidebar.info(
        """
        **Legend:**
        - 🟢 Green: Speaker coverage
        - 🔵 Blue: Mic pickup
        - 🔴 Red: Feedback risk (overlap)
        """
    )

    controls = {
        "pattern": pattern,
        "mic_angle": mic_angle,
        "mic_position": (mic_x, mic_y),
        "volume": volume,
        "speakers": speaker_values,
    }
    return controls, chart_placeholder

def render_chart(placeholder, overlap_history):
    """
    Overlap Monitor: share of the venue where the mic hears a speaker,
    newest interaction on the right.
    """
    if not overlap_history:
        return

    canvas_px = c.CANVAS_WIDTH * c.CANVAS_HEIGHT
    n = len(overlap_history)
    df = pd.DataFrame({
        "Step": np.arange(1 - n, 1),
        "Risk": np.asarray(overlap_history, dtype=float) * 100.0 / canvas_px,
        "Pixels": overlap_history,
    })

    base = alt.Chart(df).encode(
        x=alt.X("Step:Q", title="Interactions (0 = now)"),
        y=alt.Y("Risk:Q", title="Feedback risk (% of venue)", scale=alt.Scale(domainMin=0)),
        tooltip=["Step", "Pixels", alt.Tooltip("Risk:Q", format=".2f")],
    )
    area = base.mark_area(color=c.CHART_COLOR, opacity=0.3, line=True)
    latest = base.transform_filter(alt.datum.Step == 0).mark_point(color=c.CHART_COLOR, filled=True)

    placeholder.altair_chart((area + latest).properties(height=c.CHART_HEIGHT), use_container_width=True)

# --- 2. RENDER HELPERS ---

def render_cone(img, speaker, volume):
    """
    Translucent green emission cone of a single speaker.
    """
    mask = raster.blank_mask(*img.shape[:2])
    raster.fill_cone(mask, speaker, volume, 255)
    raster.blend_mask(img, mask, c.COLOR_CONE, c.PATTERN_ALPHA)

def render_pickup(img, mic, volume):
    mask = raster.blank_mask(*img.shape[:2])
    raster.fill_pickup(mask, mic, volume, 255)
    raster.blend_mask(img, mask, c.COLOR_PICKUP, c.PATTERN_ALPHA)

def render_icon(img, icon, x, y, angle):
    """
    Draws a rotated icon centred on (x, y). Missing icons are skipped.
    """
    if icon is None:
        return
    raster.paste_rgba(img, raster.rotate_icon(icon, angle), x, y)

# --- 3. MAIN RENDER FUNCTION ---

def render_scene(scene, speaker_icon=None, mic_icon=None, overlap_mask=None):
    """
    Main Rendering Function.
    Full repaint of the venue; later layers are drawn on top.
    A precomputed overlap_mask of the same scene skips the off-screen pass.
    """
    if overlap_mask is None:
        overlap_mask = overlap.compute_overlap_mask(scene)

    # 1. Init Canvas
    img = np.full((c.CANVAS_HEIGHT, c.CANVAS_WIDTH, 3), c.COLOR_BG, dtype=np.uint8)

    # 2. Overlap Highlight (Red)
    raster.overlay_layer(img, overlap_mask)

    # 3. Translucent Patterns
    for speaker in scene.speakers:
        render_cone(img, speaker, scene.volume)

    render_pickup(img, scene.mic, scene.volume)

    # 4. Icons
    for speaker in scene.speakers:
        render_icon(img, speaker_icon, speaker.x, speaker.y, speaker.angle + c.SPEAKER_ICON_OFFSET_DEG)

    mic = scene.mic
    render_icon(img, mic_icon, mic.x, mic.y, mic.angle + c.MIC_ICON_OFFSET_DEG)

    # 5. Convert to RGB for Streamlit
    return cv2.cvtColor(img, cv2.COLOR_BGR2RGB)
