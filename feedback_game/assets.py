import logging
import os
import cv2
import librosa
import numpy as np
from . import constants as c

logger = logging.getLogger(__name__)

# --- 1. ICONS ---

def load_icon(path, size=c.ICON_SIZE_PX):
    """
    Loads an icon as a square BGRA array of 'size' pixels.
    Returns None (and logs) when the file is missing or unreadable,
    so the renderer can simply skip the icon.
    """
    if not path or not os.path.exists(path):
        logger.warning("Icon not found: %s", path)
        return None

    icon = cv2.imread(path, cv2.IMREAD_UNCHANGED)
    if icon is None:
        logger.warning("Could not decode icon: %s", path)
        return None

    # Normalise channel layout to BGRA
    if icon.ndim == 2:
        icon = cv2.cvtColor(icon, cv2.COLOR_GRAY2BGRA)
    elif icon.shape[2] == 3:
        icon = cv2.cvtColor(icon, cv2.COLOR_BGR2BGRA)

    if icon.dtype != np.uint8:
        # 16-bit PNGs
        icon = (icon / 257).astype(np.uint8)

    return cv2.resize(icon, (size, size), interpolation=cv2.INTER_AREA)

# --- 2. ALERT CLIP ---

def load_alert_clip(path):
    """
    Decodes the feedback alert clip into samples.
    Returns None when the clip cannot be loaded.
    """
    if not path or not os.path.exists(path):
        logger.warning("Alert clip not found: %s", path)
        return None

    try:
        y, sr = librosa.load(path, sr=None)
    except Exception as e:
        logger.warning("Error loading alert clip %s: %s", path, e)
        return None

    return {
        "samples": y,
        "sr": sr,
        "duration": librosa.get_duration(y=y, sr=sr),
    }


class AlertCue:
    """
    Audible feedback cue. Every play() restarts the clip from zero, so it is
    safe to trigger repeatedly. 'sink' receives (samples, sample_rate, start).
    """

    def __init__(self, clip, sink=None):
        self.clip = clip
        self.sink = sink
        self.position = 0.0
        self.play_count = 0

    @property
    def available(self):
        return self.clip is not None

    def play(self):
        if not self.available:
            logger.debug("Alert clip unavailable, skipping playback")
            return

        self.position = 0.0
        self.play_count += 1

        if self.sink is not None:
            self.sink(self.clip["samples"], self.clip["sr"], self.position)
