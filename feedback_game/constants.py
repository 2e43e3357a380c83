# --- VENUE CANVAS (The Display Contract) ---
CANVAS_WIDTH = 800
CANVAS_HEIGHT = 600

# Sub-pixel precision for OpenCV fills (coordinates are scaled by 2**SHIFT)
FILL_SHIFT = 4

# --- PICKUP PATTERNS ---
OMNIDIRECTIONAL = "omnidirectional"
CARDIOID = "cardioid"
SUPERCARDIOID = "supercardioid"
HYPERCARDIOID = "hypercardioid"

PATTERN_KINDS = (OMNIDIRECTIONAL, CARDIOID, SUPERCARDIOID, HYPERCARDIOID)

# First-order polar family: r = a + b * cos(theta)
PATTERN_COEFFICIENTS = {
    OMNIDIRECTIONAL: (1.0, 0.0),
    CARDIOID:        (0.5, 0.5),
    SUPERCARDIOID:   (0.59, 0.41),
    HYPERCARDIOID:   (0.25, 0.75),
}

BASE_RADIUS = 80.0           # px (pickup radius at scale 1)
PATTERN_STEP_DEG = 1         # Sampling resolution of the polar curve

# --- SPEAKER CONES ---
CONE_RADIUS_PER_VOLUME = 5.0 # px per volume unit
CONE_HALF_ANGLE_DEG = 45.0   # +/- 45 degrees beamwidth

# --- SCENE LIMITS ---
MAX_SPEAKERS = 5
MIN_SPEAKERS = 1

MIN_VOLUME = 1
MAX_VOLUME = 100
DEFAULT_VOLUME = 50

# --- DEFAULT LAYOUT ---
DEFAULT_MIC_POSITION = (400.0, 500.0)
DEFAULT_MIC_PATTERN = CARDIOID
DEFAULT_SPEAKER_Y = 150.0
SPEAKER_LAYOUT_X0 = 100.0    # x = X0 + STEP * index
SPEAKER_LAYOUT_STEP = 100.0

# --- COLORS (BGR format for OpenCV) ---
COLOR_BG          = (255, 255, 255) # White
COLOR_CONE        = (0, 255, 0)     # Green
COLOR_PICKUP      = (235, 206, 135) # Sky Blue
COLOR_OVERLAP     = (0, 0, 255)     # Red

PATTERN_ALPHA = 0.3

# Marker colors for the off-screen overlap raster (BGRA, fully opaque)
MARKER_CONE   = (0, 255, 0, 255)    # Pure Green
MARKER_PICKUP = (255, 0, 0, 255)    # Pure Blue
MARKER_OVERLAP = (0, 0, 255, 255)   # Pure Red

# --- ICONS ---
ICON_SIZE_PX = 40
# Icon artwork points "up"; these offsets align it with the pattern forward axis
SPEAKER_ICON_OFFSET_DEG = -90.0
MIC_ICON_OFFSET_DEG = 90.0

# --- ASSETS ---
SPEAKER_ICON_PATH = "images/speaker-icon.png"
MIC_ICON_PATH = "images/mic-icon.png"
ALERT_CLIP_PATH = "audio/feedback.mp3"

# --- VERDICTS ---
SEVERITY_OK = "ok"
SEVERITY_WARNING = "warning"

MESSAGE_OK = "Great setup! Feedback is minimized."
MESSAGE_WARNING = "Feedback is likely. Adjust your setup to minimize overlap."

# --- MONITOR ---
HISTORY_LENGTH = 200
CHART_HEIGHT = 150
CHART_COLOR = "#ff4b4b"

# --- LOGGING ---
LOGGER_NAME = "feedback_game"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"
# JIT compilation and audio decoding log a lot at DEBUG
NOISY_LOGGERS = ("numba", "librosa", "audioread")
