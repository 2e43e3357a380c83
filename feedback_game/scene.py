import copy
import logging
import numpy as np
from . import constants as c

logger = logging.getLogger(__name__)

# --- 1. HELPERS ---

def wrap_degrees(angle):
    """
    Wraps any orientation into [0, 360). 360 -> 0, -90 -> 270.
    """
    wrapped = angle % 360
    # Tiny negative floats round up to exactly 360
    return 0.0 if wrapped == 360 else wrapped

# --- 2. ENTITIES ---

class Microphone:
    def __init__(self, x, y, angle=0, pattern=c.DEFAULT_MIC_PATTERN):
        self.x = float(x)
        self.y = float(y)
        self.angle = wrap_degrees(angle)
        self.pattern = pattern

    def __repr__(self):
        return f"Microphone(x={self.x}, y={self.y}, angle={self.angle}, pattern={self.pattern!r})"


class Speaker:
    def __init__(self, x, y, angle=0, speaker_id=0):
        self.x = float(x)
        self.y = float(y)
        self.angle = wrap_degrees(angle)
        self.id = speaker_id

    def __repr__(self):
        return f"Speaker(id={self.id}, x={self.x}, y={self.y}, angle={self.angle})"

# --- 3. THE SCENE ---

class SceneModel:
    """
    Single owner of the venue state: one microphone, 1-5 speakers and the
    shared volume. The renderer and the overlap engine only read it.
    """

    def __init__(self, mic=None, speakers=None, volume=c.DEFAULT_VOLUME):
        if mic is None:
            mic = Microphone(*c.DEFAULT_MIC_POSITION)
        if not speakers:
            speakers = [Speaker(200, c.DEFAULT_SPEAKER_Y, 0, 0)]

        self._mic = mic
        self._speakers = list(speakers[:c.MAX_SPEAKERS])
        self._volume = float(np.clip(volume, c.MIN_VOLUME, c.MAX_VOLUME))

    # --- Accessors ---

    @property
    def mic(self):
        return self._mic

    @property
    def speakers(self):
        return tuple(self._speakers)

    @property
    def volume(self):
        return self._volume

    def get_speaker(self, speaker_id):
        for speaker in self._speakers:
            if speaker.id == speaker_id:
                return speaker
        raise KeyError(f"No speaker with id {speaker_id}")

    def snapshot(self):
        """
        Deep copy handed to the renderer for one frame.
        """
        return copy.deepcopy(self)

    # --- Microphone Mutators ---

    def set_mic_position(self, x, y):
        self._mic.x = float(x)
        self._mic.y = float(y)

    def set_mic_orientation(self, angle):
        self._mic.angle = wrap_degrees(angle)

    def set_mic_pattern(self, kind):
        if kind not in c.PATTERN_KINDS:
            raise ValueError(f"Unknown pattern kind: {kind!r}")
        self._mic.pattern = kind

    def set_volume(self, volume):
        self._volume = float(np.clip(volume, c.MIN_VOLUME, c.MAX_VOLUME))

    # --- Speaker Mutators ---

    def add_speaker(self):
        """
        Appends a speaker at the next default layout slot.
        Returns None (and changes nothing) when the venue is full.
        """
        count = len(self._speakers)
        if count >= c.MAX_SPEAKERS:
            logger.debug("Speaker limit (%d) reached, add ignored", c.MAX_SPEAKERS)
            return None

        speaker = Speaker(
            x=c.SPEAKER_LAYOUT_X0 + count * c.SPEAKER_LAYOUT_STEP,
            y=c.DEFAULT_SPEAKER_Y,
            angle=0,
            speaker_id=count,
        )
        self._speakers.append(speaker)
        return speaker

    def remove_speaker(self):
        """
        Removes the most recently added speaker. The last one always stays.
        """
        if len(self._speakers) <= c.MIN_SPEAKERS:
            logger.debug("Only %d speaker left, remove ignored", len(self._speakers))
            return None
        return self._speakers.pop()

    def set_speaker_orientation(self, speaker_id, angle):
        self.get_speaker(speaker_id).angle = wrap_degrees(angle)

    def set_speaker_position(self, speaker_id, x, y):
        speaker = self.get_speaker(speaker_id)
        speaker.x = float(x)
        speaker.y = float(y)
