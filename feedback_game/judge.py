from collections import namedtuple
import logging
from . import constants as c
from . import overlap

logger = logging.getLogger(__name__)

class Verdict(namedtuple("Verdict", ["overlap_detected", "message", "severity"])):
    __slots__ = ()

    @property
    def color(self):
        return "red" if self.severity == c.SEVERITY_WARNING else "green"


def evaluate(scene, alert=None):
    """
    Judges the current setup. On overlap, the alert cue (anything with a
    play() method) is restarted and played.
    """
    feedback_possible = overlap.has_overlap(scene)

    if feedback_possible:
        logger.info("Overlap detected with %d speaker(s)", len(scene.speakers))
        if alert is not None:
            alert.play()
        return Verdict(True, c.MESSAGE_WARNING, c.SEVERITY_WARNING)

    return Verdict(False, c.MESSAGE_OK, c.SEVERITY_OK)
