import numpy as np
from numba import njit
from . import constants as c
from . import raster

# --- 1. PIXEL SCAN (JIT COMPILED) ---

@njit(cache=True)
def find_first_opaque(alpha):
    """
    Row-major scan of an alpha channel.
    Returns the flat index of the first non-zero entry, or -1.
    """
    h, w = alpha.shape
    for y in range(h):
        for x in range(w):
            if alpha[y, x] > 0:
                return y * w + x
    return -1

# --- 2. MASK-BASED INTERSECTION ---

def _opaque(color):
    # Coverage lives in alpha, so the fill is opaque whatever colour comes in
    return (*color[:3], 255)

def build_overlap_layer(scene, cone_color=c.MARKER_CONE, pickup_color=c.MARKER_PICKUP):
    """
    Renders the intersection of all speaker cones with the pickup pattern.

    1. Speaker cones are accumulated (source-over) into a transparent raster.
    2. The pickup pattern is drawn on its own layer and composited with
       'source-in', so only pixels covered by both survive.
    Every surviving pixel has non-zero alpha; the rest is fully transparent.
    """
    cone_color = _opaque(cone_color)
    pickup_color = _opaque(pickup_color)

    cones = raster.blank_layer()
    volume = scene.volume

    for speaker in scene.speakers:
        raster.fill_cone(cones, speaker, volume, cone_color)

    # The masking rule applies to the pickup layer only
    pickup = raster.blank_layer()
    raster.fill_pickup(pickup, scene.mic, volume, pickup_color)

    return raster.composite_source_in(cones, pickup)

def has_overlap(scene, cone_color=c.MARKER_CONE, pickup_color=c.MARKER_PICKUP):
    """
    True as soon as one pixel is covered by a cone AND the pickup pattern.
    Marker colors are cosmetic and do not change the result.
    """
    layer = build_overlap_layer(scene, cone_color, pickup_color)
    alpha = np.ascontiguousarray(layer[:, :, 3])
    return find_first_opaque(alpha) >= 0

def compute_overlap_mask(scene):
    """
    BGRA raster with every overlapping pixel painted opaque red,
    ready to sit underneath the translucent pattern layers.
    """
    layer = build_overlap_layer(scene)
    layer[layer[:, :, 3] > 0] = c.MARKER_OVERLAP
    return layer

def mask_area(mask):
    return int(np.count_nonzero(mask[:, :, 3]))

def overlap_area(scene):
    """
    Number of overlapping pixels (drives the overlap monitor).
    """
    return mask_area(build_overlap_layer(scene))
