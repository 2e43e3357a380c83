import numpy as np
import cv2
from . import constants as c
from . import patterns

# --- 1. SHAPE FILLS ---

def _to_fixed_point(points):
    """
    OpenCV fills take integer vertices; 'shift' keeps sub-pixel precision.
    """
    return np.round(points * (1 << c.FILL_SHIFT)).astype(np.int32)

def fill_polygon(img, points, color):
    cv2.fillPoly(img, [_to_fixed_point(points)], color, lineType=cv2.LINE_8, shift=c.FILL_SHIFT)

def fill_cone(img, speaker, volume, color):
    """
    Fills a speaker's emission cone at its live position/orientation.
    """
    local = patterns.cone_boundary(volume)
    fill_polygon(img, patterns.to_screen(local, speaker.x, speaker.y, speaker.angle), color)

def fill_pickup(img, mic, volume, color):
    """
    Fills the microphone pickup pattern. Omnidirectional is a true circle.
    """
    scale = patterns.pickup_scale(volume)

    if mic.pattern == c.OMNIDIRECTIONAL:
        factor = 1 << c.FILL_SHIFT
        center = (int(round(mic.x * factor)), int(round(mic.y * factor)))
        radius = int(round(c.BASE_RADIUS * scale * factor))
        cv2.circle(img, center, radius, color, -1, cv2.LINE_8, c.FILL_SHIFT)
        return

    local = patterns.pattern_boundary(mic.pattern, scale)
    fill_polygon(img, patterns.to_screen(local, mic.x, mic.y, mic.angle), color)

def blank_mask(height=c.CANVAS_HEIGHT, width=c.CANVAS_WIDTH):
    return np.zeros((height, width), dtype=np.uint8)

def blank_layer(height=c.CANVAS_HEIGHT, width=c.CANVAS_WIDTH):
    """
    Fully transparent BGRA raster.
    """
    return np.zeros((height, width, 4), dtype=np.uint8)

# --- 2. COMPOSITING ---

def composite_source_in(dst, src):
    """
    Porter-Duff 'source-in': the source survives only where the destination
    is opaque. Everything outside the source becomes transparent.
    """
    alpha = (src[:, :, 3].astype(np.uint16) * dst[:, :, 3].astype(np.uint16) + 127) // 255
    alpha = alpha.astype(np.uint8)

    out = np.zeros_like(dst)
    visible = alpha > 0
    out[visible, :3] = src[visible, :3]
    out[:, :, 3] = alpha
    return out

def overlay_layer(img, layer):
    """
    Source-over of a BGRA layer onto a BGR image (in place).
    """
    a = layer[:, :, 3:4].astype(np.float32) / 255.0
    if not np.any(a):
        return img

    blended = layer[:, :, :3].astype(np.float32) * a + img.astype(np.float32) * (1.0 - a)
    img[:] = np.round(blended).astype(np.uint8)
    return img

def blend_mask(img, mask, color, alpha):
    """
    Tints the masked pixels of a BGR image with a translucent color (in place).
    """
    tint = np.empty_like(img)
    tint[:] = color
    blended = cv2.addWeighted(tint, alpha, img, 1.0 - alpha, 0)

    region = mask > 0
    img[region] = blended[region]
    return img

# --- 3. ICONS ---

def rotate_icon(icon, angle):
    """
    Rotates a square BGRA icon by 'angle' degrees clockwise.
    The icon is padded first so the corners survive the rotation.
    """
    size = icon.shape[0]
    side = int(np.ceil(size * np.sqrt(2)))
    if (side - size) % 2:
        side += 1
    pad = (side - size) // 2

    padded = np.zeros((side, side, 4), dtype=np.uint8)
    padded[pad:pad + size, pad:pad + size] = icon

    center = ((side - 1) / 2.0, (side - 1) / 2.0)
    # OpenCV treats positive angles as counter-clockwise
    matrix = cv2.getRotationMatrix2D(center, -angle, 1.0)
    return cv2.warpAffine(
        padded, matrix, (side, side),
        flags=cv2.INTER_LINEAR,
        borderMode=cv2.BORDER_CONSTANT,
        borderValue=(0, 0, 0, 0),
    )

def paste_rgba(img, rgba, cx, cy):
    """
    Alpha-blends a BGRA sprite centred on (cx, cy), clipped to the image.
    """
    img_h, img_w = img.shape[:2]
    h, w = rgba.shape[:2]
    x0 = int(round(cx - w / 2.0))
    y0 = int(round(cy - h / 2.0))

    ix0, iy0 = max(x0, 0), max(y0, 0)
    ix1, iy1 = min(x0 + w, img_w), min(y0 + h, img_h)
    if ix0 >= ix1 or iy0 >= iy1:
        return img

    patch = rgba[iy0 - y0:iy1 - y0, ix0 - x0:ix1 - x0]
    overlay_layer(img[iy0:iy1, ix0:ix1], patch)
    return img
