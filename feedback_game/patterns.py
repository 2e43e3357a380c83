import numpy as np
from . import constants as c

# --- 1. SCALING HELPERS ---

def pickup_scale(volume):
    """
    The pickup pattern grows slightly with the shared volume.
    """
    return 1.0 + volume / 100.0

def cone_radius(volume):
    return volume * c.CONE_RADIUS_PER_VOLUME

# --- 2. POLAR CURVES ---

def polar_radius(kind, theta, scale=1.0):
    """
    Radius of a pickup pattern at angle(s) theta (radians).
    Uses the first-order family |a + b cos(theta)|; the magnitude turns the
    negative region of a hypercardioid into its rear lobe.
    """
    if kind not in c.PATTERN_COEFFICIENTS:
        raise ValueError(f"Unknown pattern kind: {kind!r}")

    a, b = c.PATTERN_COEFFICIENTS[kind]
    return c.BASE_RADIUS * np.abs(a + b * np.cos(theta)) * scale

def pattern_boundary(kind, scale=1.0):
    """
    Samples the closed boundary of a pickup pattern in local coordinates.
    Angle 0 points along local +x. Returns a (361, 2) float array.
    """
    degrees = np.arange(0, 360 + c.PATTERN_STEP_DEG, c.PATTERN_STEP_DEG)
    theta = np.deg2rad(degrees)
    r = polar_radius(kind, theta, scale)

    points = np.stack((r * np.cos(theta), r * np.sin(theta)), axis=1)

    # sin(2*pi) is not exactly zero; close the path explicitly
    points[-1] = points[0]
    return points

def cone_boundary(volume):
    """
    Circular sector (apex at the origin) for a speaker emission cone.
    """
    radius = cone_radius(volume)
    half = c.CONE_HALF_ANGLE_DEG

    degrees = np.arange(-half, half + c.PATTERN_STEP_DEG, c.PATTERN_STEP_DEG)
    theta = np.deg2rad(degrees)
    arc = np.stack((radius * np.cos(theta), radius * np.sin(theta)), axis=1)

    apex = np.zeros((1, 2))
    return np.concatenate((apex, arc, apex), axis=0)

# --- 3. SCREEN TRANSFORM ---

def to_screen(points, x, y, angle):
    """
    Rotates local points by 'angle' degrees (clockwise on a y-down canvas)
    and translates them to (x, y).
    """
    rad = np.deg2rad(angle)
    cos_a = np.cos(rad)
    sin_a = np.sin(rad)

    rotation = np.array([[cos_a, -sin_a],
                         [sin_a,  cos_a]])

    return points @ rotation.T + np.array([x, y], dtype=np.float64)
