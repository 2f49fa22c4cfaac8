from __future__ import annotations
import math
import numpy as np


def clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else hi if x > hi else x


def lerp_vec(a: np.ndarray, b: np.ndarray, t: float) -> np.ndarray:
    """a + (b - a) * t, without mutating either input."""
    return a + (b - a) * t


def normalize(v: np.ndarray) -> np.ndarray:
    n = float(np.linalg.norm(v))
    if n < 1e-12:
        return np.zeros_like(v)
    return v / n


def look_at_basis(eye: np.ndarray, target: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Camera axes (right, up, forward) for an eye looking at target, world up +Y.
    Looking straight up/down falls back to -Z as the up hint.
    """
    fwd = normalize(target - eye)
    if not np.any(fwd):
        fwd = np.array([0.0, 0.0, -1.0])
    up_w = np.array([0.0, 1.0, 0.0])
    right = np.cross(fwd, up_w)
    if np.linalg.norm(right) < 1e-9:           # looking straight up/down
        up_w = np.array([0.0, 0.0, -1.0])
        right = np.cross(fwd, up_w)
    right = normalize(right)
    up = np.cross(right, fwd)
    return right, up, fwd


def sph_to_cart(radius: float, theta: float, phi: float) -> np.ndarray:
    """
    Spherical (radius, azimuth theta around +Y, polar phi from +Y) -> xyz.
    """
    s = math.sin(phi)
    return np.array([radius * s * math.sin(theta),
                     radius * math.cos(phi),
                     radius * s * math.cos(theta)])


def cart_to_sph(v: np.ndarray) -> tuple[float, float, float]:
    x, y, z = (float(c) for c in v)
    r = math.sqrt(x*x + y*y + z*z)
    if r < 1e-12:
        return 0.0, 0.0, 0.0
    theta = math.atan2(x, z)
    phi = math.acos(clamp(y / r, -1.0, 1.0))
    return r, theta, phi
