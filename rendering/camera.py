"""
Perspective camera and damped orbit controls.

Coordinate system
-----------------
- World +Y is up; the ecliptic is the XZ plane.
- View space: +X right, +Y up, +Z forward (depth along the look direction).
- FOV is the full *vertical* field of view in degrees.
- NDC: x, y in [-1, 1], +y up, (0, 0) at the viewport centre.
"""

from __future__ import annotations
import math
from typing import Optional, Sequence, Tuple

import numpy as np

from core.config import (CAMERA_FOV_DEG, CAMERA_NEAR, CAMERA_FAR, CAMERA_START,
                         CAMERA_MAX_DISTANCE, CAMERA_DAMPING, WIDTH, HEIGHT)
from core.coords import look_at_basis, clamp, cart_to_sph, sph_to_cart


class PerspectiveCamera:
    """Eye position + look target + projection parameters."""

    def __init__(self, fov_deg: float = CAMERA_FOV_DEG,
                 width: int = WIDTH, height: int = HEIGHT,
                 near: float = CAMERA_NEAR, far: float = CAMERA_FAR,
                 position: Sequence[float] = CAMERA_START,
                 target: Sequence[float] = (0.0, 0.0, 0.0)):
        self.fov_deg  = float(fov_deg)
        self.near     = near
        self.far      = far
        self.position = np.array(position, dtype=np.float64)
        self.target   = np.array(target, dtype=np.float64)
        self.width    = width
        self.height   = height
        self.aspect   = width / max(height, 1)

    # ------------------------------------------------------------------

    def set_viewport(self, width: int, height: int) -> None:
        """Update size and aspect together."""
        self.width = int(width)
        self.height = int(height)
        self.aspect = self.width / max(self.height, 1)

    def basis(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """(right, up, forward) unit vectors"""
        return look_at_basis(self.position, self.target)

    def focal_length(self) -> float:
        """Focal length in pixels (vertical FOV)"""
        return self.height / (2.0 * math.tan(math.radians(self.fov_deg / 2.0)))

    # ------------------------------------------------------------------

    def to_view(self, points: np.ndarray) -> np.ndarray:
        """World points (N, 3) → view space (N, 3)."""
        right, up, fwd = self.basis()
        rel = np.atleast_2d(points) - self.position
        return np.stack([rel @ right, rel @ up, rel @ fwd], axis=1)

    def project(self, points: np.ndarray):
        """
        World points (N, 3) → screen pixels.

        Returns:
            (xy (N, 2) float, depth (N,), visible (N,) bool). Points behind
            the near plane or past the far plane are not visible.
        """
        view = self.to_view(points)
        depth = view[:, 2]
        visible = (depth > self.near) & (depth < self.far)
        safe = np.where(visible, depth, 1.0)
        f = self.focal_length()
        xy = np.empty((len(view), 2))
        xy[:, 0] = self.width / 2.0 + f * view[:, 0] / safe
        xy[:, 1] = self.height / 2.0 - f * view[:, 1] / safe
        return xy, depth, visible

    def ray_from_ndc(self, ndc_x: float, ndc_y: float) -> Tuple[np.ndarray, np.ndarray]:
        """Ray (origin, unit direction) through a normalized device point."""
        right, up, fwd = self.basis()
        t = math.tan(math.radians(self.fov_deg / 2.0))
        d = fwd + right * (ndc_x * t * self.aspect) + up * (ndc_y * t)
        return self.position.copy(), d / np.linalg.norm(d)

    def pixels_per_unit(self, depth: float) -> float:
        """Screen size of one world unit at the given depth."""
        return self.focal_length() / max(depth, 1e-6)


class OrbitControls:
    """
    Orbit the camera around its target: drag to rotate, wheel to zoom.

    Input accumulates into deltas that are applied a fraction at a time by
    update() (damping), so motion eases out after the pointer stops.
    """

    MIN_POLAR = 1e-3

    def __init__(self, camera: PerspectiveCamera,
                 damping: float = CAMERA_DAMPING,
                 min_distance: float = 1.0,
                 max_distance: float = CAMERA_MAX_DISTANCE,
                 rotate_speed: float = 1.0):
        self.camera = camera
        self.damping = damping
        self.min_distance = min_distance
        self.max_distance = max_distance
        self.rotate_speed = rotate_speed
        self.auto_rotate = False          # off by default; leaving the tour forces it off
        self.auto_rotate_speed = 2.0       # 30 s per orbit at 60 fps
        self.enabled = True

        self._d_theta = 0.0
        self._d_phi = 0.0
        self._zoom = 1.0

    def rotate(self, dx_px: float, dy_px: float) -> None:
        """Pointer drag by (dx, dy) pixels."""
        if not self.enabled:
            return
        h = max(self.camera.height, 1)
        self._d_theta -= 2.0 * math.pi * dx_px / h * self.rotate_speed
        self._d_phi   -= 2.0 * math.pi * dy_px / h * self.rotate_speed

    def zoom(self, wheel_steps: float) -> None:
        """Positive steps move closer."""
        if not self.enabled:
            return
        self._zoom *= 0.95 ** wheel_steps

    def stop(self) -> None:
        self._d_theta = self._d_phi = 0.0
        self._zoom = 1.0

    def update(self) -> None:
        """Apply pending deltas once per frame."""
        cam = self.camera
        r, theta, phi = cart_to_sph(cam.position - cam.target)
        if r == 0.0:
            r = self.min_distance

        if self.auto_rotate:
            self._d_theta -= 2.0 * math.pi / 60.0 / 60.0 * self.auto_rotate_speed

        theta += self._d_theta * self.damping
        phi = clamp(phi + self._d_phi * self.damping,
                    self.MIN_POLAR, math.pi - self.MIN_POLAR)
        r = clamp(r * self._zoom, self.min_distance, self.max_distance)

        cam.position = cam.target + sph_to_cart(r, theta, phi)

        self._d_theta *= 1.0 - self.damping
        self._d_phi *= 1.0 - self.damping
        self._zoom = 1.0
