"""
texture_synth.py
================
Procedural surface textures for orrery bodies.

Every texture is a (512, 512, 4) uint8 RGBA buffer painted on an opaque
canvas with source-over compositing:

  sun          flat #ffcc00 + 100 translucent orange flare disks
  earth        deep blue ocean + 80 green landmasses + 100 cloud puffs
  gas          colour_a → colour_b → colour_a vertical gradient + 20 dark bands
  rocky        colour_a base + 5000 2×2 speckles (colour_b / black, alpha 0.1)

Any other class name falls through to the rocky painter.

Randomness comes from a numpy Generator. Callers that do not pass one get a
fresh unseeded generator, so repeated calls differ; tests pass a seeded
generator to compare buffers.
"""
from __future__ import annotations
import math
import numpy as np
from typing import Optional, Sequence, Tuple

from core.config import TEXTURE_SIZE, GLOW_SIZE
from core.types import SurfaceClass, parse_hex_color

RGBA = Tuple[float, float, float, float]

SUN_BASE       = (255, 204, 0)        # #ffcc00
SUN_FLARE      = (255, 100, 0, 0.2)
OCEAN          = (0, 68, 255)         # #0044ff
LANDMASS       = (0, 170, 51, 1.0)    # #00aa33
CLOUD          = (255, 255, 255, 0.3)
STORM_BAND     = (0, 0, 0, 0.1)
SPECKLE_ALPHA  = 0.1

N_FLARES       = 100
N_LANDMASSES   = 80
N_CLOUDS       = 100
N_BANDS        = 20
N_SPECKLES     = 5000


# ── Canvas primitives ────────────────────────────────────────────────────────

def _new_canvas(size: int, colour: Sequence[float]) -> np.ndarray:
    canvas = np.empty((size, size, 3), dtype=np.float32)
    canvas[:, :] = colour[:3]
    return canvas


def _paint_disk(canvas, px, py, radius, colour: RGBA):
    """Filled circle, composited over the canvas."""
    H, W = canvas.shape[:2]
    if radius <= 0:
        return
    pad = int(math.ceil(radius)) + 1
    x0 = max(0, int(px) - pad); x1 = min(W, int(px) + pad + 1)
    y0 = max(0, int(py) - pad); y1 = min(H, int(py) + pad + 1)
    if x0 >= x1 or y0 >= y1:
        return
    yy, xx = np.mgrid[y0:y1, x0:x1].astype(np.float32)
    # pixel centres
    inside = ((xx + 0.5 - px)**2 + (yy + 0.5 - py)**2) <= radius * radius
    a = colour[3]
    region = canvas[y0:y1, x0:x1]
    for c in range(3):
        region[..., c] = np.where(inside,
                                  region[..., c] * (1.0 - a) + colour[c] * a,
                                  region[..., c])


def _paint_rect(canvas, x, y, w, h, colour: RGBA):
    H, W = canvas.shape[:2]
    x0 = max(0, int(x)); x1 = min(W, int(x + w))
    y0 = max(0, int(y)); y1 = min(H, int(y + h))
    if x0 >= x1 or y0 >= y1:
        return
    a = colour[3]
    canvas[y0:y1, x0:x1] = canvas[y0:y1, x0:x1] * (1.0 - a) + \
        np.asarray(colour[:3], dtype=np.float32) * a


def _vertical_gradient(size, stops):
    """stops: [(offset, (r, g, b)), ...] sampled at pixel-row centres."""
    t = (np.arange(size, dtype=np.float32) + 0.5) / size
    offsets = [s[0] for s in stops]
    column = np.stack(
        [np.interp(t, offsets, [s[1][c] for s in stops]) for c in range(3)],
        axis=-1).astype(np.float32)
    return np.repeat(column[:, np.newaxis, :], size, axis=1)


def _to_rgba(canvas) -> np.ndarray:
    H, W = canvas.shape[:2]
    out = np.empty((H, W, 4), dtype=np.uint8)
    out[..., :3] = np.clip(np.rint(canvas), 0, 255).astype(np.uint8)
    out[..., 3] = 255
    return out


# ── Painters ─────────────────────────────────────────────────────────────────

def _paint_sun(canvas, rng):
    size = canvas.shape[0]
    canvas[:, :] = SUN_BASE
    for _ in range(N_FLARES):
        _paint_disk(canvas, rng.uniform(0, size), rng.uniform(0, size),
                    rng.uniform(0, 50), SUN_FLARE)


def _paint_water_world(canvas, rng):
    size = canvas.shape[0]
    canvas[:, :] = OCEAN
    for _ in range(N_LANDMASSES):
        x = rng.uniform(0, size); y = rng.uniform(0, size)
        _paint_disk(canvas, x, y, rng.uniform(20, 80), LANDMASS)
    for _ in range(N_CLOUDS):
        _paint_disk(canvas, rng.uniform(0, size), rng.uniform(0, size),
                    rng.uniform(0, 30), CLOUD)


def _paint_gas(canvas, rng, colour_a, colour_b):
    size = canvas.shape[0]
    canvas[:, :] = _vertical_gradient(
        size, [(0.0, colour_a), (0.5, colour_b), (1.0, colour_a)])
    # storm bands
    for _ in range(N_BANDS):
        _paint_rect(canvas, 0, rng.uniform(0, size), size, rng.uniform(0, 20),
                    STORM_BAND)


def _paint_rocky(canvas, rng, colour_b):
    size = canvas.shape[0]
    for _ in range(N_SPECKLES):
        col = colour_b if rng.random() > 0.5 else (0, 0, 0)
        _paint_rect(canvas, rng.uniform(0, size), rng.uniform(0, size), 2, 2,
                    (col[0], col[1], col[2], SPECKLE_ALPHA))


def synthesize(surface_class, colour_a: str, colour_b: str,
               rng: Optional[np.random.Generator] = None,
               size: int = TEXTURE_SIZE) -> np.ndarray:
    """
    Paint a surface texture.

    Args:
        surface_class: SurfaceClass or class name ("sun", "earth", "gas",
                       anything else → rocky)
        colour_a, colour_b: CSS hex colours ('#rgb' / '#rrggbb')
        rng: random source (unseeded when None)
        size: edge length in pixels

    Returns:
        (size, size, 4) uint8 RGBA buffer
    """
    if rng is None:
        rng = np.random.default_rng()
    kind = SurfaceClass.parse(surface_class)
    ca = parse_hex_color(colour_a)
    cb = parse_hex_color(colour_b)

    canvas = _new_canvas(size, ca)
    if kind is SurfaceClass.SUN:
        _paint_sun(canvas, rng)
    elif kind is SurfaceClass.WATER_WORLD:
        _paint_water_world(canvas, rng)
    elif kind is SurfaceClass.GAS:
        _paint_gas(canvas, rng, ca, cb)
    else:
        _paint_rocky(canvas, rng, cb)
    return _to_rgba(canvas)


# ── Sun glow sprite ──────────────────────────────────────────────────────────

GLOW_STOPS = [
    (0.0, (255, 220, 100, 1.0)),   # centre bright
    (0.3, (255, 150, 0,   0.4)),   # mid orange
    (1.0, (0,   0,   0,   0.0)),   # edge transparent
]


def synthesize_glow(size: int = GLOW_SIZE) -> np.ndarray:
    """Radial-gradient halo sprite (size, size, 4) uint8, alpha falls to 0."""
    c = size / 2.0
    yy, xx = np.mgrid[0:size, 0:size].astype(np.float32)
    t = np.sqrt((xx + 0.5 - c)**2 + (yy + 0.5 - c)**2) / c
    t = np.clip(t, 0.0, 1.0)
    offsets = [s[0] for s in GLOW_STOPS]
    out = np.empty((size, size, 4), dtype=np.uint8)
    for ch in range(3):
        out[..., ch] = np.clip(np.interp(t, offsets, [s[1][ch] for s in GLOW_STOPS]),
                               0, 255).astype(np.uint8)
    out[..., 3] = np.clip(np.interp(t, offsets, [s[1][3] * 255 for s in GLOW_STOPS]),
                          0, 255).astype(np.uint8)
    return out


def mean_colour(texture: np.ndarray) -> Tuple[int, int, int]:
    """Average RGB of a texture; used for distant bodies smaller than a pixel."""
    m = texture[..., :3].reshape(-1, 3).mean(axis=0)
    return int(m[0]), int(m[1]), int(m[2])
