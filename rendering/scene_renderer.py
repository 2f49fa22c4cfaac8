"""
SceneRenderer — numpy/pygame software renderer for the orrery scene graph.

Layers, back to front:
  1. Point layer     starfield + asteroid belt plotted into a numpy frame,
                     pushed to the surface with blit_array
  2. Orbit tracks    projected 128-gon outlines
  3. Spheres         depth-sorted (painter's algorithm); each textured body
                     is ray-cast per pixel into a sprite: view-space normal →
                     body-local normal → equirectangular texel, Lambert-lit
                     from the sun at the origin. Emissive bodies are unlit.
                     Rings are split into far/near halves around their body.
  4. Additive glow   sun halo sprite
  5. Comet trail

Bodies smaller than two pixels are drawn as single dots in their mean colour.
"""

from __future__ import annotations
import math
from typing import Dict, List, Optional, Tuple

import numpy as np
import pygame

from universe.scene_graph import SceneGraph, SceneNode, NodeKind

BG_COLOUR = (0, 0, 5)
AMBIENT = 0.2
MAX_SPRITE_PX = 640
TRACK_SEGMENTS = 128
RING_SEGMENTS = 64
HIGHLIGHT_COLOUR = (0, 255, 255)


def _unit_columns(m: np.ndarray) -> np.ndarray:
    """Rotation part of a world matrix with the scale divided out."""
    r = m[:3, :3].copy()
    n = np.linalg.norm(r, axis=0)
    n[n < 1e-12] = 1.0
    return r / n


def sphere_sprite(texture: Optional[np.ndarray], colour, size: int,
                  view_to_local: np.ndarray, light_view: Optional[np.ndarray],
                  tint=(0, 0, 0)) -> pygame.Surface:
    """
    Render one sphere into a (size, size) RGBA surface.

    Args:
        texture: (H, W, 4) uint8 equirectangular map, or None for flat colour
        colour: RGB used when texture is None
        size: sprite edge in pixels
        view_to_local: 3×3 matrix taking view-space normals to body space
        light_view: unit vector toward the light in view space, None = unlit
        tint: additive emissive colour
    """
    c = (np.arange(size, dtype=np.float32) + 0.5) / size * 2.0 - 1.0
    xs, ys = np.meshgrid(c, -c)                  # +y up
    r2 = xs * xs + ys * ys
    inside = r2 <= 1.0
    zs = np.sqrt(np.clip(1.0 - r2, 0.0, 1.0))
    # normals facing the camera point along -Z in view space
    normals = np.stack([xs, ys, -zs], axis=-1)

    if texture is not None:
        local = normals @ view_to_local.T
        lon = np.arctan2(local[..., 0], local[..., 2])
        lat = np.arcsin(np.clip(local[..., 1], -1.0, 1.0))
        th, tw = texture.shape[:2]
        u = ((lon / (2.0 * math.pi) + 0.5) % 1.0 * tw).astype(np.int32) % tw
        v = np.clip(((0.5 - lat / math.pi) * th).astype(np.int32), 0, th - 1)
        rgb = texture[v, u, :3].astype(np.float32)
    else:
        rgb = np.empty((size, size, 3), dtype=np.float32)
        rgb[:] = colour[:3]

    if light_view is not None:
        lambert = np.clip(normals @ light_view, 0.0, 1.0)
        rgb = rgb * (AMBIENT + (1.0 - AMBIENT) * lambert)[..., np.newaxis]
    rgb = rgb + np.asarray(tint, dtype=np.float32)

    rgba = np.zeros((size, size, 4), dtype=np.uint8)
    rgba[..., :3] = np.clip(rgb, 0, 255).astype(np.uint8)
    rgba[..., 3] = np.where(inside, 255, 0).astype(np.uint8)
    raw = np.ascontiguousarray(rgba)
    return pygame.image.frombuffer(raw.tobytes(), (size, size), "RGBA").copy()


def _glow_surface(glow: np.ndarray) -> pygame.Surface:
    """Premultiplied RGB halo for additive blending."""
    rgb = glow[..., :3].astype(np.float32) * (glow[..., 3:4].astype(np.float32) / 255.0)
    surf = pygame.surfarray.make_surface(np.clip(rgb, 0, 255).astype(np.uint8).swapaxes(0, 1))
    return surf


class SceneRenderer:
    """Draws a SceneGraph through a PerspectiveCamera onto a pygame surface."""

    def __init__(self):
        self._glow_cache: Dict[int, pygame.Surface] = {}

    # ------------------------------------------------------------------
    def render(self, surface: pygame.Surface, graph: SceneGraph, camera,
               highlight: Optional[int] = None) -> None:
        W, H = surface.get_width(), surface.get_height()
        if (W, H) != (camera.width, camera.height):
            camera.set_viewport(W, H)

        frame = np.zeros((W, H, 3), dtype=np.uint8)
        frame[:, :] = BG_COLOUR
        for node in graph.of_kind(NodeKind.POINTS):
            if node.name == "starfield" and node.visible:
                self._plot_points(frame, graph, camera, node)
        for node in graph.of_kind(NodeKind.INSTANCES):
            if node.visible:
                self._plot_points(frame, graph, camera, node)
        pygame.surfarray.blit_array(surface, frame)

        for node in graph.of_kind(NodeKind.TRACK):
            if node.visible:
                self._draw_track(surface, graph, camera, node)

        self._draw_spheres(surface, graph, camera, highlight)

        for node in graph.of_kind(NodeKind.POINTS):
            if node.name != "starfield" and node.visible:
                self._draw_trail(surface, graph, camera, node)

    # ------------------------------------------------------------------
    def _world_points(self, graph, node) -> np.ndarray:
        m = graph.world_matrix(node.id)
        return node.points @ m[:3, :3].T + m[:3, 3]

    def _plot_points(self, frame, graph, camera, node: SceneNode):
        if node.points is None or len(node.points) == 0:
            return
        xy, _, vis = camera.project(self._world_points(graph, node))
        W, H = frame.shape[:2]
        px = xy[:, 0].astype(np.int64)
        py = xy[:, 1].astype(np.int64)
        ok = vis & (px >= 0) & (px < W - 1) & (py >= 0) & (py < H - 1)
        if node.colours is not None:
            cols = node.colours[ok]
        else:
            cols = np.asarray(node.colour, dtype=np.uint8)
        px, py = px[ok], py[ok]
        frame[px, py] = cols
        if node.point_size >= 2.0:
            frame[px + 1, py] = cols
            frame[px, py + 1] = cols
            frame[px + 1, py + 1] = cols

    def _draw_track(self, surface, graph, camera, node: SceneNode):
        r = (node.inner + node.outer) / 2.0
        a = np.linspace(0.0, 2.0 * math.pi, TRACK_SEGMENTS + 1)
        local = np.stack([np.cos(a) * r, np.zeros_like(a), np.sin(a) * r], axis=1)
        m = graph.world_matrix(node.id)
        xy, _, vis = camera.project(local @ m[:3, :3].T + m[:3, 3])
        level = int(255 * max(node.alpha, 0.08))
        colour = (level, level, level)
        for i in range(TRACK_SEGMENTS):
            if vis[i] and vis[i + 1]:
                pygame.draw.line(surface, colour, xy[i], xy[i + 1], 1)

    def _draw_trail(self, surface, graph, camera, node: SceneNode):
        count = int(node.user_data.get("count", 0 if node.points is None else len(node.points)))
        if count == 0:
            return
        pts = self._world_points(graph, node)[:count]
        xy, _, vis = camera.project(pts)
        c = tuple(int(ch * node.alpha) for ch in node.colour)
        size = max(1, int(node.point_size))
        for (x, y), ok in zip(xy, vis):
            if ok:
                surface.fill(c, (int(x), int(y), size, size))

    # ------------------------------------------------------------------
    def _draw_spheres(self, surface, graph, camera, highlight):
        right, up, fwd = camera.basis()
        view_rows = np.stack([right, up, fwd])          # world → view
        sun_pos = np.zeros(3)

        items: List[Tuple[float, SceneNode, np.ndarray, float, np.ndarray]] = []
        for node in graph.of_kind(NodeKind.MESH):
            if not node.visible:
                continue
            m = graph.world_matrix(node.id)
            centre = m[:3, 3]
            scale = float(np.max(np.linalg.norm(m[:3, :3], axis=0)))
            depth = float((centre - camera.position) @ fwd)
            if depth <= camera.near:
                continue
            items.append((depth, node, centre, node.radius * scale, m))
        items.sort(key=lambda it: -it[0])

        for depth, node, centre, radius, m in items:
            rings = [graph.get(c) for c in node.children
                     if graph.get(c).kind is NodeKind.RING and graph.get(c).visible]
            for ring in rings:
                self._draw_ring(surface, graph, camera, ring, depth, far_half=True)

            xy, _, _ = camera.project(centre)
            cx, cy = xy[0]
            r_px = radius * camera.pixels_per_unit(depth)
            if r_px < 1.0:
                if 0 <= cx < surface.get_width() and 0 <= cy < surface.get_height():
                    surface.set_at((int(cx), int(cy)), node.colour)
            else:
                size = int(min(max(2 * r_px, 2), MAX_SPRITE_PX))
                view_to_local = _unit_columns(m).T @ view_rows.T
                light = None
                if not node.emissive:
                    to_sun = sun_pos - centre
                    n = np.linalg.norm(to_sun)
                    light = view_rows @ (to_sun / n) if n > 1e-9 else None
                sprite = sphere_sprite(node.texture, node.colour, size, view_to_local,
                                       light, node.user_data.get("emissive_tint", (0, 0, 0)))
                target_px = min(int(2 * r_px), 3 * max(surface.get_size()))
                if target_px > size:
                    sprite = pygame.transform.smoothscale(sprite, (target_px, target_px))
                surface.blit(sprite, (int(cx - sprite.get_width() / 2),
                                      int(cy - sprite.get_height() / 2)))

            if "glow" in node.user_data:
                self._draw_glow(surface, camera, node, cx, cy, depth)

            for ring in rings:
                self._draw_ring(surface, graph, camera, ring, depth, far_half=False)

            if highlight is not None and node.id == highlight:
                pygame.draw.circle(surface, HIGHLIGHT_COLOUR, (int(cx), int(cy)),
                                   int(max(r_px, 3)) + 4, 1)

    def _draw_ring(self, surface, graph, camera, ring: SceneNode, body_depth, far_half):
        a = np.linspace(0.0, 2.0 * math.pi, RING_SEGMENTS + 1)
        ca, sa = np.cos(a), np.sin(a)
        outer = np.stack([ca * ring.outer, sa * ring.outer, np.zeros_like(a)], axis=1)
        inner = np.stack([ca * ring.inner, sa * ring.inner, np.zeros_like(a)], axis=1)
        m = graph.world_matrix(ring.id)
        rot, t = m[:3, :3], m[:3, 3]
        o_xy, o_d, o_vis = camera.project(outer @ rot.T + t)
        i_xy, i_d, i_vis = camera.project(inner @ rot.T + t)
        colour = tuple(int(c * ring.alpha) for c in ring.colour)
        for k in range(RING_SEGMENTS):
            if not (o_vis[k] and o_vis[k + 1] and i_vis[k] and i_vis[k + 1]):
                continue
            mid = (o_d[k] + o_d[k + 1] + i_d[k] + i_d[k + 1]) / 4.0
            if (mid > body_depth) != far_half:
                continue
            pygame.draw.polygon(surface, colour,
                                [o_xy[k], o_xy[k + 1], i_xy[k + 1], i_xy[k]])

    def _draw_glow(self, surface, camera, node, cx, cy, depth):
        if node.id not in self._glow_cache:
            self._glow_cache[node.id] = _glow_surface(node.user_data["glow"])
        size = int(node.user_data.get("glow_scale", 1.0) * camera.pixels_per_unit(depth))
        if size < 2:
            return
        size = min(size, 4 * MAX_SPRITE_PX)
        glow = pygame.transform.smoothscale(self._glow_cache[node.id], (size, size))
        surface.blit(glow, (int(cx - size / 2), int(cy - size / 2)),
                     special_flags=pygame.BLEND_RGB_ADD)
