"""
Rendering package: camera model and the software scene renderer.
"""
from .camera import PerspectiveCamera, OrbitControls
from .scene_renderer import SceneRenderer, sphere_sprite

__all__ = [
    "PerspectiveCamera",
    "OrbitControls",
    "SceneRenderer",
    "sphere_sprite",
]
