"""
Interaction package: pointer picking and the cinematic tour.

Main exports:
    pick, pointer_to_ndc, ray_sphere   ray casting against body spheres
    TourController, TourState, TourTarget, reset_camera  camera tour
"""
from .picker import pick, pointer_to_ndc, ray_sphere
from .tour import (TourController, TourState, TourTarget, TourMode,
                   camera_offset, reset_camera)

__all__ = [
    "pick",
    "pointer_to_ndc",
    "ray_sphere",
    "TourController",
    "TourState",
    "TourTarget",
    "TourMode",
    "camera_offset",
    "reset_camera",
]
