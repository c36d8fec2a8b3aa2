# followyourflush/camera/surface.py
"""
The rendering surface is an external capability: it receives camera moves
and line geometry and draws them. RecordingSurface keeps the latest state so
a polling front end (or a test) can read it back.
"""
from typing import Dict, List, Optional, Sequence, Tuple

from ..path_planner.data_models import Coordinate
from .data_models import CameraPose, EaseTransition

Bounds = Tuple[Tuple[float, float], Tuple[float, float]]


class RenderingSurface:
    """Interface every rendering backend implements."""

    def set_camera(self, pose: CameraPose):
        raise NotImplementedError

    def ease_to(self, transition: EaseTransition):
        raise NotImplementedError

    def fit_bounds(self, bounds: Bounds, padding: int, duration_ms: int):
        raise NotImplementedError

    def set_paths(self, layer: str, lines: Sequence[Sequence[Coordinate]]):
        """Replaces every line drawn on `layer`."""
        raise NotImplementedError

    def set_path(self, layer: str, coordinates: Sequence[Coordinate]):
        self.set_paths(layer, [coordinates])


class RecordingSurface(RenderingSurface):
    """Keeps the most recent camera state and layer geometry in memory."""

    def __init__(self):
        self.camera: Optional[CameraPose] = None
        self.last_transition: Optional[EaseTransition] = None
        self.bounds: Optional[Bounds] = None
        self.layers: Dict[str, List[List[List[float]]]] = {}
        self.frame_count = 0

    def set_camera(self, pose: CameraPose):
        self.camera = pose
        self.frame_count += 1

    def ease_to(self, transition: EaseTransition):
        self.last_transition = transition

    def fit_bounds(self, bounds: Bounds, padding: int, duration_ms: int):
        self.bounds = bounds

    def set_paths(self, layer: str, lines: Sequence[Sequence[Coordinate]]):
        self.layers[layer] = [[list(c) for c in line] for line in lines]

    def layer_geojson(self, layer: str) -> Dict:
        features = [
            {"type": "Feature", "geometry": {"type": "LineString", "coordinates": line}, "properties": {"layer": layer}}
            for line in self.layers.get(layer, [])
        ]
        return {"type": "FeatureCollection", "features": features}

    def snapshot(self) -> Dict:
        pose = self.camera
        ease = self.last_transition
        return {
            'frame_count': self.frame_count,
            'camera': None if pose is None else {
                'position': list(pose.position), 'altitude_m': pose.altitude_m,
                'look_at': list(pose.look_at), 'index': pose.index
            },
            'last_transition': None if ease is None else {
                'center': list(ease.center), 'zoom': ease.zoom, 'pitch': ease.pitch,
                'bearing': ease.bearing, 'duration_ms': ease.duration_ms
            },
            'bounds': self.bounds
        }
