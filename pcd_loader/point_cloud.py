from dataclasses import dataclass
from typing import Optional

import numpy as np


@dataclass(frozen=True)
class PointCloud:
    """
    Decoded point cloud. Every array is flat and read-only; an absent
    field group is None, never an empty array.

    - position, normal, color: float32, 3 values per point
    - intensity: float32, 1 value per point
    - label: int32, 1 value per point
    """
    point_count: int
    position: Optional[np.ndarray] = None
    normal: Optional[np.ndarray] = None
    color: Optional[np.ndarray] = None
    intensity: Optional[np.ndarray] = None
    label: Optional[np.ndarray] = None

    def attributes(self):
        """Names of the arrays that are present."""
        names = ("position", "normal", "color", "intensity", "label")
        return [n for n in names if getattr(self, n) is not None]

    def xyz(self) -> Optional[np.ndarray]:
        if self.position is None:
            return None
        return self.position.reshape(-1, 3)


def _finalize(values, dtype) -> Optional[np.ndarray]:
    if values is None:
        return None
    arr = np.array(values, dtype=dtype).reshape(-1)
    if arr.size == 0:
        return None
    arr.setflags(write=False)
    return arr


def assemble(point_count: int, position=None, normal=None, color=None,
             intensity=None, label=None) -> PointCloud:
    return PointCloud(
        point_count=point_count,
        position=_finalize(position, np.float32),
        normal=_finalize(normal, np.float32),
        color=_finalize(color, np.float32),
        intensity=_finalize(intensity, np.float32),
        label=_finalize(label, np.int32),
    )
