"""
Point cloud containers - NO MATH.

Transport-agnostic stand-ins for the two message types the passthrough
handles:

- PointCloud:       header + (N, 3) xyz positions
- PointNormalCloud: header + positions + (N, 3) normals + (N,) curvature

Both keep the organized layout (width x height) of the source so that an
organized cloud stays organized after normals are added.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

import numpy as np


@dataclass(frozen=True)
class Header:
    """Frame id, acquisition stamp and sequence number of a cloud."""

    frame_id: str = ""
    sec: int = 0
    nanosec: int = 0
    seq: int = 0


def _as_xyz(points, dtype=np.float32) -> np.ndarray:
    arr = np.asarray(points, dtype=dtype)
    if arr.size == 0:
        return arr.reshape(0, 3)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(f"points must have shape (N, 3), got {arr.shape}")
    return arr


def _resolve_layout(n_points: int, width: int, height: int) -> Tuple[int, int]:
    height = int(height)
    width = int(width)
    if width <= 0:
        width = n_points if height <= 1 else n_points // max(height, 1)
        height = 1 if height <= 1 else height
    if width * height != n_points:
        raise ValueError(
            f"cloud layout {width}x{height} does not match {n_points} points"
        )
    return width, height


@dataclass(eq=False)
class PointCloud:
    """Input cloud: ordered xyz positions plus header."""

    points: np.ndarray
    header: Header = field(default_factory=Header)
    width: int = 0
    height: int = 1

    def __post_init__(self) -> None:
        self.points = _as_xyz(self.points)
        self.width, self.height = _resolve_layout(len(self.points), self.width, self.height)

    def __len__(self) -> int:
        return int(self.points.shape[0])


@dataclass(eq=False)
class PointNormalCloud:
    """
    Output cloud: positions, normals and curvature sharing one header.

    An empty instance is a writable target; copy_point_cloud() and the
    estimator fill it in place.
    """

    header: Header = field(default_factory=Header)
    points: np.ndarray = field(default_factory=lambda: np.empty((0, 3), dtype=np.float32))
    normals: np.ndarray = field(default_factory=lambda: np.empty((0, 3), dtype=np.float32))
    curvature: np.ndarray = field(default_factory=lambda: np.empty((0,), dtype=np.float32))
    width: int = 0
    height: int = 1

    def __post_init__(self) -> None:
        self.points = _as_xyz(self.points)
        self.normals = _as_xyz(self.normals)
        self.curvature = np.asarray(self.curvature, dtype=np.float32).reshape(-1)
        n = len(self.points)
        if self.normals.shape[0] != n or self.curvature.shape[0] != n:
            raise ValueError(
                f"points/normals/curvature length mismatch: "
                f"{n}/{self.normals.shape[0]}/{self.curvature.shape[0]}"
            )
        self.width, self.height = _resolve_layout(n, self.width, self.height)

    def __len__(self) -> int:
        return int(self.points.shape[0])

    @property
    def is_dense(self) -> bool:
        """True when no position, normal or curvature value is invalid."""
        return bool(
            np.isfinite(self.points).all()
            and np.isfinite(self.normals).all()
            and np.isfinite(self.curvature).all()
        )

    def has_valid_normals(self) -> np.ndarray:
        """Boolean mask of points whose normal could be estimated."""
        return np.isfinite(self.normals).all(axis=1)


def copy_point_cloud(src: PointCloud, dst: PointNormalCloud) -> None:
    """
    Copy header, layout and positions of src into dst.

    Normal and curvature slots are reset to zero; only xyz is shared between
    the two point types.
    """
    n = len(src)
    dst.header = src.header
    dst.points = src.points.copy()
    dst.normals = np.zeros((n, 3), dtype=np.float32)
    dst.curvature = np.zeros((n,), dtype=np.float32)
    dst.width = src.width
    dst.height = src.height
