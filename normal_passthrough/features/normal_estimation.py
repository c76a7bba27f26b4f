"""
Radius-search surface normal estimation.

Per point:
  1. gather every finite neighbour within search_radius (k-d tree, inclusive)
  2. eigen-decompose the normalized neighbourhood covariance
  3. normal = eigenvector of the smallest eigenvalue
     curvature = lambda_min / (lambda_0 + lambda_1 + lambda_2)
  4. flip the normal so it faces the viewpoint

Points that are not finite, or whose neighbourhood has fewer than
MIN_NEIGHBORS_FOR_NORMAL points, get NaN normal and NaN curvature. They stay in
the output so the cloud keeps its length and layout.

Spatial index: scipy.spatial.cKDTree. Eigen solve: numpy.linalg.eigh, batched.
"""

from __future__ import annotations

import logging
from typing import NamedTuple, Sequence

import numpy as np
from scipy.spatial import cKDTree

from normal_passthrough.common.cloud import PointCloud, PointNormalCloud, copy_point_cloud
from normal_passthrough.common.constants import DEFAULT_VIEWPOINT, MIN_NEIGHBORS_FOR_NORMAL

_logger = logging.getLogger(__name__)


class NormalEstimate(NamedTuple):
    """Per-point normals (N, 3) and curvature (N,)."""

    normals: np.ndarray
    curvature: np.ndarray


def _validate_radius(search_radius: float) -> float:
    radius = float(search_radius)
    if not np.isfinite(radius) or radius <= 0.0:
        raise ValueError(f"search_radius must be positive and finite, got {search_radius}")
    return radius


def _neighbourhood_covariances(
    points: np.ndarray, neighbours: Sequence[Sequence[int]]
) -> np.ndarray:
    """Normalized 3x3 covariance for each neighbourhood."""
    covs = np.empty((len(neighbours), 3, 3), dtype=np.float64)
    for i, idx in enumerate(neighbours):
        nbrs = points[np.asarray(idx, dtype=np.int64)]
        centered = nbrs - nbrs.mean(axis=0)
        covs[i] = centered.T @ centered / float(len(idx))
    return covs


def estimate_normals(
    points: np.ndarray,
    search_radius: float,
    viewpoint: Sequence[float] = DEFAULT_VIEWPOINT,
) -> NormalEstimate:
    """
    Estimate a normal and curvature for every point.

    Args:
        points: (N, 3) positions; non-finite rows are allowed
        search_radius: neighbourhood radius (same units as points), > 0
        viewpoint: (3,) position normals are oriented towards

    Returns:
        NormalEstimate with float32 arrays of length N

    Raises:
        ValueError: bad radius or points shape
    """
    radius = _validate_radius(search_radius)
    pts = np.asarray(points, dtype=np.float64)
    if pts.size == 0:
        pts = pts.reshape(0, 3)
    if pts.ndim != 2 or pts.shape[1] != 3:
        raise ValueError(f"points must have shape (N, 3), got {pts.shape}")
    vp = np.asarray(viewpoint, dtype=np.float64).reshape(3)

    n = pts.shape[0]
    normals = np.full((n, 3), np.nan, dtype=np.float64)
    curvature = np.full((n,), np.nan, dtype=np.float64)

    finite_idx = np.flatnonzero(np.isfinite(pts).all(axis=1))
    if finite_idx.size == 0:
        return NormalEstimate(normals.astype(np.float32), curvature.astype(np.float32))

    finite_pts = pts[finite_idx]
    tree = cKDTree(finite_pts)
    neighbours = tree.query_ball_point(finite_pts, r=radius)

    counts = np.fromiter((len(nb) for nb in neighbours), dtype=np.int64, count=len(neighbours))
    enough = counts >= MIN_NEIGHBORS_FOR_NORMAL
    if not enough.all():
        _logger.debug(
            f"{int((~enough).sum())}/{len(enough)} points have fewer than "
            f"{MIN_NEIGHBORS_FOR_NORMAL} neighbours within r={radius}"
        )
    if not enough.any():
        return NormalEstimate(normals.astype(np.float32), curvature.astype(np.float32))

    solved = np.flatnonzero(enough)
    covs = _neighbourhood_covariances(finite_pts, [neighbours[i] for i in solved])

    # eigh returns ascending eigenvalues; column 0 is the smallest
    eigvals, eigvecs = np.linalg.eigh(covs)
    n_hat = eigvecs[:, :, 0]
    eigvals = np.clip(eigvals, 0.0, None)
    total = eigvals.sum(axis=1)
    curv = np.divide(eigvals[:, 0], total, out=np.zeros_like(total), where=total > 0.0)

    # Orient towards the viewpoint
    to_vp = vp[None, :] - finite_pts[solved]
    flip = np.einsum("ij,ij->i", to_vp, n_hat) < 0.0
    n_hat[flip] *= -1.0

    out_rows = finite_idx[solved]
    normals[out_rows] = n_hat
    curvature[out_rows] = curv
    return NormalEstimate(normals.astype(np.float32), curvature.astype(np.float32))


class NormalEstimator:
    """
    Fixed-radius estimator producing PointNormalCloud outputs.

    Holds no state between calls beyond its configuration.
    """

    def __init__(self, search_radius: float, viewpoint: Sequence[float] = DEFAULT_VIEWPOINT) -> None:
        self.search_radius = _validate_radius(search_radius)
        self.viewpoint = tuple(float(v) for v in viewpoint)

    def compute_into(self, cloud: PointCloud, output: PointNormalCloud) -> None:
        """Fill output in place: header, layout, positions, normals, curvature."""
        copy_point_cloud(cloud, output)
        est = estimate_normals(cloud.points, self.search_radius, self.viewpoint)
        output.normals = est.normals
        output.curvature = est.curvature

    def compute(self, cloud: PointCloud) -> PointNormalCloud:
        output = PointNormalCloud()
        self.compute_into(cloud, output)
        return output
