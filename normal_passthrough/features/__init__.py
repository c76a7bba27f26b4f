"""Point cloud feature estimation."""

from normal_passthrough.features.normal_estimation import NormalEstimate, NormalEstimator, estimate_normals

__all__ = ["NormalEstimate", "NormalEstimator", "estimate_normals"]
