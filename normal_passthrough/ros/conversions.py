"""
PointCloud2 <-> cloud container conversion - NO MATH.

Input:  any PointCloud2 carrying x, y, z (FLOAT32 or FLOAT64). Other fields
        are ignored. Non-finite points are kept so the output lines up 1:1.
Output: PointCloud2 with FLOAT32 x y z normal_x normal_y normal_z curvature.
"""

from __future__ import annotations

import sys

import numpy as np
from sensor_msgs.msg import PointCloud2, PointField
from std_msgs.msg import Header as HeaderMsg

from normal_passthrough.common.cloud import Header, PointCloud, PointNormalCloud
from normal_passthrough.common.constants import NORMAL_CLOUD_FIELDS

_DTYPE_MAP = {
    PointField.FLOAT32: np.float32,
    PointField.FLOAT64: np.float64,
}


def header_from_msg(msg: HeaderMsg, seq: int = 0) -> Header:
    return Header(
        frame_id=str(msg.frame_id),
        sec=int(msg.stamp.sec),
        nanosec=int(msg.stamp.nanosec),
        seq=int(seq),
    )


def header_to_msg(header: Header) -> HeaderMsg:
    msg = HeaderMsg()
    msg.frame_id = header.frame_id
    msg.stamp.sec = int(header.sec)
    msg.stamp.nanosec = int(header.nanosec)
    return msg


def pointcloud2_to_cloud(msg: PointCloud2, seq: int = 0) -> PointCloud:
    """
    Convert PointCloud2 message to a PointCloud of XYZ points.

    ROS 2 headers carry no sequence number; the caller may supply one.
    """
    fields = {f.name: f for f in msg.fields}
    if "x" not in fields or "y" not in fields or "z" not in fields:
        raise ValueError("PointCloud2 message missing x, y, or z fields")

    n_points = int(msg.width) * int(msg.height)
    header = header_from_msg(msg.header, seq=seq)
    if n_points == 0:
        return PointCloud(np.empty((0, 3), dtype=np.float32), header=header)

    byte_order = ">" if msg.is_bigendian else "<"
    point_step = int(msg.point_step)
    row_step = int(msg.row_step) or point_step * int(msg.width)
    raw = np.frombuffer(bytes(msg.data), dtype=np.uint8)
    # Drop row padding, then one row of bytes per point
    rows = raw[: row_step * int(msg.height)].reshape(int(msg.height), row_step)
    data = np.ascontiguousarray(rows[:, : point_step * int(msg.width)]).reshape(n_points, point_step)

    columns = []
    for name in ("x", "y", "z"):
        f = fields[name]
        base = _DTYPE_MAP.get(f.datatype)
        if base is None:
            raise ValueError(f"PointCloud2 field '{name}' has unsupported datatype {f.datatype}")
        dtype = np.dtype(base).newbyteorder(byte_order)
        width = dtype.itemsize
        col = np.ascontiguousarray(data[:, f.offset:f.offset + width]).view(dtype).reshape(-1)
        columns.append(col.astype(np.float32))

    points = np.stack(columns, axis=1)
    return PointCloud(points, header=header, width=int(msg.width), height=int(msg.height))


def cloud_to_pointcloud2(cloud: PointNormalCloud) -> PointCloud2:
    """Pack positions, normals and curvature into a PointCloud2."""
    n = len(cloud)
    packed = np.empty((n, len(NORMAL_CLOUD_FIELDS)), dtype=np.float32)
    packed[:, 0:3] = cloud.points
    packed[:, 3:6] = cloud.normals
    packed[:, 6] = cloud.curvature

    msg = PointCloud2()
    msg.header = header_to_msg(cloud.header)
    msg.height = int(cloud.height)
    msg.width = int(cloud.width)
    msg.fields = [
        PointField(name=name, offset=4 * i, datatype=PointField.FLOAT32, count=1)
        for i, name in enumerate(NORMAL_CLOUD_FIELDS)
    ]
    msg.is_bigendian = sys.byteorder == "big"
    msg.point_step = 4 * len(NORMAL_CLOUD_FIELDS)
    msg.row_step = msg.point_step * msg.width
    msg.is_dense = cloud.is_dense
    msg.data = packed.tobytes()
    return msg
