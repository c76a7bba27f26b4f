"""
Normal passthrough launch file.

    <namespace>/point_cloud → normal_passthrough_node → <namespace>/point_cloud_with_normals

Remap point_cloud to the sensor topic to wire it into a pipeline, e.g.
    ros2 launch normal_passthrough normal_passthrough.launch.py \
        input_topic:=/velodyne_points
"""

import os

from launch import LaunchDescription
from launch.actions import DeclareLaunchArgument
from launch.substitutions import LaunchConfiguration
from launch_ros.actions import Node

from ament_index_python.packages import get_package_share_directory


def generate_launch_description():
    """Generate launch description for the normal passthrough."""
    default_config = os.path.join(
        get_package_share_directory("normal_passthrough"), "config", "normal_passthrough.yaml"
    )

    config_path_arg = DeclareLaunchArgument(
        "config_path",
        default_value=default_config,
        description="ROS 2 parameter YAML providing normals.search_radius.",
    )
    namespace_arg = DeclareLaunchArgument(
        "namespace",
        default_value="",
        description="Namespace for the node and its point_cloud topics.",
    )
    input_topic_arg = DeclareLaunchArgument(
        "input_topic",
        default_value="point_cloud",
        description="Topic remapped onto the node's point_cloud input.",
    )
    output_topic_arg = DeclareLaunchArgument(
        "output_topic",
        default_value="point_cloud_with_normals",
        description="Topic remapped onto the node's point_cloud_with_normals output.",
    )

    node = Node(
        package="normal_passthrough",
        executable="normal_passthrough_node",
        name="normal_passthrough",
        namespace=LaunchConfiguration("namespace"),
        output="screen",
        parameters=[LaunchConfiguration("config_path")],
        remappings=[
            ("point_cloud", LaunchConfiguration("input_topic")),
            ("point_cloud_with_normals", LaunchConfiguration("output_topic")),
        ],
    )

    return LaunchDescription([
        config_path_arg,
        namespace_arg,
        input_topic_arg,
        output_topic_arg,
        node,
    ])
