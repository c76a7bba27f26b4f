from setuptools import find_packages, setup

package_name = "normal_passthrough"

setup(
    name=package_name,
    version="0.1.0",
    packages=find_packages(exclude=["test"]),
    data_files=[
        ("share/ament_index/resource_index/packages", ["resource/" + package_name]),
        ("share/" + package_name, ["package.xml"]),
        (
            "share/" + package_name + "/launch",
            [
                "launch/normal_passthrough.launch.py",
            ],
        ),
        (
            "share/" + package_name + "/config",
            [
                "config/normal_passthrough.yaml",
            ],
        ),
    ],
    install_requires=["setuptools", "numpy", "scipy", "pydantic>=2", "pyyaml"],
    extras_require={"test": ["pytest"]},
    zip_safe=True,
    maintainer="Will Haber",
    maintainer_email="whab13@mit.edu",
    description="Point cloud passthrough that adds radius-search surface normals (ROS 2 Jazzy)",
    license="Apache-2.0",
    tests_require=["pytest"],
    entry_points={
        "console_scripts": [
            "normal_passthrough_node = normal_passthrough.ros.normal_passthrough_node:main",
        ],
    },
)
