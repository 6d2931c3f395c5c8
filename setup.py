"""
Setup script for tiny-hll.
"""

from setuptools import setup, find_packages

setup(
    name="tiny-hll",
    version="0.1.0",
    description="HyperLogLog distinct counting for data streams",
    packages=find_packages(exclude=["tests", "tests.*", "examples"]),
    package_data={"tiny_hll": ["py.typed"]},
    python_requires=">=3.8",
    extras_require={"test": ["pytest"]},
)
