#!/usr/bin/env python3
"""
Setup script for softdeform (soft-selection mesh deformation).

Pure-Python package; numerics run on torch tensors.
"""

from pathlib import Path
from setuptools import setup, find_packages

project_root = Path(__file__).parent

setup(
    name="softdeform",
    version="1.0.0",
    author="Changyong Song",
    description="Proximity-weighted soft-selection mesh deformation",
    long_description=(project_root / "README.md").read_text(encoding="utf-8") if (project_root / "README.md").exists() else "",
    packages=find_packages(include=["softdeform", "softdeform.*"]),
    zip_safe=False,
    python_requires=">=3.8",
    install_requires=["numpy", "torch", "pyyaml"],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["softdeform = softdeform.cli:main"]},
)
