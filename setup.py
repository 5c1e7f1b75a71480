# setup.py
# Packaging configuration for the spatial rule lookup builder.
#
# Install (editable):   pip install -e .
# Source distribution:  python setup.py sdist bdist_wheel

from pathlib import Path
from setuptools import setup, find_packages

ROOT = Path(__file__).parent
README = (ROOT / "README.md")
if README.exists():
    long_description = README.read_text(encoding="utf-8")
else:
    long_description = "Spatial rules: map lat/lon points to jurisdiction rules built from GeoJSON borders."

setup(
    name="spatialrules",
    version="0.1.0",
    description="Spatial rules: build R-tree backed point-to-rule lookups from GeoJSON country borders",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    packages=find_packages(exclude=("examples", "docs", "tests", "tools")),
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.23",
        # libspatialindex-backed R-tree used by SpatialRuleLookup
        "rtree>=1.1.0",
    ],
    extras_require={
        "tools": ["pandas>=1.5", "tqdm>=4.64"],
        "test": ["pytest>=7.0"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: GIS",
        "Operating System :: OS Independent",
    ],
)
