"""
Setup script for numvec

Pure-Python package laid out under src/. This script:
1. Reads the version from src/numvec/__init__.py
2. Uses README.md (when present) as the long description
3. Declares numpy/scipy runtime dependencies and the pytest test extra
"""

from pathlib import Path
from setuptools import setup, find_packages


# Read version from src/numvec/__init__.py
def get_version():
    version_file = Path("src/numvec/__init__.py")
    if version_file.exists():
        for line in version_file.read_text().splitlines():
            if line.startswith("__version__"):
                return line.split("=")[1].strip().strip('"').strip("'")
    return "0.1.0"


# Read long description from README
def get_long_description():
    readme = Path("README.md")
    if readme.exists():
        return readme.read_text(encoding="utf-8")
    return ""


setup(
    name="numvec",
    version=get_version(),
    description="Numeric vectors over interchangeable dense, sparse and constant storage",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.21",
        "scipy>=1.7",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    zip_safe=False,
)
