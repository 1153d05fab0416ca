"""Setup script for Blocks: Stacking Game."""
from setuptools import setup, find_packages

setup(
    name="blocks-stacking-game",
    version="1.0.0",
    description="Blocks: a falling-block stacking puzzle game",
    author="Blocks Team",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.24.0",
        "pyyaml>=6.0",
        "tqdm>=4.65.0",
        "matplotlib>=3.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.0.0",
        ],
    },
)
