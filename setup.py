from setuptools import setup, find_packages

setup(
    name="ransacfit",
    version="1.0.0",
    description="Robust line and plane fitting with RANSAC",
    packages=find_packages(include=["ransacfit", "ransacfit.*"]),
    install_requires=[
        "numpy>=1.24.0",
        "scipy>=1.10.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.9",
)
