"""
Setup script for OsciTrace package.
"""

from setuptools import setup, find_packages
import os

# Read README file
def read_readme():
    readme_path = os.path.join(os.path.dirname(__file__), 'README.md')
    if os.path.exists(readme_path):
        with open(readme_path, 'r', encoding='utf-8') as f:
            return f.read()
    return ""

# Read requirements
def read_requirements():
    req_path = os.path.join(os.path.dirname(__file__), 'requirements.txt')
    if os.path.exists(req_path):
        with open(req_path, 'r') as f:
            return [line.strip() for line in f if line.strip() and not line.startswith('#')]
    return []

setup(
    name="oscitrace",
    version="0.1.0",
    author="OsciTrace Contributors",
    description="One-dimensional harmonic oscillator with coupled Euler integration",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Intended Audience :: Education",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering :: Physics",
    ],
    python_requires=">=3.8",
    install_requires=read_requirements(),
    extras_require={
        "jax": ["jax"],
        "vtk": ["vtk"],
        "hdf5": ["h5py"],
        "dev": ["pytest"],
        "all": ["jax", "vtk", "h5py", "pytest"],
    },
    entry_points={
        "console_scripts": [
            "oscitrace=oscitrace.__main__:main",
        ],
    },
    keywords="harmonic oscillator, euler integration, spring, physics",
)
