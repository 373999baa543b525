[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "octomath"
version = "0.1.0"
description = "Small 3D math toolkit: vectors, quaternions, 4x4 matrices and per-corner tangent space generation"
requires-python = ">=3.10"
dependencies = []
keywords = ["3d", "math", "vector", "quaternion", "matrix", "tangent space", "normal mapping"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["octomath"]

[tool.pytest.ini_options]
addopts = "-ra"
