[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "particlefall"
version = "0.1.0"
description = "A falling-particle demo with depth-sorted emission, a software camera and rasteriser, and a pygame display"
requires-python = ">=3.10"
keywords = ["particles", "particle-system", "graphics", "pygame", "targa", "demo", "rasteriser"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Games/Entertainment",
]
dependencies = [
    "numpy",
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
particlefall = "particlefall.application:main"

[tool.hatch.build.targets.wheel]
packages = ["particlefall"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
