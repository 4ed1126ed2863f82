[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mousebox"
version = "0.0.1"
description = "Small game-engine building blocks and a tool for packing and unpacking CHSE archives"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "engine", "archive", "chse", "entity", "collision", "lzma"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Topic :: System :: Archiving :: Packaging",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
mousebox-arc = "mousebox.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["mousebox"]

[tool.pytest.ini_options]
addopts = "-ra"
