[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "emerald2d"
version = "0.1.0"
description = "Window-independent core of a 2D game toolkit: input state, transforms, UI buttons, profiling, logging, tilemaps and autotiling."
requires-python = ">=3.11"
dependencies = []
keywords = ["gamedev", "2d", "tilemap", "autotile", "input", "profiling"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["emerald2d"]

[tool.hatch.build.targets.sdist]
include = ["emerald2d", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
warn_redundant_casts = true
