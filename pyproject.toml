[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "peerswap"
version = "0.1.0"
description = "Building blocks for peer-to-peer Lightning channel balancing swaps"
requires-python = ">=3.10"
dependencies = []
keywords = ["lightning", "bitcoin", "liquid", "swap", "peerswap", "bolt11"]
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
    "Topic :: Internet",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["peerswap"]

[tool.hatch.build.targets.sdist]
include = ["peerswap", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
