[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "noisegraph"
version = "0.1.0"
description = "Noise generator node graphs: fractal and domain-warp fractal nodes, node metadata, texture preview state, settings and BMP export."
requires-python = ">=3.10"
dependencies = []
keywords = ["noise", "procedural", "fractal", "fbm", "domain-warp", "node-graph", "bmp"]
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
    "Topic :: Multimedia :: Graphics",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["noisegraph*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
