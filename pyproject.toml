[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dec128"
version = "0.1.0"
description = "A 128-bit decimal value (96-bit mantissa, scale, sign) with bit-level helpers and a 192-bit working form for rounding and normalisation"
requires-python = ">=3.10"
keywords = ["decimal", "fixed-point", "96-bit", "rounding", "bit manipulation"]
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
    "Topic :: Scientific/Engineering :: Mathematics",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dec128"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
