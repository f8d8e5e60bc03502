[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "blockldl"
version = "0.1.0"
description = "Sparsity patterns, permutations and block-structured matrix operations for sparse LDL^T solvers"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "sparse",
    "ldl",
    "linear-algebra",
    "block-tridiagonal",
    "arrowhead",
    "substitution",
    "permutation",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
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

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["blockldl"]

[tool.hatch.build.targets.sdist]
include = ["blockldl", "tests"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
