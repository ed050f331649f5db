[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vslc"
version = "1.0.0"
description = "Front-end pieces of a compiler for VSL: syntax trees, tree simplification, symbol tables and a line-validating DFA"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "vsl", "syntax-tree", "symbol-table", "constant-folding", "dfa", "graphviz"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
vslc-dfa = "vslc.dfa:main"

[tool.hatch.build.targets.wheel]
packages = ["vslc"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
