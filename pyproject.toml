[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "datahandler"
version = "0.1.0"
description = "Keep experimental measurements as variables with errors, calculate new ones from formulas, prepare plot data, and store them as CSV, JSON, SQLite or report documents."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "measurements",
    "experiments",
    "data analysis",
    "formula",
    "histogram",
    "csv",
    "json",
    "sqlite",
    "opendocument",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Information Analysis",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
datahandler = "datahandler.app:main"

[tool.hatch.build.targets.wheel]
packages = ["datahandler"]

[tool.pytest.ini_options]
addopts = "-ra"
