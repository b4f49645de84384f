[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "spectrum"
version = "0.1.0"
description = "Tools for inspecting, merging, exporting and reporting on OpenAPI 3 and Swagger 2.0 specifications."
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = [
    "openapi",
    "openapi3",
    "swagger",
    "swagger2",
    "api",
    "specification",
    "merge",
]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["spectrum"]

[tool.hatch.build.targets.sdist]
include = [
    "spectrum",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
