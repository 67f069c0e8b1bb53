[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "oaskit"
version = "0.1.0"
description = "Building blocks for OpenAPI v3 tooling: JSON value codecs, document positions, ECMA-262 regex conversion, middleware chaining, operation errors and JSON Schema models."
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = [
    "openapi",
    "jsonschema",
    "code-generation",
    "json",
    "yaml",
    "middleware",
    "regex",
]
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
    "Topic :: Software Development :: Code Generators",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["oaskit"]

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
