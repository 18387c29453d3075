[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "apekit"
version = "0.1.8"
description = "Compile TOML API component definitions into validated component models and import OpenAPI schemas"
requires-python = ">=3.11"
dependencies = [
    "pyyaml",
]
keywords = ["api", "openapi", "toml", "schema", "components", "compiler", "validation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Code Generators",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["apekit"]

[tool.hatch.build.targets.sdist]
include = ["apekit", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
