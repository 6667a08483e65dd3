[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gophkeeper"
version = "0.1.0"
description = "Building blocks for a personal secrets keeper: user accounts with bcrypt passwords, server and client configuration, and an offline secrets cache."
requires-python = ">=3.10"
keywords = ["secrets", "vault", "password-manager", "bcrypt", "configuration"]
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
    "Topic :: Security",
    "Typing :: Typed",
]
dependencies = [
    "bcrypt>=4.0",
    "pyyaml>=6.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[tool.hatch.build.targets.wheel]
packages = ["gophkeeper"]

[tool.hatch.build.targets.sdist]
include = [
    "gophkeeper",
    "tests",
    "pyproject.toml",
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
