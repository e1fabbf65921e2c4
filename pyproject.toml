[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "componentbase"
version = "0.1.0"
description = "Shared building blocks for server components: flag values, feature gates, config types, validation and a config endpoint."
requires-python = ">=3.10"
dependencies = []
keywords = ["feature-gates", "flags", "configuration", "validation", "tls", "leader-election"]
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
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["componentbase"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
