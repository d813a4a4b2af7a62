[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pcskit"
version = "0.1.0"
description = "Building blocks for a cloud-drive command-line client: argument parsing, tables, configuration, rapid-upload links and update handling"
requires-python = ">=3.10"
dependencies = [
    "wcwidth",
]
keywords = [
    "cloud-drive",
    "netdisk",
    "cli",
    "rapid-upload",
    "configuration",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: File Transfer Protocol (FTP)",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["pcskit"]

[tool.hatch.build.targets.sdist]
include = ["pcskit", "tests"]

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
