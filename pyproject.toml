[build-system]
requires = ["hatchling>=1.18"]
build-backend = "hatchling.build"

[project]
name = "waitfor"
version = "0.1.0"
description = "Wait for TCP, UDP, HTTP(S), MySQL and PostgreSQL endpoints to become available."
requires-python = ">=3.10"
keywords = [
    "wait",
    "wait-for",
    "healthcheck",
    "readiness",
    "tcp",
    "udp",
    "http",
    "mysql",
    "postgres",
    "containers",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking :: Monitoring",
    "Topic :: Utilities",
]
dependencies = [
    "pymysql>=1.0",
    "pyyaml>=6.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "cryptography>=41.0",
]

[project.scripts]
wait-for = "waitfor.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["waitfor"]

[tool.hatch.build.targets.sdist]
include = [
    "waitfor",
    "tests",
    "README.md",
    "pyproject.toml",
]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
ignore_missing_imports = true
