[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "uuidforge"
version = "1.16.0"
description = "Generate and parse UUIDs of every RFC 9562 version, with timestamp contexts and strict parsing."
requires-python = ">=3.10"
dependencies = []
keywords = ["uuid", "guid", "unique", "identifier", "rfc9562"]
classifiers = [
    "Development Status :: 5 - Production/Stable",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["uuidforge"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
