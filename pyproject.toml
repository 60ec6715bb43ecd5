[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cprims"
version = "0.1.0"
description = "C-style memory, string and bit routines over Python byte buffers, a reduced printf and an ASL-style log client"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "memmove",
    "memcmp",
    "strlcpy",
    "strlcat",
    "ffs",
    "fls",
    "bytes",
    "printf",
    "asl",
    "syslog",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
    "Topic :: System :: Logging",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cprims"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"
