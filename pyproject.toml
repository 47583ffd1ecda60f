[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "imrest"
version = "0.1.0"
description = "Client for an instant messaging REST administration API: accounts, groups and group members"
requires-python = ">=3.10"
dependencies = []
keywords = ["instant messaging", "im", "rest", "chat", "groups", "accounts"]
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
    "Topic :: Communications :: Chat",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["imrest"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
