[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "simpchat"
version = "0.1.0"
description = "Client-side wire format, message formatting and session handling for SIMP3 chat servers"
requires-python = ">=3.10"
dependencies = []
keywords = ["chat", "simp3", "protocol", "client", "messaging"]
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
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["simpchat"]

[tool.pytest.ini_options]
addopts = "-ra"
