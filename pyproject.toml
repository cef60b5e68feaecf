[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "layerscan"
version = "0.1.0"
description = "Layer archive extraction, vulnerability change tracking and supporting utilities"
requires-python = ">=3.10"
dependencies = []
keywords = ["containers", "layers", "tar", "vulnerabilities", "security", "logging"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security",
    "Topic :: System :: Archiving",
    "Topic :: System :: Logging",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["layerscan"]

[tool.pytest.ini_options]
addopts = "-ra"
