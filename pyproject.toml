[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "deployadactyl"
version = "0.1.0"
description = "Event handling and manifest tooling for blue-green deployments to Cloud Foundry foundations"
requires-python = ">=3.10"
keywords = ["cloud foundry", "deployment", "blue-green", "manifest", "events"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
]
dependencies = [
    "pyyaml",
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["deployadactyl"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
