[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "statetemplate"
version = "0.1.0"
description = "Find the data fields a template depends on and split templates into small named fragments"
requires-python = ">=3.10"
dependencies = []
keywords = ["template", "fragments", "dependencies", "html", "live-update"]
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
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
    "Topic :: Text Processing :: Markup :: HTML",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["statetemplate"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
