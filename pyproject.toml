[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "proptree"
version = "0.1.0"
description = "Hierarchical property trees that read INI and INFO and write INI and XML"
requires-python = ">=3.10"
dependencies = []
keywords = ["property tree", "configuration", "ini", "info", "xml", "settings"]
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
    "Topic :: Text Processing :: Markup :: XML",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
proptree-settings = "proptree.settings:main"

[tool.hatch.build.targets.wheel]
packages = ["proptree"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
