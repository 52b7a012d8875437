[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stationsettings"
version = "0.1.0"
description = "Tk editor for network station settings stored in ~/.Stations.ini"
requires-python = ">=3.10"
dependencies = []
keywords = ["network", "stations", "settings", "ini", "tkinter", "configuration"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Intended Audience :: System Administrators",
    "Natural Language :: Russian",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
stationsettings = "stationsettings.app:main"

[tool.hatch.build.targets.wheel]
packages = ["stationsettings"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
