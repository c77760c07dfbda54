[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tisemu"
version = "1.0"
description = "An emulator for a small TIS-100 style single-node assembly language"
requires-python = ">=3.10"
dependencies = []
keywords = ["tis-100", "emulator", "assembly", "interpreter"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
    "Topic :: Software Development :: Interpreters",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tisemu = "tisemu.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["tisemu"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
