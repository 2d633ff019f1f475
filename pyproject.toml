[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "serialhelper"
version = "0.1.0"
description = "Serial port assistant: port settings, text/hex send and receive, GBK/UTF-8 conversion"
requires-python = ">=3.10"
keywords = ["serial", "uart", "rs232", "hex", "gbk", "terminal"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Terminals :: Serial",
]
dependencies = [
    "pyserial",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
serialhelper = "serialhelper.engine:main"

[tool.hatch.build.targets.wheel]
packages = ["serialhelper"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
