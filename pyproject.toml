[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "apablink"
version = "0.7.1"
description = "Drive a Pimoroni Blinkt! board or APA102/SK9822 LED strips from a Raspberry Pi."
requires-python = ">=3.10"
dependencies = []
keywords = ["apa102", "sk9822", "blinkt", "raspberry", "pi", "led"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Hardware",
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
apablink-demo = "apablink.demos:main"

[tool.hatch.build.targets.wheel]
packages = ["apablink"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
