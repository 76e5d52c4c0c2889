[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "aquablynk"
version = "0.1.0"
description = "Water and air quality calculations with a small toolkit for IoT sensor stations"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "iot",
    "water-quality",
    "air-quality",
    "tds",
    "sgp30",
    "dht11",
    "timer",
    "ntp",
    "crc32",
]
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
    "Topic :: Home Automation",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
aquablynk = "aquablynk.monitor:main"

[tool.hatch.build.targets.wheel]
packages = ["aquablynk"]

[tool.pytest.ini_options]
addopts = "-ra"
