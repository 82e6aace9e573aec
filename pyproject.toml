[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dronesense"
version = "0.1.0"
description = "Air-quality sensing for survey drones: gas sensor maths, particulate frames, NMEA GPRMC forwarding and telemetry packets"
requires-python = ">=3.10"
dependencies = [
    "pyserial",
]
keywords = [
    "air quality",
    "drone",
    "gas sensor",
    "PMS7003",
    "K30",
    "NMEA",
    "GPRMC",
    "telemetry",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Atmospheric Science",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
dronesense-gprmc = "dronesense.nmea:main"

[tool.hatch.build.targets.wheel]
packages = ["dronesense"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
