[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "audiolink"
version = "0.1.0"
description = "Relay mono float32 audio buffers over TCP with a small length-prefixed packet protocol"
requires-python = ">=3.10"
dependencies = []
keywords = ["audio", "streaming", "tcp", "float32", "packets", "relay"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
audiolink-server = "audiolink.server:main"

[tool.hatch.build.targets.wheel]
packages = ["audiolink"]

[tool.pytest.ini_options]
addopts = "-ra"
