[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mp4atom"
version = "0.8.1"
description = "Decoder and encoder for MP4/ISOBMFF movie atoms"
requires-python = ">=3.10"
dependencies = []
keywords = ["mp4", "isobmff", "mp4box", "audio", "video"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Video :: Conversion",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mp4atom"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
