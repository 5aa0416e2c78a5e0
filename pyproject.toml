[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jp2codec"
version = "0.1.0"
description = "JPEG 2000 building blocks: bit I/O, MQ coder, wavelets, colour transforms, packet order and JP2/J2K header parsing"
requires-python = ">=3.10"
dependencies = []
keywords = ["jpeg2000", "jp2", "j2k", "image", "codec", "wavelet", "mq-coder"]
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
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["jp2codec"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
