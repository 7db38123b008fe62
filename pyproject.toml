[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jpegenc"
version = "0.1.0"
description = "Building blocks of a baseline JPEG encoder: 24-bit bitmap I/O, YCbCr planes, forward DCT and quantization"
requires-python = ">=3.10"
dependencies = []
keywords = ["jpeg", "bitmap", "bmp", "dct", "quantization", "ycbcr", "image"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
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
packages = ["jpegenc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
