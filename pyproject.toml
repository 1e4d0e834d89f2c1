[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rdpcore"
version = "0.1.0"
description = "Bit-exact model of RDP rasterizer building blocks: RDRAM, coverage, dithering, framebuffer access, edge walking and fill spans"
requires-python = ">=3.10"
dependencies = []
keywords = ["rdp", "rasterizer", "emulation", "framebuffer", "coverage", "dither"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: System :: Emulators",
    "Topic :: Multimedia :: Graphics",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["rdpcore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
