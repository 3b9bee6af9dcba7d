[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "softraster"
version = "0.1.0"
description = "A small software rasterizer that renders Wavefront OBJ models to TGA images"
requires-python = ">=3.10"
dependencies = []
keywords = ["rasterizer", "software-rendering", "tga", "obj", "z-buffer", "graphics"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
softraster = "softraster.render:main"

[tool.setuptools.packages.find]
include = ["softraster*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
