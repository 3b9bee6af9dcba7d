"""Software rasterizer: OBJ models, vector maths, line and triangle drawing, TGA images."""

__version__ = "0.1.0"