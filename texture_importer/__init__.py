"""Import image files into Unity Texture2D assets."""

__version__ = "0.1.0"
