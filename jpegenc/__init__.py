"""Bitmap I/O, YCbCr planes, forward DCT and quantization for baseline JPEG."""

__version__ = "0.1.0"

__all__ = ["__version__"]