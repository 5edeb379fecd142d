"""HTTP acquisition and parsing core for RSS-reading applications."""

__version__ = "0.1.0"
