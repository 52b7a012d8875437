"""Tk editor and file tools for network station settings kept in .Stations.ini."""

__version__ = "0.1.0"
__all__ = ["__version__"]