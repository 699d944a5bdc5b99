"""
DeadLinkFinder package initializer.
Defines package version and exposes the scan engine.
"""
__version__ = "0.1.0"

from deadlink_finder.engine import ScanEngine

__all__ = ["__version__", "ScanEngine"]
