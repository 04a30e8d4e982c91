"""
Scripts package for ServiceNow Flag.

This package contains command-line scripts organized by functionality.

Subpackages:
- flag: The daemon that mirrors the ServiceNow task queue on Luxafor flags
"""

__version__ = "0.1.0"
