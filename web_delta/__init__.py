"""
Web Delta package initializer.
Defines package version; the CLI lives in :mod:`web_delta.cli`.
"""
__version__ = "0.1.0"
