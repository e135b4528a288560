"""
FluxoZen CLI Package

Command-line interface for the cash flow engine.
"""

from .main import main

__all__ = ["main"]
