"""Referent: article extraction and AI-generated derivatives."""

__version__ = "0.1.0"
