"""Extraction, anonymization, and analytics core for dating-app data exports."""

__version__ = "0.1.0"
