"""Pytest bootstrap configuration.

Ensure environment defaults are set before test collection and module
imports that depend on application settings.
"""
import os

os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")
