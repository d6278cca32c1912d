"""Logging utilities. Configuration lives in utils.config."""
from .logger import setup_logging, GestureLogger

__all__ = ["setup_logging", "GestureLogger"]
