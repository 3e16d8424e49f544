"""Logging setup shared by endgame runs and tests."""

from .logging import setup_logging

__all__ = ['setup_logging']
