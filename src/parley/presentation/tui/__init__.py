"""Textual application for Parley."""

from .app import MODERATOR_MODE, ParleyApp

__all__ = ["MODERATOR_MODE", "ParleyApp"]
