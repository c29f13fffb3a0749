"""Textual front-end for interactive sessions."""

from .app import LightControllerApp

__all__ = ["LightControllerApp"]
