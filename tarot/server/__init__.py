"""
Server module - HTTP API for the draw engine.
"""

from .api import create_app, session_state

__all__ = ["create_app", "session_state"]
