"""
Top-level package for the Taskboard API.

All functionality lives in submodules under ``app``.
"""

__all__ = []
