"""
Top‑level package for the Kennel Dog Roster API.

This file makes ``kennel_api`` a Python package so that modules within
``app`` can be imported using fully qualified names like
``kennel_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
