"""
Top‑level package for the Job Board API.

This file makes ``job_board_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``job_board_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
