"""Mini README: Interactive interfaces for Pocket Ledger.

Exports the FastAPI application factory serving the JSON API. The command
line entry point lives in ``main_ledger.py`` at the repository root.
"""

from .web_app import create_application

__all__ = ["create_application"]
