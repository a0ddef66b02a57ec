"""Mini README: Outer interfaces for the shared expense tracker.

Exports the FastAPI application factory serving the JSON API. The Typer CLI
lives in ``main_expense_tracker.py`` at the repository root.
"""

from .web_app import create_application

__all__ = ["create_application"]
