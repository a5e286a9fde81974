"""
tracegraph/api/routes/__init__.py

Route modules served under the FastAPI app.
"""
from tracegraph.api.routes import data

__all__ = ["data"]
