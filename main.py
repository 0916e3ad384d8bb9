"""
Root application entry point for the product catalog API
========================================================

This module exposes the FastAPI application instance defined in
``app/main.py`` so that deployment tools like Uvicorn can import
``main:app`` directly.  The application setup and router registration
remain centralized in ``app.main``.

Usage
-----

.. code-block:: bash

    uvicorn main:app --host 0.0.0.0 --port 8000
"""

from app.main import app  # noqa: F401 re-export for Uvicorn

__all__ = ["app"]
