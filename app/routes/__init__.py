"""
Route aggregation package for the product catalog.

Each module defines an ``APIRouter`` instance that groups related
endpoints together; the main application imports these routers and
includes them in the global FastAPI instance.
"""

__all__ = ["products"]

from . import products  # noqa: E402,F401
