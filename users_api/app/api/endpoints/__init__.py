"""
Endpoint subpackage.

Each module defines an APIRouter for one resource; the routers are
aggregated in ``api/router.py``.
"""
