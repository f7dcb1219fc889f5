"""
Endpoint modules.  Each defines an ``APIRouter`` for one entity; they
are combined in ``api/router.py``.
"""
