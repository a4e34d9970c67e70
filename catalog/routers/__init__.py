"""
FastAPI routers.

``collections`` builds one APIRouter per registered resource type; the app
includes them all at startup.
"""
