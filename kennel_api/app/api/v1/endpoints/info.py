"""
Information endpoint for API v1.

Returns the service name and version together with a basic database
check, so load balancers and operators can probe the deployment.
"""

from typing import Any, Dict

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health", response_model=Dict[str, Any])
async def health(request: Request) -> Dict[str, Any]:
    """Report service status; ``database`` is ``"ok"`` when SQLite answers."""
    settings = request.app.state.settings
    database = request.app.state.database
    with database.get_cursor() as cursor:
        cursor.execute("SELECT 1").fetchone()
    return {
        "status": "ok",
        "service": settings.project_name,
        "version": settings.api_version,
        "database": "ok",
    }
