"""
Health Check Endpoints.

Liveness and version checks for the Quotely API. They never touch the
database, so load balancers can poll them while the store is down.
"""

from datetime import datetime, timezone

from fastapi import APIRouter

from quotely.server.core import constant

router = APIRouter()


@router.get(
    "/health",
    summary="Health Check",
    description="Report that the Quotely API process is up and answering requests.",
    response_description="Status, service name and server time.",
)
async def health_check():
    """Answer with ``ok`` and the server's current UTC time."""
    return {
        "status": "ok",
        "service": constant.PROJECT_NAME,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get(
    "/version",
    summary="Get Version",
    description="Report the Quotely API release and the request schema generation it serves.",
    response_description="Version object.",
)
async def version():
    return {"version": constant.API_VERSION, "schema_version": constant.SCHEMA_VERSION}
