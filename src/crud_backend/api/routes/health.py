"""
Health check API route
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Request

from crud_backend.api.dependencies import get_database
from crud_backend.database.connection import Database

router = APIRouter()


@router.get("/health")
async def health_check(request: Request, database: Database = Depends(get_database)):
    """Report service status and database connectivity"""
    try:
        await database.ping()
    except Exception as e:
        raise HTTPException(status_code=503, detail=f"Health check failed: {str(e)}")

    return {
        "status": "healthy",
        "service": request.app.state.service_variant.value,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": "connected"
    }
