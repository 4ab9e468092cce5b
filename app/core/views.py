"""
Core views providing infrastructure endpoints.

Views that are not part of the notification domain but are needed to run
it, such as health checks.
"""

from django.core.cache import cache
from django.db import DatabaseError, connection
from django.http import JsonResponse


def health_check(request):
    """
    Health check endpoint for Docker, Kubernetes probes and load balancers.

    Returns:
        JsonResponse with status and component health:
        - status: "healthy" or "unhealthy"
        - database: "connected" or "disconnected"
        - cache: "connected" or "disconnected"
        - push: "available" or "degraded"

    HTTP Status Codes:
        200: Database reachable (cache and push may be degraded)
        503: Database unreachable

    Example Response:
        {
            "status": "healthy",
            "database": "connected",
            "cache": "connected",
            "push": "degraded"
        }
    """
    from notifications.wiring import get_services

    health_status = {
        "status": "healthy",
        "database": "unknown",
        "cache": "unknown",
        "push": "unknown",
    }
    is_healthy = True

    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
        health_status["database"] = "connected"
    except DatabaseError:
        health_status["database"] = "disconnected"
        health_status["status"] = "unhealthy"
        is_healthy = False

    # Cache failure is not critical: preferences fall back to the database
    try:
        cache.set("health_check", "ok", timeout=1)
        health_status["cache"] = (
            "connected" if cache.get("health_check") == "ok" else "disconnected"
        )
    except Exception:
        health_status["cache"] = "disconnected"

    # Degraded push still serves the in-app inbox
    health_status["push"] = "available" if get_services().gateway.is_available else "degraded"

    status_code = 200 if is_healthy else 503
    return JsonResponse(health_status, status=status_code)
