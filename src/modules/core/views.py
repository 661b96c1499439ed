import time
from typing import Any, Dict

import structlog
from django.db import DatabaseError, connections
from django.http import HttpRequest, JsonResponse
from django.utils import timezone

logger = structlog.get_logger()


def health_check(request: HttpRequest) -> JsonResponse:
    """Report whether every configured database answers ``SELECT 1``."""
    services: Dict[str, Dict[str, Any]] = {}
    overall_healthy = True

    for alias in connections:
        try:
            start = time.monotonic()
            conn = connections[alias]
            conn.ensure_connection()
            with conn.cursor() as cursor:
                cursor.execute("SELECT 1")
                cursor.fetchone()
            services[f"database:{alias}"] = {
                "status": "up",
                "response_time_ms": round((time.monotonic() - start) * 1000, 2),
            }
        except DatabaseError:
            services[f"database:{alias}"] = {"status": "down"}
            overall_healthy = False
            logger.error("health_check_db_failure", alias=alias, exc_info=True)

    status_code = 200 if overall_healthy else 503

    logger.info(
        "health_check_completed", status="healthy" if overall_healthy else "unhealthy"
    )

    return JsonResponse(
        {
            "status": "healthy" if overall_healthy else "unhealthy",
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=status_code,
    )
