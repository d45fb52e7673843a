"""
Health endpoints for container orchestration.

Registration in config/urls.py:
    urlpatterns = [
        path("livez/", liveness, name="health-liveness"),
        path("healthz/", readiness, name="health-readiness"),
    ]
"""
import ezdxf
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET


@csrf_exempt
@require_GET
def liveness(request):
    """Liveness probe: Is the process alive?"""
    return JsonResponse({"status": "alive"})


@csrf_exempt
@require_GET
def readiness(request):
    """Readiness probe: Can the DXF backend build a document?"""
    checks = {}

    try:
        ezdxf.new()
        checks["ezdxf"] = ezdxf.__version__
    except Exception as e:
        checks["ezdxf"] = str(e)
        return JsonResponse(
            {"status": "unhealthy", "checks": checks},
            status=503,
        )

    return JsonResponse({"status": "healthy", "checks": checks})
