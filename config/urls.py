"""Root URL configuration for CAD Hub."""
from django.urls import include, path

from apps.core.healthz import liveness, readiness

urlpatterns = [
    # Health endpoints (no auth)
    path("livez/", liveness, name="health-liveness"),
    path("healthz/", readiness, name="health-readiness"),
    path("health/", liveness, name="health-compat"),

    # App URLs
    path("dxf/", include("apps.dxf.urls", namespace="dxf")),
]
