"""DXF URL configuration."""
from django.urls import path

from . import views

app_name = "dxf"

urlpatterns = [
    path(
        "analyze/",
        views.DXFAnalyzeUploadView.as_view(),
        name="dxf_analyze_upload",
    ),
]
