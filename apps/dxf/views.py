"""
DXF Analysis Views for CAD Hub
"""
import logging

from django.conf import settings
from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from .services import DXFAnalyzer, DXFParserService

logger = logging.getLogger(__name__)


@method_decorator(csrf_exempt, name="dispatch")
class DXFAnalyzeUploadView(View):
    """Analyze an uploaded DXF file and return layers, entities, bounds and statistics."""

    def post(self, request):
        if "file" not in request.FILES:
            return JsonResponse({"error": "No file uploaded"}, status=400)

        uploaded_file = request.FILES["file"]
        if not uploaded_file.name.lower().endswith(".dxf"):
            return JsonResponse({"error": "Only DXF files allowed"}, status=400)

        options = settings.DXF_ANALYSIS
        max_size = options["MAX_UPLOAD_SIZE"]
        if uploaded_file.size > max_size:
            return JsonResponse(
                {"error": f"File too large (max {max_size} bytes)"},
                status=400,
            )

        analyzer = DXFAnalyzer(DXFParserService(recover_mode=options["RECOVER_MODE"]))
        try:
            outcome = analyzer.analyze_bytes(uploaded_file.read())
        except Exception as e:
            logger.exception(f"DXF analysis of {uploaded_file.name} crashed: {e}")
            return JsonResponse({"error": str(e)}, status=500)

        if not outcome.success:
            logger.warning(f"DXF analysis of {uploaded_file.name} failed: {outcome.error.message}")
            return JsonResponse(outcome.to_dict(), status=422)

        return JsonResponse({
            "success": True,
            "filename": uploaded_file.name,
            "data": outcome.result.to_dict(),
        })
