"""
Size Analysis API Route.

Multipart upload of the photo plus height and optional weight. The active
chart of the session and its language are used for the request.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from analysis.intake import accept_image
from api.dependencies import get_sizing_app
from api.models import AnalysisResponse
from core.errors import AnalysisError, ConfigurationError, InvalidMeasurementError
from core.logging import get_logger
from services.sizing_app import SizingApp

logger = get_logger(__name__)

router = APIRouter(prefix="/api/sessions/{session_id}", tags=["Analysis"])


@router.post(
    "/analyze",
    response_model=AnalysisResponse,
    summary="Recommend a size from a photo and measurements",
)
def analyze(
    image: UploadFile = File(..., description="Photo of the person (image/*)"),
    height: str = Form(..., description="Height in cm, 140-220"),
    weight: Optional[str] = Form(None, description="Weight in kg, 40-150 (optional)"),
    app: SizingApp = Depends(get_sizing_app),
) -> AnalysisResponse:
    """
    Run the analysis for the session's active chart.

    - 415: the upload is not an image
    - 409: an analysis is already running for this session
    - 422: height missing or out of range, weight out of range
    - 502: the analysis failed (translated message in `detail`)
    - 503: the service has no API key configured
    """
    payload = accept_image(image.file.read(), image.content_type)
    if payload is None:
        raise HTTPException(status_code=415, detail="Only image uploads are accepted")

    if app.is_analyzing:
        raise HTTPException(status_code=409, detail="An analysis is already in progress")
    if not app.can_submit(height, payload):
        raise HTTPException(status_code=422, detail="Height is required")

    try:
        result = app.submit(height=height, weight=weight, image=payload)
    except InvalidMeasurementError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ConfigurationError as e:
        logger.error("Analysis is not configured", error=str(e))
        raise HTTPException(status_code=503, detail=str(e))
    except AnalysisError:
        raise HTTPException(status_code=502, detail=app.error)

    if result is None:
        raise HTTPException(status_code=409, detail="An analysis is already in progress")

    return AnalysisResponse(
        result=result,
        chart_id=app.active_chart.id,
        highlighted=app.highlighted_rows(),
    )
