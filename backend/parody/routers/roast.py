"""Portfolio roast router."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from parody.models.roast import RoastRequest, RoastResult
from parody.routers.parody import capture_failure_detail
from parody.services.capture import CaptureFailure
from parody.services.pipeline import get_roast_pipeline
from parody.services.roast import RoastPipeline

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/roast", tags=["roast"])


async def roast_pipeline() -> RoastPipeline:
    try:
        return await get_roast_pipeline()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("", response_model=RoastResult)
async def roast_portfolio(
    request: RoastRequest,
    pipeline: RoastPipeline = Depends(roast_pipeline),
) -> RoastResult:
    """
    Roast a developer portfolio.

    Returns the roast text and, when narration is configured, an
    ``audio/mpeg`` data URL.
    """
    try:
        return await pipeline.roast(request)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CaptureFailure as e:
        raise HTTPException(status_code=502, detail=capture_failure_detail(e))
    except Exception as e:
        logger.exception(f"Roast failed for {request.url}")
        raise HTTPException(status_code=500, detail=f"Roast failed: {str(e)}")
