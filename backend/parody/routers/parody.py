"""Parody generation router."""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse, Response

from parody.models.parody import ParodyRequest, ParodyResult, StyleInfo
from parody.services.capture import CaptureFailure
from parody.services.pipeline import ParodyPipeline, get_parody_pipeline, get_preview_store
from parody.services.preview_store import PreviewStore
from parody.services.styles import list_styles

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/parody", tags=["parody"])

NOINDEX_HEADERS = {"X-Robots-Tag": "noindex, nofollow"}


async def parody_pipeline() -> ParodyPipeline:
    try:
        return await get_parody_pipeline()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def capture_failure_detail(error: CaptureFailure) -> dict:
    return {
        "message": str(error),
        "attempts": [attempt.model_dump() for attempt in error.attempts],
    }


@router.post("/generate", response_model=ParodyResult)
async def generate_parody(
    request: ParodyRequest,
    pipeline: ParodyPipeline = Depends(parody_pipeline),
) -> ParodyResult:
    """
    Generate a parody of a website.

    Captures the page (falling back through cheaper strategies), rewrites its
    text in the chosen style, optionally restyles images, rebuilds the page
    and stores it for preview. Partial failures are listed in ``warnings``.
    """
    try:
        return await pipeline.generate(request)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CaptureFailure as e:
        raise HTTPException(status_code=502, detail=capture_failure_detail(e))
    except Exception as e:
        logger.exception(f"Parody generation failed for {request.url}")
        raise HTTPException(status_code=500, detail=f"Parody generation failed: {str(e)}")


@router.get("/styles", response_model=list[StyleInfo])
async def get_styles() -> list[StyleInfo]:
    """List the available parody styles."""
    return list_styles()


@router.get("/preview/{parody_id}", response_class=HTMLResponse)
async def preview_parody(
    parody_id: str,
    store: PreviewStore = Depends(get_preview_store),
) -> HTMLResponse:
    """Serve a stored parody page. Expired previews are reported as missing."""
    parody = await store.get(parody_id)
    if parody is None:
        raise HTTPException(status_code=404, detail="Parody not found or expired")
    return HTMLResponse(content=parody.html, headers=NOINDEX_HEADERS)


@router.get("/download/{parody_id}")
async def download_parody(
    parody_id: str,
    store: PreviewStore = Depends(get_preview_store),
) -> Response:
    """Download a stored parody page as an HTML attachment."""
    parody = await store.get(parody_id)
    if parody is None:
        raise HTTPException(status_code=404, detail="Parody not found or expired")

    filename = f"parody-{parody.style}-{datetime.now().date().isoformat()}.html"
    return Response(
        content=parody.html,
        media_type="text/html; charset=utf-8",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            **NOINDEX_HEADERS,
        },
    )
