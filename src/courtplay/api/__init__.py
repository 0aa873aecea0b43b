"""REST API exposing diagram validation, playback compilation and frames."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import Body, FastAPI, HTTPException

from courtplay.advisories import get_document_warnings
from courtplay.api.schemas import (
    FrameRequest,
    FrameResponse,
    PlaybackRequest,
    PlaybackResponse,
    TemplateResponse,
    TemplateSummaryResponse,
    ValidationResponse,
    frame_to_response,
    playback_to_response,
)
from courtplay.config import get_playback_settings, get_template, iter_templates
from courtplay.models import BasketballPlayDocument
from courtplay.playback import compile_play_playback, get_phase_frame
from courtplay.validation import InvalidPlayDocument, require_valid, validate


logger = logging.getLogger("uvicorn.error")


def _require_document(payload: Dict[str, Any]) -> BasketballPlayDocument:
    try:
        return require_valid(payload)
    except InvalidPlayDocument as exc:
        raise HTTPException(status_code=400, detail=exc.message) from exc


def create_app() -> FastAPI:
    app = FastAPI(title="courtplay diagrams")
    settings = get_playback_settings()
    app.state.playback_settings = settings

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/templates", response_model=List[TemplateSummaryResponse])
    async def list_templates() -> List[TemplateSummaryResponse]:
        return [TemplateSummaryResponse.from_template(template) for template in iter_templates()]

    @app.get("/templates/{template_id}", response_model=TemplateResponse)
    async def show_template(template_id: str) -> TemplateResponse:
        try:
            template = get_template(template_id)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail="Template not found") from exc
        return TemplateResponse.from_template(template)

    @app.post("/validate", response_model=ValidationResponse)
    async def validate_document(document: Dict[str, Any] = Body(...)) -> ValidationResponse:
        result = validate(document)
        return ValidationResponse(valid=result.valid, error=result.error)

    @app.post("/warnings")
    async def document_warnings(document: Dict[str, Any] = Body(...)) -> dict[str, list[str]]:
        return get_document_warnings(_require_document(document))

    @app.post("/playback", response_model=PlaybackResponse)
    async def playback(request: PlaybackRequest) -> PlaybackResponse:
        document = _require_document(request.document)
        compiled = compile_play_playback(document, request.speed_multiplier, settings)
        logger.info(
            "Compiled playback: phases=%s speed=%.1fx total=%.0fms",
            len(document.phases),
            request.speed_multiplier,
            compiled.total_duration_ms,
        )
        return playback_to_response(compiled, get_document_warnings(document))

    @app.post("/playback/frame", response_model=FrameResponse)
    async def playback_frame(request: FrameRequest) -> FrameResponse:
        document = _require_document(request.document)
        if request.phase_index >= len(document.phases):
            raise HTTPException(
                status_code=400,
                detail=f"phase_index {request.phase_index} out of range for {len(document.phases)} phases",
            )
        compiled = compile_play_playback(document, request.speed_multiplier, settings)
        frame = get_phase_frame(document, compiled, request.phase_index, request.elapsed_ms)
        return frame_to_response(request.phase_index, frame)

    return app
