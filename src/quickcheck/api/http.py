# src/quickcheck/api/http.py
from __future__ import annotations

from fastapi import FastAPI, HTTPException, Request

from quickcheck.adapters.config import config
from quickcheck.adapters.logging_utils import get_logger
from quickcheck.services.deal_analyzer import result_to_dict, screen_with_defaults
from quickcheck.services.report import build_report_lines, paginate
from quickcheck.services.share_codec import build_share_url, decode_share_params, encode_share_params
from .schemas import AnalyzeResponse, DealRequest, ExportResponse, ShareResponse

logger = get_logger(__name__)

app = FastAPI(title="Deal QuickCheck")


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/analyze", response_model=AnalyzeResponse)
def analyze_endpoint(payload: DealRequest) -> AnalyzeResponse:
    """
    Screen one deal. Omitted fields take the configured defaults.
    """
    try:
        result = screen_with_defaults(payload.raw_fields())
        return AnalyzeResponse(**result_to_dict(result))
    except Exception as e:
        logger.exception("analyze failed")
        raise HTTPException(status_code=400, detail=str(e)) from e


@app.get("/analyze", response_model=AnalyzeResponse)
def analyze_from_share_link(request: Request) -> AnalyzeResponse:
    """
    Screen the deal encoded in a share link's query string
    (?m=s8&p=350000&dp=20...). Keys that are absent keep their defaults.
    """
    try:
        state = decode_share_params(dict(request.query_params), config.default_fields())
        result = screen_with_defaults(state)
        return AnalyzeResponse(**result_to_dict(result))
    except Exception as e:
        logger.exception("analyze from share link failed")
        raise HTTPException(status_code=400, detail=str(e)) from e


@app.post("/share", response_model=ShareResponse)
def share_endpoint(payload: DealRequest) -> ShareResponse:
    try:
        result = screen_with_defaults(payload.raw_fields())
        return ShareResponse(
            params=encode_share_params(result.state),
            url=build_share_url(config.SHARE_BASE_URL, result.state),
        )
    except Exception as e:
        logger.exception("share link failed")
        raise HTTPException(status_code=400, detail=str(e)) from e


@app.post("/export", response_model=ExportResponse)
def export_endpoint(payload: DealRequest) -> ExportResponse:
    """
    Text export of the screening report, split into pages the same way the
    PDF is.
    """
    try:
        result = screen_with_defaults(payload.raw_fields())
        lines = build_report_lines(result.inputs, result.metrics, result.verdict)
        return ExportResponse(lines=lines, pages=paginate(lines))
    except Exception as e:
        logger.exception("export failed")
        raise HTTPException(status_code=400, detail=str(e)) from e
