from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from config import API_HOST, API_PORT, CORS_ORIGINS, HOME_AIRPORT, MIN_BLOCK_LINES
from form_adapter import convert_parsed_run_to_form
from logging_utils import configure_logging, log_event, new_request_id
from models import ParsedRun, ParseResult, RunFormRecord
from schedule_parser import is_schedule_message, parse_schedule_message

# ------------------------------------------------------------------------------
# APP + LOGGING SETUP
# ------------------------------------------------------------------------------

configure_logging()
logger = logging.getLogger("runintel.api")

app = FastAPI(title="Run-Intel", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_origin_regex=r"http://localhost:\d+",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

logger.info(
    "Config: home_airport=%s, min_block_lines=%s",
    HOME_AIRPORT,
    MIN_BLOCK_LINES,
)


# ------------------------------------------------------------------------------
# REQUEST / RESPONSE MODELS
# ------------------------------------------------------------------------------

class MessageRequest(BaseModel):
    message: str = Field("", description="Dispatch message exactly as pasted")


class ConvertRequest(BaseModel):
    run: ParsedRun
    base_date: str = Field("", description="YYYY-MM-DD; today when empty")


class ImportRequest(MessageRequest):
    base_date: str = Field("", description="YYYY-MM-DD; today when empty")


class DetectResponse(BaseModel):
    is_schedule: bool


class ImportResponse(BaseModel):
    result: ParseResult
    records: List[RunFormRecord]


# ------------------------------------------------------------------------------
# REQUEST LOGGING MIDDLEWARE
# ------------------------------------------------------------------------------

@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    rid = new_request_id()
    start = time.time()

    log_event(
        logger,
        "http_request_started",
        method=request.method,
        path=request.url.path,
        client_ip=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
        request_id=rid,
    )

    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        duration_ms = int((time.time() - start) * 1000)
        log_event(
            logger,
            "http_request_finished",
            method=request.method,
            path=request.url.path,
            status_code=status_code,
            duration_ms=duration_ms,
            request_id=rid,
        )


# ------------------------------------------------------------------------------
# ROUTES
# ------------------------------------------------------------------------------

@app.get("/health")
async def health() -> Dict[str, Any]:
    return {
        "status": "ok",
        "version": app.version,
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    }


@app.post("/parse", response_model=ParseResult)
async def parse(body: MessageRequest) -> ParseResult:
    """
    Parse a pasted dispatch message. Parser failures come back inside the
    result (success=false + errors), never as HTTP errors.
    """
    result = parse_schedule_message(body.message)
    log_event(
        logger,
        "http_parse_completed",
        chars=len(body.message),
        runs=len(result.runs),
        errors=len(result.errors),
        warnings=len(result.warnings),
    )
    return result


@app.post("/convert", response_model=RunFormRecord)
async def convert(body: ConvertRequest) -> RunFormRecord:
    return convert_parsed_run_to_form(body.run, body.base_date)


@app.post("/import", response_model=ImportResponse)
async def bulk_import(body: ImportRequest) -> ImportResponse:
    """Parse, then turn every run into a form record for the bulk-import screen."""
    result = parse_schedule_message(body.message)
    records = [convert_parsed_run_to_form(run, body.base_date) for run in result.runs]
    return ImportResponse(result=result, records=records)


@app.post("/detect", response_model=DetectResponse)
async def detect(body: MessageRequest) -> DetectResponse:
    return DetectResponse(is_schedule=is_schedule_message(body.message))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=API_HOST,
        port=API_PORT,
        log_level="info",
        access_log=True,
    )
