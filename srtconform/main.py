"""FastAPI application for SRT validation and conformance."""

import logging
import os
from typing import Optional
from urllib.parse import quote

from pathlib import Path


def _load_env_file():
    """Load environment variables from .env file."""
    env_path = Path(__file__).parent.parent / ".env"
    if env_path.exists():
        with open(env_path) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    os.environ.setdefault(key.strip(), value.strip())

_load_env_file()

from fastapi import FastAPI, File, Form, UploadFile, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from .models import ParseResult, StyleGuide
from .parsing import detect_bom, decode_bytes, parse_srt
from .conformance import ConformanceEngine
from .export import export_srt
from .problems import summarize_problems

logging.basicConfig(
    level=os.environ.get("SRTCONFORM_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(levelname)s - [%(name)s:%(lineno)d] - %(message)s",
)
logger = logging.getLogger(__name__)

DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://localhost:3000,http://127.0.0.1:5173"


app = FastAPI(
    title="SRT Conformance API",
    description="API for validating and conforming SRT subtitle files",
    version="1.0.0"
)


@app.on_event("startup")
async def startup_event():
    """Log the active style guide on startup."""
    logger.info("SRT CONFORMANCE API - Starting up")
    logger.info("Default style guide: %s", StyleGuide().model_dump())


# CORS middleware for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        origin.strip()
        for origin in os.environ.get("SRTCONFORM_CORS_ORIGINS", DEFAULT_CORS_ORIGINS).split(",")
        if origin.strip()
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


async def _read_upload(file: UploadFile) -> tuple[str, Optional[str]]:
    """
    Read an uploaded SRT file.

    Returns:
        Tuple of (decoded text, BOM type value or None)
    """
    filename = file.filename or "subtitle.srt"
    ext = filename.lower().split('.')[-1]

    if ext != 'srt':
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file format: {ext}. Supported: srt"
        )

    content = await file.read()
    bom = detect_bom(content)
    return decode_bytes(content, bom), (bom.value if bom else None)


def _build_style(
    max_lines: int,
    max_line_length: int,
    min_duration_ms: int,
    min_gap_ms: int,
    first_start_min_ms: int,
) -> StyleGuide:
    try:
        return StyleGuide(
            max_lines=max_lines,
            max_line_length=max_line_length,
            min_duration_ms=min_duration_ms,
            min_gap_ms=min_gap_ms,
            first_start_min_ms=first_start_min_ms,
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=f"Invalid style guide: {e}")


def _content_disposition(filename: str) -> str:
    """
    Build an attachment header for a download name.

    Header values must be latin-1, so non-ASCII names are sent percent-encoded
    in ``filename*`` with an ASCII-only ``filename`` for older clients.
    """
    fallback = "".join(c for c in filename if " " <= c <= "~" and c not in '"\\')
    if not fallback.strip(". _"):
        fallback = "subtitle_conformed.srt"
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "srt-conformance"}


@app.post("/api/parse")
async def parse_file(file: UploadFile = File(...)) -> ParseResult:
    """Parse an SRT file, returning records, problems and the normalized text."""
    text, _ = await _read_upload(file)
    return parse_srt(text)


@app.post("/api/validate")
async def validate_file(
    file: UploadFile = File(...),
    max_lines: int = Form(default=2),
    max_line_length: int = Form(default=45),
    min_duration_ms: int = Form(default=1000),
    min_gap_ms: int = Form(default=200),
    first_start_min_ms: int = Form(default=500),
):
    """
    Parse and validate an SRT file.

    Conformance problems are only reported when the file could be parsed.
    """
    style = _build_style(max_lines, max_line_length, min_duration_ms, min_gap_ms, first_start_min_ms)
    text, bom = await _read_upload(file)

    parsed = parse_srt(text)
    conform_problems = []
    if parsed.records is not None:
        conform_problems = ConformanceEngine(style).validate(parsed.records)

    total = len(parsed.records) if parsed.records is not None else 0
    report = summarize_problems(parsed.problems + conform_problems, total)
    logger.info(
        "Validated %s: %d subtitles, %d problems (%d manual)",
        file.filename, total, report.summary.problems_count, report.summary.manual_count
    )

    return {
        "bom": bom,
        "parsed": parsed.records is not None,
        "parse_problems": [p.model_dump() for p in parsed.problems],
        "conform_problems": [p.model_dump() for p in conform_problems],
        "report": report.model_dump(),
    }


@app.post("/api/conform")
async def conform_file(
    file: UploadFile = File(...),
    max_lines: int = Form(default=2),
    max_line_length: int = Form(default=45),
    min_duration_ms: int = Form(default=1000),
    min_gap_ms: int = Form(default=200),
    first_start_min_ms: int = Form(default=500),
):
    """Parse and conform an SRT file, returning the corrected SRT."""
    style = _build_style(max_lines, max_line_length, min_duration_ms, min_gap_ms, first_start_min_ms)
    text, _ = await _read_upload(file)

    parsed = parse_srt(text)
    if parsed.records is None:
        raise HTTPException(
            status_code=422,
            detail=f"Could not parse file: {parsed.problems[-1].message}"
        )

    result = ConformanceEngine(style).conform(parsed.records)
    problems = parsed.problems + result.problems
    manual = sum(1 for p in problems if not p.can_fix)

    base_name = (file.filename or "subtitle.srt").rsplit('.', 1)[0]
    download_name = f"{base_name}_conformed.srt"
    return PlainTextResponse(
        content=export_srt(result.records),
        media_type="text/plain",
        headers={
            "Content-Disposition": _content_disposition(download_name),
            "X-Problem-Count": str(len(problems)),
            "X-Manual-Problem-Count": str(manual),
        }
    )
