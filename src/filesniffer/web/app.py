"""FastAPI application exposing file searches over HTTP."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from filesniffer.config import SnifferConfig
from filesniffer.exceptions import ResolutionError, SnifferError
from filesniffer.search.collectors import as_dict
from filesniffer.search.matcher import compile_criterion
from filesniffer.search.sniffer import FileSniffer

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="filesniffer", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class SearchPayload(BaseModel):
    pattern: str
    paths: List[str] = Field(default_factory=list)
    regex: bool = False
    ignore_case: bool = False
    depth: int = Field(default=0, ge=0)
    gzip: bool = False


def _sanitize(raw: str) -> Path:
    clean = raw.strip().replace("\r", "").replace("\n", "")
    if "\0" in clean:
        raise HTTPException(status_code=400, detail="Invalid path: contains null byte")
    return Path(clean).expanduser()


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@app.post("/search")
async def search_files(payload: SearchPayload) -> Dict[str, Any]:
    if not payload.pattern:
        raise HTTPException(status_code=400, detail="Search string or pattern must be specified")
    try:
        criterion = compile_criterion(
            payload.pattern, regex=payload.regex, ignore_case=payload.ignore_case
        )
    except re.error as exc:
        raise HTTPException(status_code=400, detail=f"Invalid pattern: {exc}") from exc

    paths = [_sanitize(raw) for raw in payload.paths if raw.strip()]
    sniffer = FileSniffer(config=SnifferConfig.from_env(depth=payload.depth)).paths(paths or [Path.cwd()])
    if payload.gzip:
        sniffer.gzip()
    sniffer.collect(as_dict())

    errors: List[str] = []
    sniffer.on("error", lambda err: errors.append(str(err)))
    try:
        results = await sniffer.find(criterion)
    except ResolutionError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except SnifferError as exc:  # pragma: no cover - defensive
        LOGGER.exception("Search failed: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return {
        "results": results,
        "files": sniffer.outcome.matched_files,
        "errors": errors,
    }
