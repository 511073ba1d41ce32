"""FastAPI application exposing table conversion."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from pydantic import BaseModel, Field

from .allowed import ConfigurationError
from .converter import ConversionError, convert_table
from .logging import get_logger
from .runtime import Runtime, build_runtime

logger = get_logger(__name__)


class HeaderPayload(BaseModel):
    # left untyped so the core validator sees exactly what the client sent
    kind: Any = None
    anchor_column: Any = None
    anchor_row: Any = None
    depth: Any = None


class ConvertRequest(BaseModel):
    grid: List[List[Any]]
    preset: Optional[str] = None
    headers: Optional[List[HeaderPayload]] = Field(default=None)


def get_runtime(request: Request) -> Runtime:
    runtime: Runtime = request.app.state.runtime
    return runtime


def _coordinate(value: Any) -> Any:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def create_app(runtime: Runtime | None = None) -> FastAPI:
    api = FastAPI(title="table2json", version="1.0.0")
    api.state.runtime = runtime or build_runtime()

    @api.get("/health")
    def health(runtime: Runtime = Depends(get_runtime)) -> dict:
        return {
            "status": "healthy",
            "default_preset": runtime.config.default_preset,
        }

    @api.post("/convert")
    def convert(payload: ConvertRequest, runtime: Runtime = Depends(get_runtime)) -> dict:
        headers: Optional[List[Dict[str, Any]]] = None
        if payload.headers:
            headers = [
                {
                    "kind": header.kind,
                    "anchor_column": _coordinate(header.anchor_column),
                    "anchor_row": _coordinate(header.anchor_row),
                }
                for header in payload.headers
            ]

        try:
            result = convert_table(
                payload.grid,
                runtime.table_config(preset=payload.preset, headers=headers),
            )
        except (ConfigurationError, ConversionError) as exc:
            logger.warning("convert_rejected", error=str(exc))
            raise HTTPException(status_code=422, detail=str(exc)) from exc

        return {"shape": result.shape.value, "data": result.data}

    return api
