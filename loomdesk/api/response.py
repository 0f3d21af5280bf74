# FILE: loomdesk/api/response.py
"""
JSON envelopes for the challan API.

Amounts leave the service as decimal strings at the scale they were
rounded to ("8000.00" for money, "40.0000" for weight), whether they sit
in a pydantic model or in a plain dict built by a route.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

_ENCODERS = {Decimal: str}


def to_json(value: Any) -> Any:
    """JSON-safe copy of `value`; models use their camelCase aliases."""
    return jsonable_encoder(value, by_alias=True, custom_encoder=_ENCODERS)


def _respond(status_code: int, payload: Dict[str, Any]) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=to_json(payload))


def ok(
    data: Any = None,
    *,
    meta: Optional[Dict[str, Any]] = None,
    status_code: int = 200,
) -> JSONResponse:
    """{"ok": true, "data": ..., "meta": {...}}; meta only when given."""
    payload: Dict[str, Any] = {"ok": True, "data": data}
    if meta is not None:
        payload["meta"] = meta
    return _respond(status_code, payload)


def err(
    msg: str = "Something went wrong",
    *,
    status_code: int = 400,
    code: Optional[str] = None,
    details: Any = None,
) -> JSONResponse:
    return _respond(status_code, {
        "ok": False,
        "error": {
            "msg": msg,
            "code": code,
            "details": details
        },
    })
