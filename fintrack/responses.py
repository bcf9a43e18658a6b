# fintrack/responses.py
"""
The JSON envelope every /api route answers with.

success: {"success": true, "data": ...}   (data left out when there is none)
failure: {"success": false, "error": "..."}
"""

from __future__ import annotations

from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def ok(data: Any = None) -> dict:
    body: dict = {"success": True}
    if data is not None:
        body["data"] = jsonable_encoder(data, by_alias=True)
    return body


def fail(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        {"success": False, "error": message}, status_code=status_code
    )
