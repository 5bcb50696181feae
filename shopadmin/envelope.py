"""Uniform ``{success, data, error}`` response bodies for the JSON API."""

from __future__ import annotations

from typing import Any

from flask import jsonify
from pydantic import ValidationError


def success(data: Any = None, status: int = 200):
    return jsonify({"success": True, "data": data}), status


def failure(message: str, status: int):
    return jsonify({"success": False, "error": message}), status


def validation_message(err: ValidationError) -> str:
    """Flatten pydantic errors into one human readable line."""

    parts = []
    for error in err.errors():
        location = ".".join(str(piece) for piece in error.get("loc", ()))
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(parts)
