"""Standard response envelope for the NotifyHub API."""

from typing import Any


def single_response(item: Any) -> dict:
    return {"data": item}


def error_response(code: int, message: str) -> dict:
    return {"error": {"code": code, "message": message}}
