"""Response shaping helpers for MCP tools."""

from __future__ import annotations

import json
import time
from dataclasses import asdict, is_dataclass
from typing import Any

from rebalancer.services.base import ServiceResult

DISCLAIMER = "Rebalancing instructions ignore fees, taxes and slippage. Not financial advice."


def _convert_data(data: Any) -> Any:
    if is_dataclass(data) and not isinstance(data, type):
        return asdict(data)
    if isinstance(data, list):
        return [_convert_data(item) for item in data]
    if isinstance(data, dict):
        return {key: _convert_data(value) for key, value in data.items()}
    return data


def success_response(result: ServiceResult[Any]) -> str:
    payload: dict[str, Any] = {
        "data": _convert_data(result.data),
        "timestamp": int(time.time()),
        "disclaimer": DISCLAIMER,
    }
    if result.source:
        payload["source"] = result.source
    return json.dumps(payload, ensure_ascii=True)


def error_response(code: str, message: str) -> str:
    return json.dumps(
        {
            "error": True,
            "code": code,
            "message": message,
            "timestamp": int(time.time()),
        },
        ensure_ascii=True,
    )


def result_response(result: ServiceResult[Any]) -> str:
    if result.error is not None:
        return error_response(result.error.code, result.error.message)
    return success_response(result)
