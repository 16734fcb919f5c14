from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError

from src.integrations.contracts.payments import STATUS_PENDING, STATUS_UNKNOWN


class IntegrationResponseError(ValueError):
    def __init__(self, message: str, *, payload: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.payload = payload or {}


class ChargeResponseModel(BaseModel):
    reference: str
    status: str = STATUS_PENDING
    message: Any = None
    data: Dict[str, Any] = Field(default_factory=dict)


class VerifyResponseModel(BaseModel):
    status: str = STATUS_UNKNOWN
    data: Dict[str, Any] = Field(default_factory=dict)


def normalize_charge_response(raw: Dict[str, Any]) -> ChargeResponseModel:
    data = _data_section(raw)
    reference = _first_non_empty(data, "reference", raw=raw)
    status = _first_non_empty(data, "status", default=STATUS_PENDING, raw=raw)

    return _build_model(
        ChargeResponseModel,
        {
            "reference": str(reference),
            "status": str(status),
            "message": raw.get("message"),
            "data": data,
        },
        raw,
    )


def normalize_verify_response(raw: Dict[str, Any]) -> VerifyResponseModel:
    data = _data_section(raw)
    status = _first_non_empty(data, "status", default=STATUS_UNKNOWN, raw=raw)

    return _build_model(VerifyResponseModel, {"status": str(status), "data": data}, raw)


def _data_section(raw: Any) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        raise IntegrationResponseError("Gateway response is not a JSON object.")
    data = raw.get("data")
    if not isinstance(data, dict):
        raise IntegrationResponseError("Gateway response has no 'data' object.", payload=raw)
    return data


def _first_non_empty(data: Dict[str, Any], *keys: str, default: Any = None, raw: Optional[Dict[str, Any]] = None) -> Any:
    for key in keys:
        value = data.get(key)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    if default is not None:
        return default
    raise IntegrationResponseError(f"Missing required field. Checked keys: {', '.join(keys)}", payload=raw or data)


def _build_model(model_type, payload: Dict[str, Any], raw: Dict[str, Any]):
    try:
        return model_type(**payload)
    except ValidationError as exc:
        raise IntegrationResponseError(f"Response validation failed: {exc}", payload=raw) from exc
