"""Schema validation helpers."""
from __future__ import annotations

from typing import Any, Dict

from jsonschema import Draft202012Validator, ValidationError

from ..models import QualityReport
from .schema import SCHEMA

_VALIDATOR = Draft202012Validator(SCHEMA)


def validate_dict(data: Dict[str, Any], schema: Dict[str, Any] | None = None) -> None:
    validator = Draft202012Validator(schema) if schema is not None else _VALIDATOR
    validator.validate(data)


def validate_report(report: QualityReport) -> None:
    try:
        _VALIDATOR.validate(report.to_dict())
    except ValidationError as exc:
        raise ValueError(f"report does not match schema: {exc.message}") from exc
