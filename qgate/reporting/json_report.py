"""JSON report writer and loader."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from jsonschema import ValidationError

from ..errors import ReportError, ReportNotFoundError
from ..models import QualityReport
from .schema import SCHEMA
from .validate import validate_dict


def write_json_report(report: QualityReport, path: Path) -> None:
    data = serialize_report(report)
    validate_dict(data, SCHEMA)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def serialize_report(report: QualityReport) -> Dict[str, Any]:
    return report.to_dict()


def load_report(path: Path) -> QualityReport:
    """Read a persisted report; a missing file is a fatal precondition."""
    path = Path(path)
    if not path.is_file():
        raise ReportNotFoundError(
            f"Quality report not found at {path}. Run 'qgate report' first."
        )
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ReportError(f"Could not read quality report {path}: {exc}") from exc
    try:
        validate_dict(data, SCHEMA)
    except ValidationError as exc:
        raise ReportError(f"Quality report {path} is malformed: {exc.message}") from exc
    return QualityReport.from_dict(data)
