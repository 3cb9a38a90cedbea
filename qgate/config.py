"""Configuration loading for qgate."""
from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .errors import ConfigError

METRICS = ("fileSize", "duplication", "testCoverage", "typescript", "performance")
KINDS = ("components", "screens", "contexts", "utils", "services")

DEFAULT_CONFIG = {
    "paths": {
        "source_root": "src",
        "test_roots": ["src", "__tests__"],
        "ignore_dirs": ["node_modules", "build", "dist", "coverage"],
        "extensions": [".js", ".jsx", ".ts", ".tsx"],
    },
    "sizes": {
        "limits": {
            "components": 200,
            "screens": 300,
            "contexts": 200,
            "utils": 150,
            "services": 200,
            "default": 300,
        },
        "penalty": 10,
        "high_severity_over": 5,
    },
    "weights": {
        "fileSize": 0.20,
        "duplication": 0.25,
        "testCoverage": 0.30,
        "typescript": 0.15,
        "performance": 0.10,
    },
    "duplication": {
        "min_line_length": 11,
        "min_name_length": 4,
        "penalty": 10,
        "issue_over": 10,
    },
    "coverage": {
        "command": "npm test -- --coverage --passWithNoTests --watchAll=false --silent",
        "marker": r"All files\s+\|\s+(\d+(?:\.\d+)?)",
        "timeout": 30,
        "low_coverage": 50,
    },
    "typing": {
        "typed_extensions": [".ts", ".tsx"],
        "untyped_extensions": [".js", ".jsx"],
        "adoption_floor": 50,
        "candidate_cap": 10,
    },
    "performance": {
        "penalty": 5,
        "inline_style_limit": 3,
        "report_cap": 10,
    },
    "gate": {
        "thresholds": {
            "overall": 70,
            "fileSize": 60,
            "duplication": 70,
            "testCoverage": 60,
            "typescript": 50,
            "performance": 60,
        },
        "warning_band": 10,
        "ci_env_var": "CI",
        "soft_fail_locally": True,
    },
    "report": {
        "format": ["json", "md"],
        "out_dir": ".",
        "json_name": "quality-report.json",
        "md_name": "quality-report.md",
    },
}


@dataclass
class PathsConfig:
    source_root: str
    test_roots: List[str]
    ignore_dirs: List[str]
    extensions: List[str]


@dataclass
class SizeConfig:
    limits: Dict[str, int]
    penalty: float
    high_severity_over: int


@dataclass
class DuplicationConfig:
    min_line_length: int
    min_name_length: int
    penalty: float
    issue_over: float


@dataclass
class CoverageConfig:
    command: str
    marker: str
    timeout: int
    low_coverage: float


@dataclass
class TypingConfig:
    typed_extensions: List[str]
    untyped_extensions: List[str]
    adoption_floor: float
    candidate_cap: int


@dataclass
class PerformanceConfig:
    penalty: float
    inline_style_limit: int
    report_cap: int


@dataclass
class GateConfig:
    thresholds: Dict[str, float]
    warning_band: float
    ci_env_var: str
    soft_fail_locally: bool


@dataclass
class ReportConfig:
    format: List[str]
    out_dir: str
    json_name: str
    md_name: str


@dataclass
class Config:
    paths: PathsConfig
    sizes: SizeConfig
    weights: Dict[str, float]
    duplication: DuplicationConfig
    coverage: CoverageConfig
    typing: TypingConfig
    performance: PerformanceConfig
    gate: GateConfig
    report: ReportConfig

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "Config":
        merged = _deep_merge(DEFAULT_CONFIG, data)
        try:
            config = cls._build(merged)
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise ConfigError(f"invalid configuration value ({type(exc).__name__}: {exc})") from exc
        config.check()
        return config

    @classmethod
    def _build(cls, merged: Mapping[str, Any]) -> "Config":
        paths = merged["paths"]
        sizes = merged["sizes"]
        duplication = merged["duplication"]
        coverage = merged["coverage"]
        typing = merged["typing"]
        performance = merged["performance"]
        gate = merged["gate"]
        report = merged["report"]
        return cls(
            paths=PathsConfig(
                source_root=str(paths["source_root"]),
                test_roots=list(paths["test_roots"]),
                ignore_dirs=list(paths["ignore_dirs"]),
                extensions=[str(ext).lower() for ext in paths["extensions"]],
            ),
            sizes=SizeConfig(
                limits={k: int(v) for k, v in sizes["limits"].items()},
                penalty=float(sizes["penalty"]),
                high_severity_over=int(sizes["high_severity_over"]),
            ),
            weights={k: float(v) for k, v in merged["weights"].items()},
            duplication=DuplicationConfig(
                min_line_length=int(duplication["min_line_length"]),
                min_name_length=int(duplication["min_name_length"]),
                penalty=float(duplication["penalty"]),
                issue_over=float(duplication["issue_over"]),
            ),
            coverage=CoverageConfig(
                command=str(coverage["command"]),
                marker=str(coverage["marker"]),
                timeout=int(coverage["timeout"]),
                low_coverage=float(coverage["low_coverage"]),
            ),
            typing=TypingConfig(
                typed_extensions=[str(ext).lower() for ext in typing["typed_extensions"]],
                untyped_extensions=[str(ext).lower() for ext in typing["untyped_extensions"]],
                adoption_floor=float(typing["adoption_floor"]),
                candidate_cap=int(typing["candidate_cap"]),
            ),
            performance=PerformanceConfig(
                penalty=float(performance["penalty"]),
                inline_style_limit=int(performance["inline_style_limit"]),
                report_cap=int(performance["report_cap"]),
            ),
            gate=GateConfig(
                thresholds={k: float(v) for k, v in gate["thresholds"].items()},
                warning_band=float(gate["warning_band"]),
                ci_env_var=str(gate["ci_env_var"]),
                soft_fail_locally=bool(gate["soft_fail_locally"]),
            ),
            report=ReportConfig(
                format=list(report["format"]),
                out_dir=str(report["out_dir"]),
                json_name=str(report["json_name"]),
                md_name=str(report["md_name"]),
            ),
        )

    @classmethod
    def load(cls, path: Optional[Path]) -> "Config":
        if path is None:
            return cls.from_dict({})
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"cannot read configuration file {path}: {exc.strerror or exc}") from exc
        try:
            data = _safe_yaml_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(f"configuration file {path} is not valid YAML: {exc}") from exc
        return cls.from_dict(data)

    def check(self) -> None:
        """Raise ConfigError when the scoring and gating tables disagree."""
        weighted = set(self.weights)
        gated = set(self.gate.thresholds) - {"overall"}
        if "overall" not in self.gate.thresholds:
            raise ConfigError("gate.thresholds must define an 'overall' threshold")
        if weighted != gated:
            missing = sorted(weighted - gated)
            extra = sorted(gated - weighted)
            raise ConfigError(
                f"weights and gate.thresholds disagree: no threshold for {missing}, no weight for {extra}"
            )
        unmeasured = sorted(weighted - set(METRICS))
        if unmeasured:
            raise ConfigError(f"no analyzer produces metrics {unmeasured}")
        total = sum(self.weights.values())
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ConfigError(f"weights must sum to 1.0, got {total:.4f}")
        unknown = set(self.sizes.limits) - set(KINDS) - {"default"}
        if unknown or "default" not in self.sizes.limits:
            raise ConfigError(
                f"sizes.limits must cover 'default' and only known kinds, got {sorted(self.sizes.limits)}"
            )


def _deep_merge(base: Mapping[str, object], override: Mapping[str, object]) -> Dict[str, object]:
    result: Dict[str, object] = {}
    for key, value in base.items():
        result[key] = value
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def dump_default_yaml() -> str:
    """Return the default configuration as YAML."""
    return yaml.safe_dump(DEFAULT_CONFIG, sort_keys=False)


def _safe_yaml_load(text: str) -> Dict[str, object]:
    if not text.strip():
        return {}
    loaded = yaml.safe_load(text)
    if loaded is None:
        return {}
    if not isinstance(loaded, Mapping):
        raise ConfigError("configuration file must contain a mapping at the top level")
    return dict(loaded)
