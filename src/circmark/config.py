# src/circmark/config.py
"""
Configuration for the layout engine and the SVG adapter.

Defaults live on the frozen dataclasses below; a YAML file may override any of
them. The file is validated against a Cerberus schema before use, and every
violation is reported at once through a diagnosable `ConfigError`.

Example file::

    layout:
      parallel_spacing: 30
      branch_alignment: center
    svg:
      margin: 40
"""
import logging
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

import cerberus
import yaml

from .errors import DiagnosableError, format_diagnostic_report
from .geometry import Point

logger = logging.getLogger(__name__)

BRANCH_ALIGNMENTS = ("left", "center")


@dataclass(frozen=True)
class LayoutConfig:
    """Spacing constants used by the layout engine."""
    parallel_spacing: float = 20.0   # vertical gap between parallel branches
    shunt_stub: float = 80.0         # minimum width of a twoport shunt slot
    shunt_lead: float = 20.0         # wire from the signal line down to a shunt target
    rail_clearance: float = 20.0     # gap between the lowest part and the return rail
    origin_x: float = 0.0
    origin_y: float = 0.0
    branch_alignment: str = "left"   # where a narrower parallel branch sits: left or center
    validate: bool = False           # run the alignment validator after every layout

    @property
    def origin(self) -> Point:
        return Point(self.origin_x, self.origin_y)


@dataclass(frozen=True)
class SvgConfig:
    """Styling constants used by the SVG adapter."""
    margin: float = 30.0
    stroke: str = "black"
    stroke_width: float = 2.0
    font_size: float = 12.0
    font_family: str = "sans-serif"
    junction_radius: float = 3.0
    terminal_radius: float = 5.0
    show_labels: bool = True


@dataclass(frozen=True)
class CircmarkConfig:
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    svg: SvgConfig = field(default_factory=SvgConfig)


@dataclass(eq=False)
class ConfigError(DiagnosableError):
    """
    Raised when a configuration file cannot be read, is not valid YAML, or does
    not conform to the configuration schema.
    """
    details: str
    file_path: Optional[Path] = None
    errors: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        Exception.__init__(self, str(self))

    def __str__(self):
        where = f" in file '{self.file_path}'" if self.file_path else ""
        if not self.errors:
            return f"Configuration error{where}: {self.details}"
        error_lines = [f"  - {line}" for line in _flatten_errors(self.errors)]
        return f"Configuration error{where}: {self.details}\n" + "\n".join(error_lines)

    def get_diagnostic_report(self) -> str:
        details = self.details
        if self.errors:
            error_list_str = "\n".join(f"  - {line}" for line in _flatten_errors(self.errors))
            details = f"{details}\nSee details for the issue(s) below:\n\n{error_list_str}"
        return format_diagnostic_report(
            error_type="Configuration Error",
            details=details,
            suggestion="Correct the listed keys. Only the 'layout' and 'svg' sections with their documented keys are allowed.",
            context={'source_file': self.file_path},
        )


def _flatten_errors(errors: Dict[str, Any], prefix: str = "") -> list:
    """Turns Cerberus' nested error tree into 'section.key: message' lines."""
    lines = []
    for key, value in sorted(errors.items(), key=lambda item: str(item[0])):
        name = f"{prefix}{key}"
        for entry in value:
            if isinstance(entry, dict):
                lines.extend(_flatten_errors(entry, prefix=f"{name}."))
            else:
                lines.append(f"Field '{name}': {entry}")
    return lines


_number_rule = {"type": "number", "min": 0}

_SCHEMA = {
    "layout": {
        "type": "dict",
        "required": False,
        "schema": {
            "parallel_spacing": _number_rule,
            "shunt_stub": _number_rule,
            "shunt_lead": _number_rule,
            "rail_clearance": _number_rule,
            "origin_x": {"type": "number"},
            "origin_y": {"type": "number"},
            "branch_alignment": {"type": "string", "allowed": list(BRANCH_ALIGNMENTS)},
            "validate": {"type": "boolean"},
        },
    },
    "svg": {
        "type": "dict",
        "required": False,
        "schema": {
            "margin": _number_rule,
            "stroke": {"type": "string", "empty": False},
            "stroke_width": {"type": "number", "min": 0.1},
            "font_size": {"type": "number", "min": 1},
            "font_family": {"type": "string", "empty": False},
            "junction_radius": _number_rule,
            "terminal_radius": _number_rule,
            "show_labels": {"type": "boolean"},
        },
    },
}


def config_from_dict(raw: Dict[str, Any], file_path: Optional[Path] = None) -> CircmarkConfig:
    """Validates a raw configuration mapping and merges it over the defaults."""
    validator = cerberus.Validator(_SCHEMA)
    validator.allow_unknown = False
    if not validator.validate(raw):
        raise ConfigError(
            details="The configuration does not conform to the required schema.",
            file_path=file_path,
            errors=validator.errors,
        )
    document = validator.document
    layout = _merge(LayoutConfig(), document.get("layout") or {})
    svg = _merge(SvgConfig(), document.get("svg") or {})
    return CircmarkConfig(layout=layout, svg=svg)


def _merge(defaults, overrides: Dict[str, Any]):
    known = {f.name: f.type for f in fields(defaults)}
    values = {}
    for key, value in overrides.items():
        # YAML integers become floats where the dataclass declares a float.
        values[key] = float(value) if known[key] in (float, "float") else value
    return replace(defaults, **values)


def load_config(path: Union[str, Path]) -> CircmarkConfig:
    """
    Loads and validates a YAML configuration file.

    Raises:
        ConfigError: If the file is missing, unreadable, not valid YAML, or
                     violates the schema.
    """
    source = Path(path)
    if not source.is_file():
        raise ConfigError(details=f"Configuration file not found at path: {source}", file_path=source)
    try:
        with source.open("r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except PermissionError as e:
        raise ConfigError(details=f"Permission denied when trying to read file: {e}", file_path=source) from e
    except yaml.YAMLError as e:
        raise ConfigError(details=f"Invalid YAML syntax: {e}", file_path=source) from e

    if content is None:
        logger.info(f"Configuration file {source} is empty; using defaults.")
        return CircmarkConfig()
    if not isinstance(content, dict):
        raise ConfigError(details="The root of the configuration file must be a mapping.", file_path=source)

    config = config_from_dict(content, file_path=source)
    logger.info(f"Loaded configuration from {source}")
    return config
