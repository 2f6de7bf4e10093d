from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, tzinfo
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.column_layout import DEFAULT_COLUMN_LETTERS, ColumnLayout, LayoutError
from ..services.extractor import DEFAULT_COMPLETION_MARKER
from ..services.filters import DEFAULT_TEXT_FIELDS
from ..services.planner import DEFAULT_USER
from ..sheets.coercion import parse_calendar_day

"""Config loader.

Responsibilities:
- Load YAML config (default ``config/packing.yml``)
- Validate against the bundled JSON schema (config_schema.json)
- Apply defaults (timezone=UTC, sheet 修正用シート, marker 完了, user system)
- Merge configured column letters over the default layout
- Keep optional header labels; those fields are resolved from the sheet header at read time

The resulting PackingConfig is built once at process start and passed down;
nothing below the CLI reads the process environment.
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")

DEFAULT_SHEET_NAME = "修正用シート"
DEFAULT_TIMEZONE = "UTC"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class PackingConfig:
    workbook: Path
    layout: ColumnLayout
    sheet_name: str = DEFAULT_SHEET_NAME
    timezone: str = DEFAULT_TIMEZONE
    completion_marker: str = DEFAULT_COMPLETION_MARKER
    default_user: str = DEFAULT_USER
    manufacture_date_from: date | None = None  # これより前の製造日は一覧から除外
    text_fields: tuple[str, ...] = DEFAULT_TEXT_FIELDS
    storage_locations: tuple[str, ...] = field(default_factory=tuple)
    # 指定した項目は 1 行目のヘッダ文字列から列位置を解決する (columns より優先)
    header_labels: Mapping[str, str] = field(default_factory=dict)

    @property
    def tz(self) -> tzinfo:
        return ZoneInfo(self.timezone)


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing / not JSON, or data violating it
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _normalize_yaml_dates(data: dict[str, Any]) -> dict[str, Any]:
    # YAML は未クォートの 2025-08-08 を date 型にするため文字列へ戻す
    value = data.get("manufacture_date_from")
    if isinstance(value, date):
        data = {**data, "manufacture_date_from": value.isoformat()}
    return data


def config_from_dict(data: dict[str, Any], base_dir: Path | None = None) -> PackingConfig:
    """Build a PackingConfig from already-parsed config data.

    ``workbook`` is resolved relative to ``base_dir`` when it is relative.
    """
    data = _normalize_yaml_dates(data)
    _validate_config_schema(data)

    tz_name = data.get("timezone", DEFAULT_TIMEZONE)
    try:
        ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"unknown timezone: {tz_name}") from e

    letters = {**DEFAULT_COLUMN_LETTERS, **(data.get("columns") or {})}
    try:
        layout = ColumnLayout.from_letters(letters)
    except LayoutError as e:
        raise ConfigError(f"invalid column layout: {e}") from e

    cutoff = None
    raw_cutoff = data.get("manufacture_date_from")
    if raw_cutoff:
        cutoff = parse_calendar_day(raw_cutoff)
        if cutoff is None:
            raise ConfigError(f"invalid manufacture_date_from: {raw_cutoff}")

    workbook = Path(data["workbook"])
    if base_dir is not None and not workbook.is_absolute():
        workbook = base_dir / workbook

    return PackingConfig(
        workbook=workbook,
        layout=layout,
        sheet_name=data.get("sheet_name", DEFAULT_SHEET_NAME),
        timezone=tz_name,
        completion_marker=data.get("completion_marker", DEFAULT_COMPLETION_MARKER),
        default_user=data.get("default_user", DEFAULT_USER),
        manufacture_date_from=cutoff,
        text_fields=tuple(data.get("text_fields") or DEFAULT_TEXT_FIELDS),
        storage_locations=tuple(data.get("storage_locations") or ()),
        header_labels=dict(data.get("header_labels") or {}),
    )


def load_config(path: Path) -> PackingConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")
    # workbook の相対パスはカレントディレクトリ基準 (CLI 実行位置)
    return config_from_dict(data)
