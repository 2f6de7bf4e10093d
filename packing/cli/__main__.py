from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from packing.config.loader import ConfigError, PackingConfig, load_config
from packing.excel.reader import ExcelRowSource
from packing.excel.writer import ExcelCellWriter
from packing.logging.error_log import ErrorLogBuffer
from packing.logging.init import log_summary, setup_logging
from packing.models.cell_write import UpdatePayload
from packing.models.filter_criteria import FilterCriteria
from packing.services.collaborators import CollaboratorError
from packing.services.packing_service import PackingResult, PackingService
from packing.services.planner import ValidationError
from packing.services.stats import format_stats

"""CLI entrypoint.

Subcommands:
- list:   every record of the packing sheet + SUMMARY stats line
- search: filtered records (date / product / status / quantity range / paging)
- update: mark a row as packed (location, quantity, user)

Config path resolution: --config > PACKING_CONFIG (.env honoured) > config/packing.yml
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_VALIDATION = 2

DEFAULT_CONFIG_PATH = Path("config/packing.yml")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="packing", description="Packing sheet records / updates")
    p.add_argument("--config", type=Path, default=None, help="Path to packing YAML config")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List all packing records")

    s = sub.add_parser("search", help="Search packing records")
    s.add_argument("--date", default=None, help="Manufacture date (calendar day)")
    s.add_argument("--product", default=None, help="Seasoning / product substring")
    s.add_argument("--status", default=None, help="未処理 | 完了")
    s.add_argument("--quantity-min", default=None)
    s.add_argument("--quantity-max", default=None)
    s.add_argument("--limit", default=None)
    s.add_argument("--offset", default=None)

    u = sub.add_parser("update", help="Mark a row as packed")
    u.add_argument("row", type=int, help="Sheet row number (rowIndex)")
    u.add_argument("--location", required=True)
    u.add_argument("--quantity", required=True)
    u.add_argument("--user", default=None)
    return p.parse_args(argv)


def _resolve_config_path(cli_value: Path | None) -> Path:
    if cli_value is not None:
        return cli_value
    env_value = os.getenv("PACKING_CONFIG")
    return Path(env_value) if env_value else DEFAULT_CONFIG_PATH


def _build_service(cfg: PackingConfig, error_log: ErrorLogBuffer) -> PackingService:
    return PackingService(
        cfg,
        ExcelRowSource(cfg.workbook, cfg.sheet_name),
        ExcelCellWriter(cfg.workbook, cfg.sheet_name),
        error_log=error_log,
    )


def _print_result(result: PackingResult) -> None:
    print(json.dumps([r.to_dict() for r in result.records], ensure_ascii=False, indent=2))
    log_summary(format_stats(result.stats))


def main(argv: list[str] | None = None) -> int:
    # NOTE: 空リスト [] を渡されたときに sys.argv が混入しないよう None のときのみ読む
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    logger = setup_logging(debug=args.debug)
    load_dotenv(dotenv_path=Path(".env"), override=False)

    config_path = _resolve_config_path(args.config)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL
    logger.debug(f"config: {config_path} workbook={cfg.workbook} sheet={cfg.sheet_name}")

    error_log = ErrorLogBuffer()
    service = _build_service(cfg, error_log)
    try:
        if args.command == "list":
            _print_result(service.extract_all())
        elif args.command == "search":
            criteria = FilterCriteria.from_query({
                "date": args.date,
                "product": args.product,
                "status": args.status,
                "quantity_min": args.quantity_min,
                "quantity_max": args.quantity_max,
                "limit": args.limit,
                "offset": args.offset,
            })
            _print_result(service.search(criteria))
        else:
            payload = UpdatePayload(location=args.location, quantity=args.quantity, user=args.user)
            writes = service.apply_update(args.row, payload)
            for w in writes:
                logger.info(f"wrote {w.range_name(cfg.sheet_name)} = {w.value}")
    except ValidationError as e:
        logger.error(f"update: {e}")
        return EXIT_VALIDATION
    except CollaboratorError as e:
        logger.error(f"{args.command}: {e.message}")
        if e.written:
            logger.warning(f"partially written: {', '.join(e.written)}")
        return EXIT_FATAL
    finally:
        path = error_log.flush()
        if path is not None:
            logger.info(f"error log: {path}")
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
