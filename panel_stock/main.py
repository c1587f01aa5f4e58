#!/usr/bin/env python
"""
Panel Stock Extractor – CLI entry point.

Usage:
    # Extract records, print a preview and export them
    python -m panel_stock.main process <excel_file> [--output processed_output.xlsx]
        [--config config.yaml] [--no-preview] [--strict] [--log-level INFO]

    # Only print the extracted records
    python -m panel_stock.main preview <excel_file> [--format markdown|json]
"""

import argparse
import logging
import sys

from panel_stock.config import load_config
from panel_stock.session import ProcessorSession


def setup_logging(level_str: str = "INFO"):
    """Configure logging."""
    level = getattr(logging, level_str.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%H:%M:%S'
    )


def build_parser():
    parser = argparse.ArgumentParser(
        description="Extract wood-panel stock records from Excel workbooks"
    )
    parser.add_argument("--config", default="config.yaml",
                        help="Path to config YAML file (default: config.yaml)")
    parser.add_argument("--log-level", default=None,
                        help="Logging level: DEBUG, INFO, WARNING, ERROR")
    sub = parser.add_subparsers(dest="command", required=True)

    # ---- process ----
    p_proc = sub.add_parser("process", help="Extract records and export them")
    p_proc.add_argument("excel_file", help="Path to the input workbook (.xls, .xlsx)")
    p_proc.add_argument("--output", default=None,
                        help="Export path (default: processed_output.xlsx)")
    p_proc.add_argument("--no-preview", action="store_true",
                        help="Do not print the extracted records")
    p_proc.add_argument("--strict", action="store_true",
                        help="Fail on sections without a PACK column")

    # ---- preview ----
    p_prev = sub.add_parser("preview", help="Print the extracted records")
    p_prev.add_argument("excel_file", help="Path to the input workbook (.xls, .xlsx)")
    p_prev.add_argument("--format", choices=["markdown", "json"], default="markdown")

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    config = load_config(args.config)
    if getattr(args, "strict", False):
        config["strict_sections"] = True
    setup_logging(args.log_level or config.get("log_level", "INFO"))

    session = ProcessorSession(config)
    if not session.upload(args.excel_file):
        sys.exit(1)

    if args.command == "preview":
        print(session.render(args.format))
        return

    if not args.no_preview:
        print(session.render())
    if session.can_export:
        session.export(args.output)
    else:
        print("No records found; nothing exported.")


if __name__ == "__main__":
    main()
