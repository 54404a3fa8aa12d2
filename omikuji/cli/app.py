from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import pandas as pd
from dotenv import load_dotenv

from omikuji.config.loader import ConfigError, resolve_config
from omikuji.dataset.loader import FileFortuneProvider, load_dataset
from omikuji.dataset.parser import MalformedInputError, parse_delimited
from omikuji.export.image import ExportError, PillowCardRenderer, export_card, export_scale
from omikuji.logging.error_log import ErrorLogBuffer
from omikuji.logging.init import log_summary, setup_logging
from omikuji.services.board import OmikujiBoard
from omikuji.services.card import build_card, render_card_text
from omikuji.services.selector import DrawSelector
from omikuji.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env, then config (YAML, optional)
- Load the fortune dataset (missing file = empty dataset)
- Draw one or more cards and print them as vertical text
- Optionally export the last drawn card as PNG
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_EXPORT_FAILURE = 2

INSPECT_SAMPLE_ROWS = 5
CARD_SEPARATOR = "-" * 24


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv (values in .env win over the process env)."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="omikuji", description="Draw an omikuji fortune card")
    p.add_argument("--config", type=Path, default=None, help="YAML config path (default: config/omikuji.yml)")
    p.add_argument("--data", type=Path, default=None, help="Fortune CSV path (overrides config)")
    p.add_argument("--seed", type=int, default=None, help="Random seed for reproducible draws")
    p.add_argument("--draws", type=int, default=1, help="Number of consecutive draws to print")
    p.add_argument("--export", action="store_true", help="Save the last drawn card as PNG")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print CSV header & first rows then exit")
    args = p.parse_args(argv)
    if args.draws < 1:
        p.error("--draws must be >= 1")
    return args


def _inspect_data(path: Path) -> int:
    try:
        text = FileFortuneProvider(path).read_text()
    except (UnicodeDecodeError, OSError) as e:
        print(f"inspect: read_error: {e}")
        return EXIT_FATAL
    if text is None:
        print(f"inspect: dataset not found: {path}")
        return EXIT_SUCCESS
    try:
        rows = parse_delimited(text)
    except MalformedInputError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    if not rows:
        print(f"inspect: empty dataset: {path}")
        return EXIT_SUCCESS

    header = rows[0]
    width = len(header)
    # 列数の揃わない行はヘッダ幅に合わせて切り詰め / 補完
    sample = [(list(r) + [""] * width)[:width] for r in rows[1 : 1 + INSPECT_SAMPLE_ROWS]]
    frame = pd.DataFrame(sample, columns=header)
    print(f"FILE: {path.name} rows={len(rows) - 1} cols={header}")
    print(frame.to_string(index=False))
    return EXIT_SUCCESS


def _record_error(error_log: ErrorLogBuffer, source: str, exc: BaseException) -> None:
    error_log.record_failure(source, exc)
    error_log.flush()


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # [] が渡された場合に sys.argv を読まないよう None のときのみ参照
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    try:
        cfg = resolve_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.debug:
        for h in logger.handlers:
            h.setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
        logger.debug("debug mode enabled")

    data_path = args.data if args.data is not None else cfg.data_path
    if args.inspect_data:
        return _inspect_data(data_path)

    error_log = ErrorLogBuffer()
    logger.info(f"Loading fortunes from: {data_path}")
    try:
        result = load_dataset(FileFortuneProvider(data_path))
    except (MalformedInputError, UnicodeDecodeError, OSError) as e:
        logger.error(f"load: {e}")
        _record_error(error_log, str(data_path), e)
        return EXIT_FATAL

    # log_summary が "SUMMARY " を付与するので本体のみ渡す
    log_summary(render_summary_line(result)[len("SUMMARY "):])

    if result.is_empty:
        logger.info("no fortunes available")
        return EXIT_SUCCESS

    seed = args.seed if args.seed is not None else cfg.seed
    board = OmikujiBoard(result.fortunes, DrawSelector(seed))
    for n in range(args.draws):
        if n:
            board.draw()
            print(CARD_SEPARATOR)
        logger.debug(f"draw {n + 1}: index={board.current_index}")
        print(render_card_text(build_card(board.active)))

    if args.export:
        export_cfg = cfg.export
        renderer = PillowCardRenderer(
            font_path=export_cfg.font_path,
            background_color=export_cfg.background_color,
        )
        try:
            path = export_card(
                board,
                export_cfg.output_directory,
                scale=export_scale(export_cfg.device_pixel_ratio, export_cfg.max_scale),
                renderer=renderer,
            )
        except ExportError as e:
            logger.error(f"export: {e}")
            _record_error(error_log, str(export_cfg.output_directory), e)
            return EXIT_EXPORT_FAILURE
        logger.info(f"exported: {path}")

    return EXIT_SUCCESS
