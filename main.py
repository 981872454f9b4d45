"""
Impact Heatmap - Main Entry Point

Loads a model and its result from a data directory, applies the
configuration encoded in a page URL, and prints the sector ranking.

Usage:
    python main.py --data data/demo
    python main.py --data data/demo --url "page.html#indicators=GHG&year=2020"
    python main.py --data data/demo --filter steel --count 5
"""

from __future__ import annotations
import asyncio
import argparse
import sys
from pathlib import Path

from rich.console import Console

from config.config_manager import ConfigManager
from src.application import UrlConfigTransmitter
from src.domain.exceptions import FatalError, RecoverableError
from src.domain.services.heatmap import HeatmapResult
from src.infrastructure.adapters import FileModel
from src.infrastructure.location import MemoryLocationProvider
from src.presentation import RankingTableWidget
from src.utils import flush_all_loggers, get_logger, new_cycle, set_log_timezone, shutdown_logging
from src.utils.logging_setup import setup_category_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Impact Heatmap",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --data data/demo
  python main.py --data data/demo --url "page.html?model=demo#indicators=GHG,WATER"
  python main.py --data data/demo --script "widgets.js#year=2020" --count 3
        """
    )

    parser.add_argument(
        "--env",
        type=str,
        default="dev",
        choices=["dev", "prod", "test"],
        help="Environment to run in (default: dev)"
    )

    parser.add_argument(
        "--config-dir",
        type=str,
        default="config",
        help="Directory holding base.yaml and {env}.yaml (default: config)"
    )

    parser.add_argument(
        "--data",
        type=str,
        required=True,
        help="Data directory with model.yaml and result.yaml/json/csv"
    )

    parser.add_argument(
        "--url",
        type=str,
        default="",
        help="Page URL carrying the configuration in its query and fragment"
    )

    parser.add_argument(
        "--script",
        type=str,
        action="append",
        default=[],
        help="URL of an included script (repeatable, lower priority than --url)"
    )

    parser.add_argument(
        "--count",
        type=int,
        help="Number of sectors to show (default: heatmap.default_ranking_count)"
    )

    parser.add_argument(
        "--filter",
        type=str,
        default="",
        help="Only rank sectors whose name contains this text"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging (DEBUG level for all categories)"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set log level (default: from config, ignored if --verbose is set)"
    )

    parser.add_argument(
        "--no-console-log",
        action="store_true",
        help="Do not echo warnings to stderr"
    )

    return parser.parse_args(argv)


async def main_async(args: argparse.Namespace, console: Console | None = None) -> int:
    """Main async entry point. Returns the process exit code."""
    config = ConfigManager(config_dir=args.config_dir, env=args.env).load()

    log_tz = config.logging.timezone
    set_log_timezone(None if not log_tz or log_tz.lower() == "local" else log_tz)

    category_loggers = setup_category_logging(
        env=args.env,
        log_dir=config.logging.log_dir,
        level=args.log_level or config.logging.level,
        console=not args.no_console_log,
        verbose=args.verbose,
        file_output=config.logging.file,
    )
    logger = category_loggers["system"]
    console = console or Console()

    with new_cycle() as cycle_id:
        logger.info(f"[{cycle_id}] Starting heatmap run", extra={"data": {"env": args.env, "data": args.data}})

        model = FileModel(Path(args.data))
        try:
            result = await model.result()
            indicators = await model.indicators()
            heatmap = await HeatmapResult.from_model(model, result)
        except RecoverableError as e:
            logger.error(f"Cannot build heatmap: {e}")
            console.print(f"[red]Cannot build heatmap:[/red] {e}")
            return 1

        location = MemoryLocationProvider(args.url, script_urls=args.script)
        transmitter = UrlConfigTransmitter(location, with_scripts=config.transmitter.with_scripts)
        if model.model_id:
            transmitter.update_if_absent({"model": model.model_id})
        await location.dispatch_pending()

        widget = RankingTableWidget(
            heatmap,
            indicators,
            count=args.count if args.count is not None else config.heatmap.default_ranking_count,
            name_filter=args.filter,
            share_precision=config.display.share_precision,
            show_shares=config.display.show_shares,
            console=console,
        )
        await transmitter.join(widget)
        await widget.mark_ready()
        await location.dispatch_pending()

        console.print(f"[dim]Shareable URL:[/dim] {location.current_url()}")
        logger.info(f"[{cycle_id}] Heatmap run finished")
    return 0


def main() -> None:
    """Main entry point."""
    args = parse_args()

    try:
        exit_code = asyncio.run(main_async(args))
    except KeyboardInterrupt:
        print("Shutdown requested")
        exit_code = 0
    except FatalError as e:
        get_logger(__name__).critical(f"Fatal error: {e}")
        print(f"Fatal error: {e}")
        exit_code = 2
    finally:
        flush_all_loggers()
        shutdown_logging()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
