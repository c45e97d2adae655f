"""Command-line entry point."""
import argparse
import asyncio
import logging
import signal
import sys
from typing import List, Optional

from .config import settings
from .renderer import ConsoleRenderer
from .schemas import DowntimeReport
from .services import (
    InitialHealthCheckError,
    MonitorService,
    TargetsFileError,
    build_report,
    load_targets,
)
from .utils.cancellation import CancellationToken

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="downtime-benchmarker",
        description="Measure service downtime during maintenance windows",
    )
    parser.add_argument(
        "--target-urls",
        required=True,
        metavar="FILE",
        help="Path to the YAML targets file",
    )
    parser.add_argument(
        "--check-interval",
        type=float,
        default=settings.check_interval,
        help="Seconds between checks (default: %(default)s)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=settings.timeout,
        help="Per-check timeout in seconds (default: %(default)s)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the final report as JSON",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging level (default: %(default)s)",
    )
    return parser


def install_signal_handlers(token: CancellationToken):
    """Cancel the token on SIGINT/SIGTERM."""
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, token.cancel)
        except (NotImplementedError, RuntimeError):
            # Windows event loops have no add_signal_handler
            signal.signal(sig, lambda *_: token.cancel())


async def benchmark(
    monitor: MonitorService,
    renderer: ConsoleRenderer,
    token: CancellationToken,
    handle_signals: bool = True,
) -> DowntimeReport:
    """Run the initial check, monitor until cancelled and build the report.

    Raises InitialHealthCheckError if any target is unhealthy up front.
    """
    renderer.initial_check_started()
    try:
        status = await monitor.initial_check()
    except InitialHealthCheckError as e:
        renderer.initial_results(monitor.targets, e.status)
        raise
    renderer.initial_results(monitor.targets, status)
    renderer.monitoring_started(monitor.check_interval, monitor.timeout)

    if handle_signals:
        install_signal_handlers(token)

    states = await monitor.run(token, on_tick=lambda s: renderer.tick(monitor.targets, s))
    return build_report(states)


async def main(argv: Optional[List[str]] = None) -> int:
    """Run the benchmarker and return the process exit status."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.check_interval <= 0 or args.timeout <= 0:
        parser.error("--check-interval and --timeout must be positive")

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    renderer = ConsoleRenderer()

    try:
        targets = load_targets(args.target_urls)
    except TargetsFileError as e:
        renderer.error(str(e))
        return 1

    renderer.loaded(len(targets), args.target_urls)

    monitor = MonitorService(targets, args.check_interval, args.timeout)
    try:
        report = await benchmark(monitor, renderer, CancellationToken())
    except InitialHealthCheckError as e:
        logger.error(str(e))
        renderer.error(
            "Some targets failed the initial health check. Fix them before benchmarking."
        )
        return 1

    if args.json:
        print(report.model_dump_json(indent=2))
    else:
        renderer.report(report)
    return 0


def run():
    """Console script entry point."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
