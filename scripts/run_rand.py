"""Command line harness for the benchmark random numbers generator."""

import argparse
import json
import logging
import statistics
import sys
import threading
from pathlib import Path
from typing import Any, Dict, List

PROJECT_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_LOG_PATH = PROJECT_ROOT / "reports" / "latest_run.json"
HISTOGRAM_MAX_VALUES = 1000

if PROJECT_ROOT.as_posix() not in sys.path:
    sys.path.insert(0, PROJECT_ROOT.as_posix())

from benchrand import RandConfigError, RandOptions, init

logger = logging.getLogger("run_rand")


def _positive_int(value: str) -> int:
    try:
        number = int(value, 0)
    except ValueError as exc:  # pragma: no cover - argparse surface ensures message
        raise argparse.ArgumentTypeError(f"Expected an integer, received '{value}'.") from exc
    if number <= 0:
        raise argparse.ArgumentTypeError("Value must be a positive integer.")
    return number


def _non_negative_int(value: str) -> int:
    try:
        number = int(value, 0)
    except ValueError as exc:  # pragma: no cover - argparse surface ensures message
        raise argparse.ArgumentTypeError(f"Expected an integer, received '{value}'.") from exc
    if number < 0:
        raise argparse.ArgumentTypeError("Value must not be negative.")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate benchmark random numbers and report their distribution"
    )
    defaults = RandOptions()
    help_text = {name: f"{text} [{default}]" for name, text, default in RandOptions.describe()}

    group = parser.add_argument_group("Pseudo-Random Numbers Generator options")
    group.add_argument(
        "--rand-type",
        default=defaults.rand_type,
        help=help_text["rand-type"],
    )
    group.add_argument(
        "--rand-spec-iter",
        type=int,
        default=defaults.rand_spec_iter,
        help=help_text["rand-spec-iter"],
    )
    group.add_argument(
        "--rand-spec-pct",
        type=int,
        default=defaults.rand_spec_pct,
        help=help_text["rand-spec-pct"],
    )
    group.add_argument(
        "--rand-spec-res",
        type=int,
        default=defaults.rand_spec_res,
        help=help_text["rand-spec-res"],
    )
    group.add_argument(
        "--rand-seed",
        type=lambda value: int(value, 0),
        default=defaults.rand_seed,
        help=help_text["rand-seed"] + " (accepts decimal or 0x-prefixed hex)",
    )
    group.add_argument(
        "--rand-pareto-h",
        type=float,
        default=defaults.rand_pareto_h,
        help=help_text["rand-pareto-h"],
    )

    parser.add_argument("--min", dest="low", type=int, default=1, help="Lower bound of the range")
    parser.add_argument("--max", dest="high", type=int, default=100, help="Upper bound of the range")
    parser.add_argument(
        "--count",
        type=_positive_int,
        default=1000,
        help="Number of samples drawn by each worker",
    )
    parser.add_argument(
        "--threads",
        type=_positive_int,
        default=1,
        help="Number of worker threads, each with its own generator",
    )
    parser.add_argument(
        "--unique",
        type=_non_negative_int,
        default=0,
        help="Number of unique ids to draw from the shared counter",
    )
    parser.add_argument(
        "--template",
        default="###########-###########-###########-###########",
        help="String template: '#' becomes a digit, '@' a lowercase letter",
    )
    parser.add_argument(
        "--strings",
        type=_non_negative_int,
        default=0,
        help="Number of strings to fill from --template",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging on stderr")
    parser.add_argument(
        "--log",
        nargs="?",
        type=Path,
        const=DEFAULT_LOG_PATH,
        help=(
            "Persist the JSON report to disk. Provide a path or pass the flag alone to use "
            "reports/latest_run.json under the repository root."
        ),
    )
    return parser


def _summarize(samples: List[int], low: int, high: int) -> Dict[str, Any]:
    return {
        "count": len(samples),
        "min": min(samples),
        "max": max(samples),
        "mean": round(statistics.fmean(samples), 4),
        "variance": round(statistics.pvariance(samples), 4),
        "out_of_range": sum(1 for value in samples if value < low or value > high),
    }


def _histogram(samples: List[int], low: int, high: int) -> Dict[str, int]:
    counts = {value: 0 for value in range(low, high + 1)}
    for value in samples:
        counts[value] = counts.get(value, 0) + 1
    return {str(value): counts[value] for value in sorted(counts)}


def run(
    options: RandOptions,
    low: int,
    high: int,
    count: int,
    threads: int,
    unique: int = 0,
    template: str = "",
    strings: int = 0,
) -> Dict[str, Any]:
    """Draw samples from `threads` workers and build the JSON report."""

    if low > high:
        raise ValueError(f"--min ({low}) must not exceed --max ({high})")

    ctx = init(options)
    try:
        per_worker: List[List[int]] = [[] for _ in range(threads)]
        failures: List[BaseException] = []

        def _worker(slot: int) -> None:
            try:
                rng = ctx.thread_init()
                out = per_worker[slot]
                for _ in range(count):
                    out.append(ctx.sample_default(rng, low, high))
            except Exception as exc:
                failures.append(exc)

        workers = [
            threading.Thread(target=_worker, args=(slot,), name=f"rand-worker-{slot}")
            for slot in range(threads)
        ]
        for worker in workers:
            worker.start()
        for worker in workers:
            worker.join()

        if failures:
            raise RuntimeError(f"{len(failures)} worker(s) failed") from failures[0]
        short = [slot for slot, chunk in enumerate(per_worker) if len(chunk) != count]
        if short:
            raise RuntimeError(f"workers {short} did not produce {count} samples")

        samples = [value for chunk in per_worker for value in chunk]
        report: Dict[str, Any] = {
            "config": ctx.describe(),
            "range": {"min": low, "max": high},
            "threads": threads,
            "summary": _summarize(samples, low, high),
        }
        if high - low + 1 <= HISTOGRAM_MAX_VALUES:
            report["histogram"] = _histogram(samples, low, high)
        if unique > 0:
            report["unique"] = [ctx.sample_unique(low, high) for _ in range(unique)]
        if strings > 0:
            report["strings"] = [ctx.fill_string(ctx.rng, template) for _ in range(strings)]
    finally:
        ctx.shutdown()

    return report


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    options = RandOptions(
        rand_type=args.rand_type,
        rand_spec_iter=args.rand_spec_iter,
        rand_spec_pct=args.rand_spec_pct,
        rand_spec_res=args.rand_spec_res,
        rand_seed=args.rand_seed,
        rand_pareto_h=args.rand_pareto_h,
    )
    if args.low > args.high:
        parser.error(f"--min ({args.low}) must not exceed --max ({args.high})")

    try:
        result = run(
            options,
            low=args.low,
            high=args.high,
            count=args.count,
            threads=args.threads,
            unique=args.unique,
            template=args.template,
            strings=args.strings,
        )
    except RandConfigError:
        # already reported at CRITICAL by the config layer
        raise SystemExit(1)

    log_path: Path | None = args.log
    if log_path is not None:
        if not log_path.is_absolute():
            log_path = (PROJECT_ROOT / log_path).resolve()

        log_path.parent.mkdir(parents=True, exist_ok=True)
        log_path.write_text(json.dumps(result, indent=2))
        logger.debug("report written to %s", log_path)

    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
