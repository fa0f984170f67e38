"""Aggregate run_rand JSON reports into CSV and Markdown distribution sheets."""

from __future__ import annotations

import argparse
import csv
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

PROJECT_ROOT = Path(__file__).resolve().parents[1]
REPORT_DIR = PROJECT_ROOT / "reports"
DOCS_DIR = PROJECT_ROOT / "docs" / "reports"

CSV_NAME = "report_summary.csv"
MD_NAME = "report_summary.md"


@dataclass
class RunSummary:
    name: str
    dist: str
    seed: int
    range_min: int
    range_max: int
    threads: int
    count: int
    sample_min: int
    sample_max: int
    mean: float
    variance: float
    out_of_range: int
    mode: Optional[int]
    unique_drawn: int

    @classmethod
    def from_payload(cls, name: str, payload: dict) -> "RunSummary":
        config = payload["config"]
        summary = payload["summary"]
        histogram = payload.get("histogram") or {}

        mode = None
        if histogram:
            mode = int(max(histogram, key=lambda value: (histogram[value], -int(value))))

        return cls(
            name=name,
            dist=config["dist"],
            seed=config["seed"],
            range_min=payload["range"]["min"],
            range_max=payload["range"]["max"],
            threads=payload.get("threads", 1),
            count=summary["count"],
            sample_min=summary["min"],
            sample_max=summary["max"],
            mean=summary["mean"],
            variance=summary["variance"],
            out_of_range=summary["out_of_range"],
            mode=mode,
            unique_drawn=len(payload.get("unique", [])),
        )

    def as_csv_row(self) -> List[str]:
        return [
            self.name,
            self.dist,
            str(self.seed),
            str(self.range_min),
            str(self.range_max),
            str(self.threads),
            str(self.count),
            str(self.sample_min),
            str(self.sample_max),
            f"{self.mean:.4f}",
            f"{self.variance:.4f}",
            str(self.out_of_range),
            "" if self.mode is None else str(self.mode),
            str(self.unique_drawn),
        ]


def load_runs(report_dir: Path) -> List[RunSummary]:
    paths = sorted(report_dir.glob("*.json")) if report_dir.is_dir() else []
    if not paths:
        raise FileNotFoundError(f"No JSON reports found in {report_dir}")

    runs: List[RunSummary] = []
    for path in paths:
        payload = json.loads(path.read_text())
        runs.append(RunSummary.from_payload(path.stem, payload))
    return runs


def write_csv(runs: Iterable[RunSummary], out_dir: Path) -> Path:
    csv_path = out_dir / CSV_NAME
    header = [
        "run_name",
        "dist",
        "seed",
        "range_min",
        "range_max",
        "threads",
        "count",
        "sample_min",
        "sample_max",
        "mean",
        "variance",
        "out_of_range",
        "mode",
        "unique_drawn",
    ]
    with csv_path.open("w", newline="") as handle:
        writer = csv.writer(handle)
        writer.writerow(header)
        for run in runs:
            writer.writerow(run.as_csv_row())
    return csv_path


def write_md(runs: Iterable[RunSummary], out_dir: Path) -> Path:
    md_path = out_dir / MD_NAME
    table_header = (
        "| Run | Distribution | Range | Samples | Mean | Variance | Out of range |\n"
        "| --- | --- | --- | --- | --- | --- | --- |"
    )
    table_rows = [
        "| {name} | {dist} | {lo}..{hi} | {count} | {mean:.2f} | {var:.2f} | {oor} |".format(
            name=run.name,
            dist=run.dist,
            lo=run.range_min,
            hi=run.range_max,
            count=run.count,
            mean=run.mean,
            var=run.variance,
            oor=run.out_of_range,
        )
        for run in runs
    ]

    content = ["# Random numbers report summary", "", table_header, *table_rows]
    md_path.write_text("\n".join(content) + "\n")
    return md_path


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Summarize run_rand JSON reports")
    parser.add_argument("--reports", type=Path, default=REPORT_DIR, help="Directory of JSON reports")
    parser.add_argument("--out", type=Path, default=DOCS_DIR, help="Directory for the summary sheets")
    args = parser.parse_args(argv)

    runs = load_runs(args.reports)
    args.out.mkdir(parents=True, exist_ok=True)
    write_csv(runs, args.out)
    write_md(runs, args.out)


if __name__ == "__main__":
    main()
