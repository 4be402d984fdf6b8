from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .artifacts import DirectoryExportSink, ExportFormat, export_report
from .contracts import EDGES, InspectConfig, InspectRunResult, MisconfigurationError
from .module import run_inspect_pdf_relpath


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="pdf-margin-inspect",
        description="Measure per-page margins of a PDF, check uniformity and bleed, export JSON/CSV.",
    )
    p.add_argument("--data-root", required=True, type=Path, help="Root directory holding input PDFs.")
    p.add_argument("--pdf-relpath", required=True, help="PDF path relative to --data-root.")
    p.add_argument("--bleed-size", type=float, default=3.0, help="Bleed zone in mm (default: 3).")
    p.add_argument(
        "--margin-threshold",
        type=float,
        default=5.0,
        help="Allowed margin variation across pages in mm (default: 5).",
    )
    p.add_argument("--scale", type=float, default=2.0, help="Render scale in pixels per point (default: 2).")
    p.add_argument(
        "--out-dir",
        type=Path,
        default=None,
        help="Write pdf-margin-analysis.{json,csv} here. Default: no export.",
    )
    p.add_argument(
        "--format",
        choices=[f.value for f in ExportFormat] + ["both"],
        default="both",
        help="Export format(s) written to --out-dir.",
    )
    p.add_argument(
        "--compute-source-sha256",
        action="store_true",
        help="Include SHA-256 of the source PDF in report meta for auditing.",
    )
    p.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level (default: WARNING).",
    )
    return p


def _print_summary(result: InspectRunResult) -> None:
    report = result.report
    summary = result.summary
    if report is None or summary is None:
        return

    print(f"pages={report.total_pages} uniform={summary.uniformity.overall}")
    for edge in EDGES:
        st = summary.edge_stats[edge]
        status = "ok" if summary.uniformity.get(edge) else "NON-UNIFORM"
        print(f"  {edge.value:<6} min={st.min:.2f} max={st.max:.2f} avg={st.avg:.2f} mm  {status}")
    for page, consistent in zip(report.pages, summary.page_consistency):
        bleeds = ", ".join(e.value for e in page.bleed.edges()) or "none"
        label = "consistent" if consistent else "INCONSISTENT"
        blank = " (blank)" if page.is_blank else ""
        print(f"  page {page.page_number:>3}: {label}{blank} bleed={bleeds}")


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = InspectConfig(
            bleed_size_mm=args.bleed_size,
            margin_threshold_mm=args.margin_threshold,
            render_scale=args.scale,
            compute_source_sha256=args.compute_source_sha256,
        )
    except MisconfigurationError as e:
        parser.error(str(e))

    result = run_inspect_pdf_relpath(data_root=args.data_root, pdf_relpath=args.pdf_relpath, config=config)
    if not result.ok:
        for err in result.errors:
            print(f"error [{err.code}]: {err.message}")
        return 2

    _print_summary(result)

    if args.out_dir is not None and result.report is not None:
        sink = DirectoryExportSink(args.out_dir)
        formats = list(ExportFormat) if args.format == "both" else [ExportFormat(args.format)]
        for fmt in formats:
            out_file = sink.deliver(export_report(result.report, fmt))
            print(f"wrote {out_file}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
