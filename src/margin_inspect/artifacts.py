from __future__ import annotations

import csv
import io
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any

from .contracts import DocumentReport, PageResult
from .units import format_mm

EXPORT_BASENAME = "pdf-margin-analysis"

CSV_HEADER = [
    "Page",
    "Width (mm)",
    "Height (mm)",
    "Top Margin (mm)",
    "Bottom Margin (mm)",
    "Left Margin (mm)",
    "Right Margin (mm)",
    "Trim Width (mm)",
    "Trim Height (mm)",
    "Has Top Bleed",
    "Has Bottom Bleed",
    "Has Left Bleed",
    "Has Right Bleed",
]


class ExportFormat(str, Enum):
    JSON = "json"  # structured
    CSV = "csv"  # tabular


@dataclass(frozen=True, slots=True)
class ExportArtifact:
    data: bytes
    filename: str  # suggested only; the sink decides where it lands
    format: ExportFormat


def _iso_utc(ts: datetime) -> str:
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    ts = ts.astimezone(timezone.utc)
    return ts.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _page_entry(page: PageResult) -> dict[str, Any]:
    return {
        "pageNumber": page.page_number,
        "dimensions": {
            "width": format_mm(page.page_width_mm),
            "height": format_mm(page.page_height_mm),
        },
        "margins": {
            "top": format_mm(page.margins.top),
            "bottom": format_mm(page.margins.bottom),
            "left": format_mm(page.margins.left),
            "right": format_mm(page.margins.right),
        },
        "trimArea": {
            "width": format_mm(page.trim_area.width),
            "height": format_mm(page.trim_area.height),
        },
        "bleed": {
            "size": page.bleed.size,
            "hasTopBleed": page.bleed.has_top_bleed,
            "hasBottomBleed": page.bleed.has_bottom_bleed,
            "hasLeftBleed": page.bleed.has_left_bleed,
            "hasRightBleed": page.bleed.has_right_bleed,
        },
    }


def serialize_report_json(report: DocumentReport, *, generated_at: datetime | None = None) -> bytes:
    payload: dict[str, Any] = {
        "metadata": {
            "totalPages": report.total_pages,
            "bleedSize": report.bleed_size_mm,
            "marginThreshold": report.margin_threshold_mm,
            "analysisDate": _iso_utc(generated_at or datetime.now(timezone.utc)),
        },
        "pages": [_page_entry(p) for p in report.pages],
    }
    return (json.dumps(payload, ensure_ascii=False, indent=2) + "\n").encode("utf-8")


def _flag(value: bool) -> str:
    return "true" if value else "false"


def serialize_report_csv(report: DocumentReport) -> bytes:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for p in report.pages:
        writer.writerow(
            [
                p.page_number,
                format_mm(p.page_width_mm),
                format_mm(p.page_height_mm),
                format_mm(p.margins.top),
                format_mm(p.margins.bottom),
                format_mm(p.margins.left),
                format_mm(p.margins.right),
                format_mm(p.trim_area.width),
                format_mm(p.trim_area.height),
                _flag(p.bleed.has_top_bleed),
                _flag(p.bleed.has_bottom_bleed),
                _flag(p.bleed.has_left_bleed),
                _flag(p.bleed.has_right_bleed),
            ]
        )
    return buf.getvalue().encode("utf-8")


def export_report(
    report: DocumentReport,
    fmt: ExportFormat,
    *,
    generated_at: datetime | None = None,
) -> ExportArtifact:
    if fmt == ExportFormat.JSON:
        data = serialize_report_json(report, generated_at=generated_at)
    elif fmt == ExportFormat.CSV:
        data = serialize_report_csv(report)
    else:
        raise ValueError(f"Unsupported export format: {fmt}")
    return ExportArtifact(data=data, filename=f"{EXPORT_BASENAME}.{fmt.value}", format=fmt)


class ExportSink(ABC):
    """
    Receives finished export bytes and persists or delivers them.
    """

    @abstractmethod
    def deliver(self, artifact: ExportArtifact) -> Path | None:
        raise NotImplementedError


class DirectoryExportSink(ExportSink):
    def __init__(self, out_dir: Path) -> None:
        self.out_dir = out_dir

    def deliver(self, artifact: ExportArtifact) -> Path:
        self.out_dir.mkdir(parents=True, exist_ok=True)
        out_file = self.out_dir / artifact.filename
        out_file.write_bytes(artifact.data)
        return out_file
