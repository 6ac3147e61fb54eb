"""
Coach exports - per-baby CSV files, a zip of all of them, and a printable HTML report.

CSV layout (one file per baby):
  - UTF-8 with a leading BOM so spreadsheet apps detect Hebrew correctly
  - fixed Hebrew header row (CSV_HEADERS)
  - one row per sleep cycle; a record without cycles gets a single '-' row;
    a baby without records gets a single "no sleep data" row

The "PDF" export is an RTL HTML document that opens the browser's print
dialog; nothing is rendered or stored server-side.
"""

import csv
import html
import io
import logging
import re
import zipfile
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from lailatov.core.constants import (
    CSV_BOM,
    CSV_EMPTY_CYCLE_PLACEHOLDER,
    CSV_FILENAME_PREFIX,
    CSV_HEADERS,
    CSV_NO_SLEEP_DATA,
    MSG_NO_DATA,
    MSG_NOT_AVAILABLE,
    SAFE_FILENAME_PATTERN,
)
from lailatov.db.models import Baby
from lailatov.utils.sleep_records import sort_records_desc

logger = logging.getLogger(__name__)


# Used by: baby_to_csv()
def build_csv_rows(baby: Baby) -> List[Dict[str, Any]]:
    records = sort_records_desc(baby.sleep_records)
    if not records:
        row = {key: "" for key in CSV_HEADERS}
        row["date"] = CSV_NO_SLEEP_DATA
        return [row]

    rows = []
    for record in records:
        if not record.sleep_cycles:
            row = {key: CSV_EMPTY_CYCLE_PLACEHOLDER for key in CSV_HEADERS}
            row["date"] = record.date.isoformat()
            row["stage"] = record.stage
            rows.append(row)
            continue

        for number, cycle in enumerate(record.sleep_cycles, start=1):
            rows.append({
                "date": record.date.isoformat(),
                "stage": record.stage,
                "cycle_number": number,
                "bedtime": cycle.bedtime,
                "time_to_sleep": cycle.time_to_sleep,
                "who_put_to_sleep": cycle.who_put_to_sleep,
                "how_fell_asleep": cycle.how_fell_asleep,
                "wake_time": cycle.wake_time or "",
            })
    return rows


# Used by: baby_to_csv()
def _normalize_newlines(value: Any) -> Any:
    """Bare CR and CRLF become LF, so the writer quotes every multi-line cell."""
    if isinstance(value, str):
        return value.replace("\r\n", "\n").replace("\r", "\n")
    return value


# Used by: api/export.py (single CSV), build_csv_archive()
def baby_to_csv(baby: Baby) -> str:
    """CSV text for one baby, BOM included. Quoting is minimal: only fields with , " or line breaks."""
    output = io.StringIO()
    writer = csv.DictWriter(
        output,
        fieldnames=list(CSV_HEADERS.keys()),
        quoting=csv.QUOTE_MINIMAL,
        lineterminator="\n",
    )
    writer.writerow(CSV_HEADERS)
    writer.writerows(
        {key: _normalize_newlines(value) for key, value in row.items()}
        for row in build_csv_rows(baby)
    )
    # Rows are joined by the terminator, the last one is not followed by it
    return CSV_BOM + output.getvalue().removesuffix("\n")


# Used by: api/export.py, build_csv_archive()
def csv_filename(baby: Baby) -> str:
    safe_name = re.sub(SAFE_FILENAME_PATTERN, "_", f"{baby.name}_{baby.family_name}", flags=re.IGNORECASE)
    return f"{CSV_FILENAME_PREFIX}{safe_name}.csv"


# Used by: api/export.py (GET /export/csv)
def build_csv_archive(babies: List[Baby]) -> bytes:
    """Zip with one CSV per baby. Clashing filenames get the baby id appended."""
    buffer = io.BytesIO()
    used_names = set()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        for baby in babies:
            filename = csv_filename(baby)
            if filename in used_names:
                filename = f"{filename[:-len('.csv')]}_{baby.id}.csv"
            used_names.add(filename)
            archive.writestr(filename, baby_to_csv(baby).encode("utf-8"))

    logger.info(f"Built CSV archive for {len(babies)} babies")
    return buffer.getvalue()


# ── PRINTABLE REPORT ──────────────────────────────────────────────────────────

REPORT_STYLE = """
body { font-family: Arial, "Segoe UI", sans-serif; margin: 24px; color: #222; }
h1 { color: #3f51b5; margin-bottom: 4px; }
h2 { border-bottom: 2px solid #3f51b5; padding-bottom: 4px; }
table { width: 100%; border-collapse: collapse; margin-top: 8px; }
th, td { border: 1px solid #ccc; padding: 4px 6px; text-align: right; }
th { background: #eef; }
.details td { border: none; padding: 2px 6px; }
.notes { background: #fafafa; border: 1px solid #ddd; padding: 8px; white-space: pre-wrap; }
.page-break { page-break-after: always; }
@media print { body { margin: 0; } }
"""


def _esc(value: Any) -> str:
    if value is None or value == "":
        return MSG_NOT_AVAILABLE
    return html.escape(str(value))


def _format_date(value: date) -> str:
    return value.strftime("%d/%m/%Y")


def _render_records_table(baby: Baby) -> str:
    records = sort_records_desc(baby.sleep_records)
    if not records:
        return f"<p>{html.escape(CSV_NO_SLEEP_DATA)}</p>"

    header = "".join(f"<th>{html.escape(label)}</th>" for label in CSV_HEADERS.values())
    rows = []
    for record in records:
        if not record.sleep_cycles:
            rows.append(
                f"<tr><td>{_format_date(record.date)}</td><td>{html.escape(record.stage)}</td>"
                + f"<td>{CSV_EMPTY_CYCLE_PLACEHOLDER}</td>" * 6
                + "</tr>"
            )
            continue
        for number, cycle in enumerate(record.sleep_cycles, start=1):
            cells = [
                _format_date(record.date),
                html.escape(record.stage),
                str(number),
                html.escape(cycle.bedtime),
                html.escape(cycle.time_to_sleep),
                html.escape(cycle.who_put_to_sleep),
                html.escape(cycle.how_fell_asleep),
                html.escape(cycle.wake_time) if cycle.wake_time else "",
            ]
            rows.append("<tr>" + "".join(f"<td>{c}</td>" for c in cells) + "</tr>")

    return f"<table><thead><tr>{header}</tr></thead><tbody>{''.join(rows)}</tbody></table>"


def _render_baby_section(baby: Baby) -> str:
    latest = sort_records_desc(baby.sleep_records)[0] if baby.sleep_records else None
    latest_date = _format_date(latest.date) if latest else MSG_NO_DATA
    return f"""
<section>
  <h2>{html.escape(baby.name)} {html.escape(baby.family_name)}</h2>
  <table class="details">
    <tr><td><strong>גיל:</strong> {baby.age} חודשים</td><td><strong>שם משתמש הורים:</strong> {_esc(baby.parent_username)}</td></tr>
    <tr><td><strong>שם האם:</strong> {_esc(baby.mother_name)}</td><td><strong>שם האב:</strong> {_esc(baby.father_name)}</td></tr>
    <tr><td><strong>מספר אחים:</strong> {baby.siblings_count}</td><td><strong>שמות האחים:</strong> {_esc(baby.siblings_names)}</td></tr>
    <tr><td colspan="2"><strong>תיאור:</strong> {_esc(baby.description)}</td></tr>
    <tr><td colspan="2"><strong>עדכון שינה אחרון:</strong> {latest_date}</td></tr>
  </table>
  <h3>הערות המאמן/ת</h3>
  <div class="notes">{_esc(baby.coach_notes)}</div>
  <h3>נתוני שינה</h3>
  {_render_records_table(baby)}
</section>"""


# Used by: api/export.py (GET /export/pdf)
def build_print_report(babies: List[Baby], generated_at: Optional[datetime] = None, auto_print: bool = True) -> str:
    """One section per baby; page breaks go between babies, not after the last one."""
    sections = []
    for index, baby in enumerate(babies):
        sections.append(_render_baby_section(baby))
        if index < len(babies) - 1:
            sections.append('<div class="page-break"></div>')

    generated = f"<p>הופק בתאריך: {generated_at.strftime('%d/%m/%Y %H:%M')}</p>" if generated_at else ""
    print_script = "<script>window.addEventListener('load', function () { window.print(); });</script>" if auto_print else ""

    logger.info(f"Built print report for {len(babies)} babies")
    return f"""<!DOCTYPE html>
<html lang="he" dir="rtl">
<head>
<meta charset="utf-8">
<title>לילה טוב - דוח נתוני שינה</title>
<style>{REPORT_STYLE}</style>
</head>
<body>
<h1>לילה טוב - דוח נתוני שינה</h1>
{generated}
{''.join(sections)}
{print_script}
</body>
</html>
"""
