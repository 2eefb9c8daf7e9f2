"""
MIS Attendance Report Extractor

Turns an uploaded MIS attendance export (saved HTML page or print-to-PDF)
into a flat list of per-subject AttendanceRecord values.

HTML rows follow the MIS grid:
    0: action, 1: code, 2: name, 3: short name, 4: load type (L/T/P),
    5: present, 6: absent, 7: total, 8: percentage

PDF text has no table structure left, so rows are recovered with a single
regex pass over the space-joined page tokens. Names are captured lazily and
can pick up neighbouring text when the PDF emits cells out of visual order.
"""

import io
import re
import time
from dataclasses import dataclass, asdict
from enum import Enum
from typing import List, Optional, Sequence

import pdfplumber
from bs4 import BeautifulSoup, Tag

from stride.core.exceptions import UnreadableReportError
from stride.core.logging_config import logger
from stride.services.attendance_calculator import attendance_percentage


SUBJECT_CODE_PATTERN = re.compile(r"^[A-Z0-9-]{5,15}$")

PDF_ROW_PATTERN = re.compile(
    r"([A-Z0-9]{5,15})\s+(.+?)\s+([A-Z0-9-]{2,10})\s+([LTP])\s+(\d+)\s+(\d+)\s+(\d+)\s+(\d+)"
)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

MIN_ROW_CELLS = 8

HTML_CONTENT_TYPES = {"text/html"}
HTML_EXTENSIONS = (".html", ".htm")


class SessionKind(str, Enum):
    LECTURE = "Lecture"
    LAB = "Lab"
    TUTORIAL = "Tutorial"

    @classmethod
    def from_letter(cls, letter: str) -> "SessionKind":
        """Map the MIS load-type letter (P=practical, T=tutorial) to a kind"""
        letter = (letter or "").strip()
        if letter == "P":
            return cls.LAB
        if letter == "T":
            return cls.TUTORIAL
        return cls.LECTURE


@dataclass
class AttendanceRecord:
    code: str
    name: str
    session_kind: SessionKind
    attended: int
    total: int
    percentage: int

    @property
    def computed_percentage(self) -> int:
        """Percentage recomputed from the counts, ignoring the reported figure"""
        return attendance_percentage(self.attended, self.total)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["session_kind"] = self.session_kind.value
        return data


def parse_int(value: Optional[str]) -> Optional[int]:
    """Leading-integer parse: '85%' -> 85, '12.5' -> 12, 'abc' -> None"""
    if value is None:
        return None
    match = _LEADING_INT.match(value)
    if not match:
        return None
    return int(match.group(1))


def is_report_html(filename: Optional[str], content_type: Optional[str]) -> bool:
    """HTML when the MIME type or extension says so; everything else is PDF"""
    if content_type and content_type.split(";")[0].strip().lower() in HTML_CONTENT_TYPES:
        return True
    return bool(filename) and filename.lower().endswith(HTML_EXTENSIONS)


def is_data_row(cells: Sequence[str]) -> bool:
    """Row schema check: enough cells and a subject code in the second one"""
    if len(cells) < MIN_ROW_CELLS:
        return False
    return bool(SUBJECT_CODE_PATTERN.match(cells[1]))


def record_from_cells(cells: Sequence[str]) -> Optional[AttendanceRecord]:
    """
    Build a record from a row that passed is_data_row.

    Returns None when the attended/total cells are not numeric.
    """
    attended = parse_int(cells[5])
    total = parse_int(cells[7])
    if attended is None or total is None:
        return None

    reported = parse_int(cells[8]) if len(cells) > 8 else None
    percentage = reported if reported is not None else attendance_percentage(attended, total)

    return AttendanceRecord(
        code=cells[1],
        name=cells[2],
        session_kind=SessionKind.from_letter(cells[4]),
        attended=attended,
        total=total,
        percentage=percentage,
    )


def cell_text(cell: Tag) -> str:
    """Rendered text of a table cell: <br> breaks words, inline tags do not"""
    for line_break in cell.find_all("br"):
        line_break.replace_with(" ")
    return " ".join(cell.get_text().split())


def parse_html_report(text: str) -> List[AttendanceRecord]:
    """Extract records from every table row of an MIS HTML page"""
    soup = BeautifulSoup(text, "html.parser")
    records: List[AttendanceRecord] = []

    for row in soup.find_all("tr"):
        cells = [cell_text(td) for td in row.find_all("td")]
        if not is_data_row(cells):
            continue

        record = record_from_cells(cells)
        if record is None:
            logger.debug(f"Skipping malformed attendance row for {cells[1]}")
            continue
        records.append(record)

    return records


def extract_pdf_text(content: bytes) -> str:
    """Concatenate every page's text tokens with single spaces, one line per page"""
    pages: List[str] = []
    with pdfplumber.open(io.BytesIO(content)) as pdf:
        for page in pdf.pages:
            words = page.extract_words()
            pages.append(" ".join(word["text"] for word in words))
    return "\n".join(pages) + "\n" if pages else ""


def parse_pdf_text(text: str) -> List[AttendanceRecord]:
    """Run the row regex over extracted PDF text"""
    records: List[AttendanceRecord] = []
    for match in PDF_ROW_PATTERN.finditer(text):
        records.append(AttendanceRecord(
            code=match.group(1),
            name=match.group(2).strip(),
            session_kind=SessionKind.from_letter(match.group(4)),
            attended=int(match.group(5)),
            total=int(match.group(7)),
            percentage=int(match.group(8)),
        ))
    return records


def parse_pdf_report(content: bytes) -> List[AttendanceRecord]:
    text = extract_pdf_text(content)
    logger.debug(f"Extracted raw PDF text (first 500 chars): {text[:500]!r}")
    return parse_pdf_text(text)


def parse_report(
    content: bytes,
    filename: Optional[str] = None,
    content_type: Optional[str] = None,
) -> List[AttendanceRecord]:
    """
    Parse an uploaded MIS report.

    Returns an empty list when the file is readable but holds no attendance
    rows. Raises UnreadableReportError when the file cannot be parsed at all.
    """
    source = "html" if is_report_html(filename, content_type) else "pdf"
    start_time = time.perf_counter()

    try:
        if source == "html":
            records = parse_html_report(content.decode("utf-8", errors="replace"))
        else:
            records = parse_pdf_report(content)
    except Exception as e:
        logger.warning(f"Could not parse {source} report {filename!r}: {type(e).__name__}: {e}")
        raise UnreadableReportError(source, reason=str(e)) from e

    duration_ms = (time.perf_counter() - start_time) * 1000
    logger.log_report_import(source, filename or "<upload>", len(records), duration_ms)
    return records
