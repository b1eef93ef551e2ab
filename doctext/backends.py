"""Format decoders wrapping PyMuPDF, python-docx, openpyxl, xlrd and markdown-it.

Each backend exposes a single method so :class:`doctext.extractor.TextExtractor`
can be given substitutes.
"""

import csv
import io
import shutil
import subprocess
import tempfile
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Iterable, Iterator, Optional

import fitz  # PyMuPDF
import openpyxl
import pymupdf4llm
import xlrd
from docx import Document
from markdown_it import MarkdownIt

from doctext.config import ExtractorConfig
from doctext.detector import DOCX_MIME, XLSX_MIME, sniff_container
from doctext.exceptions import ExtractionError
from doctext.logger import Timer, get_logger

logger = get_logger(__name__)


class PdfBackend:
    """PDF text extraction with PyMuPDF."""

    def __init__(self, config: Optional[ExtractorConfig] = None):
        self.config = config or ExtractorConfig()

    def extract(self, data: bytes) -> str:
        with fitz.open(stream=data, filetype="pdf") as document:
            page_count = len(document)
            with Timer("pdf_extraction") as timer:
                if self.config.pdf_format == "markdown":
                    text = pymupdf4llm.to_markdown(
                        document,
                        table_strategy=self.config.pdf_table_strategy,
                        force_text=True,
                        write_images=False,
                        ignore_images=True,
                        fontsize_limit=self.config.pdf_fontsize_limit,
                        show_progress=False,
                    )
                else:
                    text = "\n\n".join(page.get_text() for page in document)

        logger.debug(
            "PDF text extraction completed",
            extra_data={
                "pdf_format": self.config.pdf_format,
                "page_count": page_count,
                "characters_extracted": len(text),
                "extraction_time_ms": timer.get_elapsed_ms(),
            },
        )
        return text


class WordBackend:
    """DOCX via python-docx, legacy DOC via textutil or LibreOffice."""

    def extract(self, data: bytes, mime_type: str) -> str:
        container = sniff_container(data)
        if container == "zip" or (container is None and mime_type == DOCX_MIME):
            return self._extract_docx(data)
        return self._extract_doc(data)

    def _extract_docx(self, data: bytes) -> str:
        with Timer("docx_extraction") as timer:
            doc = Document(io.BytesIO(data))

            lines = [para.text for para in doc.paragraphs if para.text.strip()]
            table_count = 0
            for table in doc.tables:
                table_count += 1
                for row in table.rows:
                    lines.append("\t".join(cell.text.strip() for cell in row.cells))

            result = "\n".join(lines)

        logger.debug(
            "DOCX extraction completed",
            extra_data={
                "paragraph_count": len(doc.paragraphs),
                "table_count": table_count,
                "characters_extracted": len(result),
                "extraction_time_ms": timer.get_elapsed_ms(),
            },
        )
        return result

    def _extract_doc(self, data: bytes) -> str:
        with tempfile.TemporaryDirectory() as tmp_dir:
            source = Path(tmp_dir) / "document.doc"
            source.write_bytes(data)

            if shutil.which("textutil"):
                result = subprocess.run(
                    ["textutil", "-convert", "txt", str(source), "-stdout"],
                    capture_output=True,
                    text=True,
                )
                if result.returncode == 0 and result.stdout.strip():
                    logger.debug("DOC extraction completed via textutil")
                    return result.stdout

            soffice = shutil.which("soffice") or shutil.which("libreoffice")
            if soffice:
                out_dir = Path(tmp_dir) / "out"
                conversion = subprocess.run(
                    [
                        soffice,
                        "--headless",
                        "--convert-to",
                        "txt:Text",
                        str(source),
                        "--outdir",
                        str(out_dir),
                    ],
                    capture_output=True,
                    text=True,
                )
                out_path = out_dir / "document.txt"
                if conversion.returncode == 0 and out_path.exists():
                    logger.debug("DOC extraction completed via soffice")
                    return out_path.read_text(encoding="utf-8", errors="replace")

        raise ExtractionError(
            "No .doc converter available. Install textutil (macOS) or LibreOffice."
        )


class SpreadsheetBackend:
    """Converts every sheet of an XLS/XLSX workbook to CSV text."""

    def extract(self, data: bytes, mime_type: str) -> str:
        container = sniff_container(data)
        if container == "zip" or (container is None and mime_type == XLSX_MIME):
            sheets = self._xlsx_sheets(data)
        else:
            sheets = self._xls_sheets(data)

        parts = []
        for name, rows in sheets:
            csv_text = rows_to_csv(rows)
            logger.debug(
                "Converted sheet to CSV",
                extra_data={"sheet": name, "characters": len(csv_text)},
            )
            parts.append(csv_text)
        return "".join(parts)

    @staticmethod
    def _xlsx_sheets(data: bytes) -> Iterator[tuple[str, list[list[str]]]]:
        # Full load: read-only mode trusts the stored <dimension>, which some
        # writers leave as "A1", and would truncate the sheet.
        workbook = openpyxl.load_workbook(io.BytesIO(data), data_only=True)
        for sheet in workbook.worksheets:
            rows = [
                [format_cell(value) for value in row]
                for row in sheet.iter_rows(values_only=True)
            ]
            yield sheet.title, rows

    @staticmethod
    def _xls_sheets(data: bytes) -> Iterator[tuple[str, list[list[str]]]]:
        workbook = xlrd.open_workbook(file_contents=data, on_demand=True)
        try:
            for index in range(workbook.nsheets):
                sheet = workbook.sheet_by_index(index)
                rows = []
                for row_idx in range(sheet.nrows):
                    row = []
                    for cell in sheet.row(row_idx):
                        if cell.ctype == xlrd.XL_CELL_DATE:
                            value = xlrd.xldate_as_datetime(cell.value, workbook.datemode)
                        elif cell.ctype == xlrd.XL_CELL_BOOLEAN:
                            value = bool(cell.value)
                        elif cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK, xlrd.XL_CELL_ERROR):
                            value = None
                        else:
                            value = cell.value
                        row.append(format_cell(value))
                    rows.append(row)
                yield sheet.name, rows
                workbook.unload_sheet(index)
        finally:
            workbook.release_resources()


def format_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime) and value.time() == time(0):
        return value.date().isoformat()
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def rows_to_csv(rows: Iterable[list[str]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerows(rows)
    return buffer.getvalue()


class MarkdownBackend:
    """Renders Markdown to HTML."""

    def __init__(self) -> None:
        # "js-default" matches the markdown-it JavaScript defaults (tables, strikethrough)
        self._parser = MarkdownIt("js-default")

    def render(self, text: str) -> str:
        return self._parser.render(text)


class CsvBackend:
    """Flattens CSV data rows into separator-joined lines.

    The first row is the header and only supplies field names.
    """

    def __init__(self, separator: str = ", "):
        self.separator = separator

    def extract(self, data: bytes) -> str:
        text = data.decode("utf-8-sig")
        reader = csv.DictReader(io.StringIO(text, newline=""))

        lines = []
        for row in reader:
            values = []
            for key, value in row.items():
                if key is None:
                    # fields beyond the header width
                    values.extend(value)
                elif value is not None:
                    values.append(value)
            lines.append(self.separator.join(values) + "\n")

        logger.debug(
            "CSV parsing completed",
            extra_data={"fields": len(reader.fieldnames or []), "rows": len(lines)},
        )
        return "".join(lines)
