import io

import fitz
import openpyxl
import pytest
from docx import Document


@pytest.fixture
def pdf_bytes() -> bytes:
    document = fitz.open()
    for line in ("Hello PDF", "Second page"):
        page = document.new_page()
        page.insert_text((72, 72), line)
    data = document.tobytes()
    document.close()
    return data


@pytest.fixture
def docx_bytes() -> bytes:
    document = Document()
    document.add_paragraph("Hello Word")
    document.add_paragraph("")
    document.add_paragraph("Second paragraph")
    table = document.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "left"
    table.rows[0].cells[1].text = "right"
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def xlsx_bytes() -> bytes:
    workbook = openpyxl.Workbook()
    first = workbook.active
    first.title = "First"
    first.append(["a", "b"])
    first.append([1, 2])
    second = workbook.create_sheet("Second")
    second.append(["x", "with, comma"])
    second.append([3.5, True])
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()
