import io
import json
import logging

import pytest
from PyPDF2 import PdfWriter

from shared.logging_config import JSONFormatter
from app.services.pdf_service import extract_text_from_pdf


def test_garbage_bytes_are_rejected():
    with pytest.raises(ValueError):
        extract_text_from_pdf(b"definitely not a pdf")


def test_pdf_without_text_layer_is_rejected():
    writer = PdfWriter()
    writer.add_blank_page(width=200, height=200)
    buf = io.BytesIO()
    writer.write(buf)

    with pytest.raises(ValueError, match="Could not extract"):
        extract_text_from_pdf(buf.getvalue())


def test_json_formatter_includes_structured_extras():
    record = logging.LogRecord("app.fit", logging.INFO, __file__, 1, "fit %d%%", (63,), None)
    record.fit_score = 63
    record.role_id = "r1"

    entry = json.loads(JSONFormatter().format(record))

    assert entry["message"] == "fit 63%"
    assert entry["level"] == "INFO"
    assert entry["logger"] == "app.fit"
    assert entry["fit_score"] == 63
    assert entry["role_id"] == "r1"
    assert "latency_ms" not in entry
