"""Tests for the typer command-line interface."""

import re
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from docquery.adapters.inbound.cli.commands import app
from docquery.core.domain import AnswerRecord, BatchMetrics, BatchResult
from docquery.core.domain.exceptions import FetchError

pytestmark = pytest.mark.unit

runner = CliRunner()


def plain(output):
    return re.sub(r"\x1b\[[0-9;]*m", "", output)


def make_result():
    records = [
        AnswerRecord("What is the grace period?", "Thirty days.", 0.12, True),
        AnswerRecord("Is dental covered?", "Not mentioned in the document.", 0.08, False),
    ]
    return BatchResult(
        records=records,
        metrics=BatchMetrics.from_records(records),
        namespace="abc-123",
        chunk_count=4,
    )


def test_ask_prints_json_answers():
    orchestrator = MagicMock()
    orchestrator.run = AsyncMock(return_value=make_result())

    with (
        patch("docquery.composition.container.build_orchestrator", return_value=orchestrator),
        patch("docquery.adapters.inbound.cli.commands.setup_logging"),
    ):
        result = runner.invoke(
            app, ["ask", "https://x/doc.pdf", "-q", "What is the grace period?", "--json"]
        )

    assert result.exit_code == 0
    assert "Thirty days." in plain(result.output)
    orchestrator.run.assert_awaited_once_with("https://x/doc.pdf", ["What is the grace period?"])
    orchestrator.fetcher.__exit__.assert_called_once()


def test_ask_reports_errors_with_code():
    orchestrator = MagicMock()
    orchestrator.run = AsyncMock(
        side_effect=FetchError("Failed to fetch document: HTTP 404", url="u")
    )

    with (
        patch("docquery.composition.container.build_orchestrator", return_value=orchestrator),
        patch("docquery.adapters.inbound.cli.commands.setup_logging"),
    ):
        result = runner.invoke(app, ["ask", "https://x/doc.pdf", "-q", "Q"])

    assert result.exit_code == 1
    assert "DQ_ING_002" in plain(result.output)
    orchestrator.fetcher.__exit__.assert_called_once()


def test_chunk_reports_statistics(tmp_path):
    path = tmp_path / "policy.pdf"
    path.write_bytes(b"%PDF-1.4")
    pages = ["Grace period of thirty days. " * 10, "Maternity benefits apply. " * 10]

    with patch(
        "docquery.adapters.outbound.documents.PdfDocumentParser.extract", return_value=pages
    ):
        result = runner.invoke(app, ["chunk", str(path), "--size", "100", "--overlap", "0"])

    assert result.exit_code == 0
    assert "2 pages" in plain(result.output)
    assert "overlap=0" in plain(result.output)
