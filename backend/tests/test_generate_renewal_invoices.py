"""Tests for the generate_renewal_invoices command-line script."""

from unittest.mock import MagicMock, patch

import pytest

from app.models.invoice import Invoice
from app.services.invoice_generation import RenewalRunResult
from scripts.generate_renewal_invoices import build_parser, main


class TestParser:
    def test_default_days(self):
        assert build_parser().parse_args([]).days == 30

    def test_custom_days(self):
        assert build_parser().parse_args(["--days", "14"]).days == 14

    def test_non_integer_days_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--days", "soon"])


class TestMain:
    def test_generates_invoices(self, db_session, make_service, hosting_plan, capsys):
        make_service(days=5, plan=hosting_plan)

        exit_code = main(["--days", "30"])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "expiring within 30 days" in out
        assert "Successfully generated 1 renewal invoice(s)." in out
        assert db_session.query(Invoice).count() == 1

    def test_nothing_to_generate(self, capsys):
        exit_code = main([])

        assert exit_code == 0
        assert "No renewal invoices need to be generated" in capsys.readouterr().out

    def test_rejects_non_positive_days(self, capsys):
        exit_code = main(["--days", "0"])

        assert exit_code == 2
        assert "positive integer" in capsys.readouterr().err

    def test_reports_failures(self, capsys):
        mock_service = MagicMock()
        mock_service.run_renewals.return_value = RenewalRunResult(
            days_before=30, failed=1, errors=["abc: Cannot price service abc"]
        )

        with patch(
            "scripts.generate_renewal_invoices.InvoiceGenerationService",
            return_value=mock_service,
        ):
            exit_code = main([])

        captured = capsys.readouterr()
        assert exit_code == 1
        assert "1 service(s) could not be invoiced" in captured.err
        assert "abc: Cannot price service abc" in captured.err
