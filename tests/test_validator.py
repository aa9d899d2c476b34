"""Tests for the snapshot validator."""

from datetime import datetime

from cashbook.models.records import BankAccount, Invoice, InvoiceStatus
from cashbook.models.snapshot import LedgerSnapshot
from cashbook.validation import SnapshotValidator


DAY = datetime(2024, 6, 1)


def _issue_types(result):
    return sorted(i.issue_type for i in result.issues)


class TestStructuralValidation:
    """Stage 1: duplicate identifiers."""

    def test_clean_snapshot(self, make_payment):
        snapshot = LedgerSnapshot(payments=[make_payment(), make_payment()])
        result = SnapshotValidator().validate(snapshot)

        assert result.is_valid is True
        assert result.issues == []

    def test_duplicate_payment_id_is_an_error(self, make_payment):
        snapshot = LedgerSnapshot(payments=[make_payment(id="P1"), make_payment(id="P1")])
        result = SnapshotValidator().validate(snapshot)

        assert result.is_valid is False
        assert result.error_count == 1
        assert result.issues[0].record_id == "P1"

    def test_duplicate_invoice_id_is_an_error(self):
        invoice = Invoice(id="I1", type="ROYALTY", amount="10", balance="10", date=DAY)
        result = SnapshotValidator().validate(LedgerSnapshot(invoices=[invoice, invoice]))
        assert result.has_errors is True


class TestSemanticValidation:
    """Stage 2: cross-record consistency."""

    def test_unknown_account_is_a_warning(self, make_payment):
        snapshot = LedgerSnapshot(
            payments=[make_payment(mode="HDFC"), make_payment(mode="SBI")],
            bank_accounts=[BankAccount(id="SBI", name="State Bank")],
        )
        result = SnapshotValidator().validate(snapshot)

        assert result.is_valid is True
        assert _issue_types(result) == ["unknown_account"]
        assert "HDFC" in result.warnings[0]

    def test_seeded_books_are_known(self, make_payment):
        snapshot = LedgerSnapshot(payments=[make_payment(mode="CUB"), make_payment(mode="KVB")])
        assert SnapshotValidator().validate(snapshot).issues == []

    def test_contra_without_target(self, make_payment):
        snapshot = LedgerSnapshot(payments=[
            make_payment("OUT", voucher_type="CONTRA"),
            make_payment("OUT", category="CONTRA", target_mode="KVB"),
        ])
        result = SnapshotValidator().validate(snapshot)
        assert _issue_types(result) == ["missing_target"]

    def test_invoice_balance_above_amount(self):
        invoice = Invoice(id="I1", type="ROYALTY", amount="100", balance="150", date=DAY)
        result = SnapshotValidator().validate(LedgerSnapshot(invoices=[invoice]))
        assert _issue_types(result) == ["inconsistent"]
        assert result.issues[0].field == "invoices.balance"

    def test_paid_invoice_with_balance(self):
        invoice = Invoice(id="I1", type="ROYALTY", amount="100", balance="20",
                          status=InvoiceStatus.PAID, date=DAY)
        result = SnapshotValidator().validate(LedgerSnapshot(invoices=[invoice]))
        assert result.issues[0].field == "invoices.status"

    def test_void_invoices_are_skipped(self):
        invoice = Invoice(id="I1", type="ROYALTY", amount="100", balance="150",
                          date=DAY, is_void=True)
        result = SnapshotValidator().validate(LedgerSnapshot(invoices=[invoice]))
        assert result.issues == []

    def test_untracked_business_unit_is_info(self, make_payment):
        snapshot = LedgerSnapshot(
            payments=[make_payment(business_unit="Quarry"), make_payment(business_unit="Bakery")],
            business_units=("Quarry",),
        )
        result = SnapshotValidator().validate(snapshot)

        assert result.is_valid is True
        assert [i.severity for i in result.issues] == ["info"]
        assert result.warnings == []

    def test_explicit_units_override_snapshot(self, make_payment):
        snapshot = LedgerSnapshot(
            payments=[make_payment(business_unit="Quarry")],
            business_units=("Quarry",),
        )
        result = SnapshotValidator(business_units=["Bakery"]).validate(snapshot)
        assert _issue_types(result) == ["untracked_unit"]

    def test_no_units_configured_skips_unit_check(self, make_payment):
        snapshot = LedgerSnapshot(payments=[make_payment(business_unit="Quarry")])
        assert SnapshotValidator().validate(snapshot).issues == []


class TestSummary:
    """Tests for the user-friendly summary."""

    def test_all_clear(self):
        validator = SnapshotValidator()
        summary = validator.get_user_friendly_summary(validator.validate(LedgerSnapshot()))
        assert summary.startswith("✅")

    def test_errors_and_warnings(self, make_payment):
        validator = SnapshotValidator()
        snapshot = LedgerSnapshot(payments=[
            make_payment(id="P1", mode="HDFC"),
            make_payment(id="P1"),
        ])
        summary = validator.get_user_friendly_summary(validator.validate(snapshot))

        assert "❌" in summary
        assert "⚠️" in summary
        assert summary.endswith("Please fix the errors above before trusting the reports.")
