"""
Two-Stage Snapshot Validation

DESIGN DECISION: Validation happens in two distinct stages:

STAGE 1 - STRUCTURAL VALIDATION:
- Duplicate record identifiers
- Field types and ranges are already enforced by the pydantic models,
  so a snapshot that exists is well-typed

STAGE 2 - SEMANTIC VALIDATION:
- Payments booked to books that do not exist
- Transfers without a destination book
- Invoices whose balance contradicts their amount or status
- Business-unit payments for units nobody tracks

IMPORTANT: Validation NEVER silently fixes issues.
It reports them for human review. Reports still run on an invalid
snapshot; the caller decides whether to trust them.
"""

from collections import Counter
from typing import Iterable, Optional

from cashbook.config import get_settings
from cashbook.models.records import Category, InvoiceStatus, Payment, VoucherType
from cashbook.models.snapshot import LedgerSnapshot
from cashbook.models.validation import ValidationIssue, ValidationResult

SEEDED_BOOKS = ("CASH", "CUB", "KVB")


def _is_contra(payment: Payment) -> bool:
    return (
        payment.voucher_type == VoucherType.CONTRA.value
        or payment.category == Category.CONTRA.value
    )


class SnapshotValidator:
    """
    Validates a ledger snapshot through a two-stage pipeline.

    Stage 1: Structural validation
    Stage 2: Semantic validation (needs the configured book and unit lists)
    """

    def __init__(
        self,
        cash_book_id: Optional[str] = None,
        business_units: Optional[Iterable[str]] = None,
    ):
        """
        Initialize validator.

        Args:
            cash_book_id: Identifier of the cash book. Defaults to settings.
            business_units: Tracked units. Defaults to settings, then to the
                            units named in the snapshot.
        """
        settings = get_settings().reports
        self._cash_book_id = cash_book_id or settings.cash_book_id
        configured = list(business_units) if business_units is not None else settings.business_units_list
        self._business_units = configured

    def _validate_structure(
        self,
        snapshot: LedgerSnapshot,
    ) -> list[ValidationIssue]:
        """
        Stage 1: duplicate identifiers.

        Ledger replay and party lookups key on ids, so a duplicate payment id
        makes every derived balance ambiguous.
        """
        issues = []

        counts = Counter(p.id for p in snapshot.payments)
        for payment_id, count in counts.items():
            if count > 1:
                issues.append(ValidationIssue(
                    field="payments",
                    issue_type="duplicate",
                    message=f"Payment id {payment_id} appears {count} times",
                    severity="error",
                    record_id=payment_id,
                ))

        counts = Counter(i.id for i in snapshot.invoices)
        for invoice_id, count in counts.items():
            if count > 1:
                issues.append(ValidationIssue(
                    field="invoices",
                    issue_type="duplicate",
                    message=f"Invoice id {invoice_id} appears {count} times",
                    severity="error",
                    record_id=invoice_id,
                ))

        return issues

    def _known_books(self, snapshot: LedgerSnapshot) -> set[str]:
        books = {self._cash_book_id, *SEEDED_BOOKS}
        books.update(b.id for b in snapshot.bank_accounts)
        return books

    def _validate_semantic(
        self,
        snapshot: LedgerSnapshot,
    ) -> list[ValidationIssue]:
        """
        Stage 2: cross-record consistency.

        Checks:
        - Payment books exist
        - Contra vouchers name a destination book
        - Invoice balances fit their amount and status
        - Business units are tracked
        """
        issues = []
        books = self._known_books(snapshot)
        units = set(self._business_units or snapshot.business_units)

        for payment in snapshot.payments:
            if payment.mode not in books:
                issues.append(ValidationIssue(
                    field="payments.mode",
                    issue_type="unknown_account",
                    message=f"Payment {payment.id} is booked to unknown account {payment.mode}",
                    severity="warning",
                    record_id=payment.id,
                ))

            if _is_contra(payment) and not payment.target_mode:
                issues.append(ValidationIssue(
                    field="payments.target_mode",
                    issue_type="missing_target",
                    message=f"Contra payment {payment.id} has no destination account",
                    severity="warning",
                    record_id=payment.id,
                ))

            if payment.business_unit and units and payment.business_unit not in units:
                issues.append(ValidationIssue(
                    field="payments.business_unit",
                    issue_type="untracked_unit",
                    message=(
                        f"Payment {payment.id} belongs to business unit "
                        f"{payment.business_unit}, which is not tracked"
                    ),
                    severity="info",
                    record_id=payment.id,
                ))

        for invoice in snapshot.invoices:
            if invoice.is_void:
                continue
            if invoice.balance > invoice.amount:
                issues.append(ValidationIssue(
                    field="invoices.balance",
                    issue_type="inconsistent",
                    message=(
                        f"Invoice {invoice.invoice_number or invoice.id} has balance "
                        f"₹{invoice.balance} above its amount ₹{invoice.amount}"
                    ),
                    severity="warning",
                    record_id=invoice.id,
                ))
            elif invoice.status == InvoiceStatus.PAID and invoice.balance != 0:
                issues.append(ValidationIssue(
                    field="invoices.status",
                    issue_type="inconsistent",
                    message=(
                        f"Invoice {invoice.invoice_number or invoice.id} is marked PAID "
                        f"but still has balance ₹{invoice.balance}"
                    ),
                    severity="warning",
                    record_id=invoice.id,
                ))

        return issues

    def validate(self, snapshot: LedgerSnapshot) -> ValidationResult:
        """
        Run the full two-stage validation pipeline.

        Both stages always run; the snapshot is already loaded, so there is
        nothing to save by stopping early.
        """
        all_issues = self._validate_structure(snapshot)
        all_issues.extend(self._validate_semantic(snapshot))

        warnings = [i.message for i in all_issues if i.severity == "warning"]

        return ValidationResult(
            is_valid=not any(i.severity == "error" for i in all_issues),
            issues=all_issues,
            warnings=warnings,
        )

    def get_user_friendly_summary(
        self,
        result: ValidationResult,
    ) -> str:
        """
        Generate a user-friendly summary of validation results.

        This is what we show to the owner before the reports.
        """
        if result.is_valid and not result.issues:
            return "✅ All checks passed! The books are consistent."

        lines = []

        if result.has_errors:
            lines.append("❌ The books contain records that break the reports:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"   • {issue.message}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("⚠️ Please verify the following:")
            for warning in result.warnings:
                lines.append(f"   • {warning}")

        notes = [i.message for i in result.issues if i.severity == "info"]
        if notes:
            if lines:
                lines.append("")
            lines.append("ℹ️ For your information:")
            for note in notes:
                lines.append(f"   • {note}")

        lines.append("")
        if result.is_valid:
            lines.append("Reports are usable, but please review the items above.")
        else:
            lines.append("Please fix the errors above before trusting the reports.")

        return "\n".join(lines)
