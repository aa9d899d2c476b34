"""
Exceptions raised by the reporting facade.

Data inconsistencies (an unbalanced balance sheet, a suspicious record)
are NOT exceptions; they come back as values. These classes cover caller
mistakes that leave nothing sensible to return.
"""


class ReportError(Exception):
    """Base exception for report requests."""
    pass


class UnknownPartyError(ReportError):
    """No customer or lender has the requested id."""

    def __init__(self, party_id: str):
        self.party_id = party_id
        super().__init__(f"No customer or lender with id {party_id!r}")


class UnknownBusinessUnitError(ReportError):
    """The business unit is not one of the tracked units."""

    def __init__(self, unit: str):
        self.unit = unit
        super().__init__(f"Business unit {unit!r} is not tracked")


class SnapshotSourceError(ReportError):
    """The snapshot could not be loaded."""
    pass
