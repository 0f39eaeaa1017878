"""Typed exceptions raised by the storage and validation tools.

The record types themselves never raise on their content.
"""


class CAFTruthError(Exception):
    """Base exception for all the errors raised by this package."""


class SchemaError(CAFTruthError):
    """Raised when a stored layout is incompatible with a record class."""


class ValidationError(CAFTruthError):
    """Raised when a record fails a strict validation."""

    def __init__(self, issues):
        """Initialize with the list of issues which triggered the error.

        Parameters
        ----------
        issues : List[ValidationIssue]
            Issues found in the record
        """
        self.issues = issues
        issue_str = "\n".join(f" - {issue}" for issue in issues)
        super().__init__(f"Record failed validation:\n{issue_str}")
