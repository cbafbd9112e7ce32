"""Errors raised while building a return."""


class TaxFormError(Exception):
    """Base class for return-building errors."""
    pass


class ConfigurationError(TaxFormError):
    """Raised when tax parameters or the jurisdiction registry are invalid."""
    pass


class UnsupportedJurisdictionError(TaxFormError):
    """Raised when a jurisdiction is neither registered nor exempt from filing."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(
            f"Jurisdiction '{code}' has no registered form and is not a "
            f"no-filing-required jurisdiction."
        )
