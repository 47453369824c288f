"""Engine exceptions.

Validation problems are never raised: they come back as
``ValidationResult.errors``. The exceptions below are for data that should
have been rejected upstream and reached a calculator anyway.
"""


class CrankSmithError(Exception):
    """Base class for engine errors."""


class IncompleteSetupError(CrankSmithError):
    """A calculator received a setup with a missing wheel, tire or component."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Setup is incomplete, missing: {', '.join(missing)}")


class MalformedComponentError(CrankSmithError):
    """Catalog or component data is structurally wrong (e.g. zero teeth)."""
