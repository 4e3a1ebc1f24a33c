"""Exception hierarchy for the content wizard."""

from __future__ import annotations


class ContentWizardError(Exception):
    """Base class for every error raised by the wizard core."""


class ValidationError(ContentWizardError):
    """Step input rejected locally, before any network call."""

    def __init__(self, step: str, reason: str):
        super().__init__(reason)
        self.step = step
        self.reason = reason


class GenerationError(ContentWizardError):
    """The generative model call failed or returned nothing usable."""


class ParseError(ContentWizardError):
    """A strict (JSON) model reply could not be parsed."""


class PreconditionError(ContentWizardError):
    """SEO analysis was invoked without content or keywords."""


class UsageLimitError(ContentWizardError):
    """The user's plan has no content credits left for the period."""


class StorageError(ContentWizardError):
    """A call to the hosted data backend failed."""
