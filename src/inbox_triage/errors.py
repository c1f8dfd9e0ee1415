"""Exception hierarchy for collaborator and classification failures."""


class TriageError(Exception):
    """Base class for all inbox triage errors."""


class CollaboratorError(TriageError):
    """An external system (mail, calendar, language model) failed."""


class MailError(CollaboratorError):
    """Gmail API call failed."""


class CalendarError(CollaboratorError):
    """Calendar API call failed."""


class LLMError(CollaboratorError):
    """Language model call failed or returned output that did not validate."""


class ClassificationError(TriageError):
    """An email could not be classified."""
