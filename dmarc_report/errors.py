from typing import List, Optional, Sequence


class ReportError(Exception):
    """Base class of everything raised or returned by this package."""


class DecodeError(ReportError):
    """The input could not be turned into a report."""


class ContainerError(DecodeError):
    def __init__(self, container: str, reason: str):
        super().__init__(container, reason)
        self.container = container
        self.reason = reason

    def __str__(self):
        return f"could not open {self.container} container: {self.reason}"


class NotFoundError(DecodeError):
    pass


class ReportExtractionError(NotFoundError):
    def __init__(self, msg):
        super().__init__(msg)
        self.msg = msg

    def __str__(self):
        from_email = self.msg.get("from", "<from missing>")
        subject = self.msg.get("subject", "<no subject>")
        return f"Failed to extract report from email by {from_email} with subject '{subject}'."


class ParseError(DecodeError):
    def __init__(self, reason: str, path: Optional[str] = None):
        super().__init__(reason, path)
        self.reason = reason
        self.path = path

    def __str__(self):
        if self.path:
            return f"could not parse report at {self.path}: {self.reason}"
        return f"could not parse report: {self.reason}"


class MalformedFieldError(DecodeError):
    def __init__(self, path: str, value: object):
        super().__init__(path, value)
        self.path = path
        self.value = value

    def __str__(self):
        return f"malformed value {self.value!r} for {self.path}"


class CheckFailure(ReportError):
    """A single failed check of a record."""

    def __init__(self, check: str, reason: str):
        super().__init__(check, reason)
        self.check = check
        self.reason = reason

    def __str__(self):
        return self.reason


class PolicyFailure(ReportError):
    """Titled list of failures, formatted as an indented bullet list.

    Children may themselves be ``PolicyFailure`` instances. Each nesting level
    adds one tab in front of the child's lines::

        Some record failed:
        \t* Failure for source IP 10.1.1.2:
        \t\t* DKIM is not aligned
    """

    def __init__(self, title: str, errors: Sequence[Exception] = ()):
        super().__init__(title)
        self.title = title
        self.errors: List[Exception] = list(errors)

    def error_or_none(self) -> Optional["PolicyFailure"]:
        if not self.errors:
            return None
        return self

    def __str__(self):
        text = (self.title or "error") + "\n"
        for error in self.errors:
            indented = str(error).strip().replace("\n", "\n\t")
            text += "\t* " + indented + "\n"
        return text
