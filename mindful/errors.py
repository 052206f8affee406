"""Error kinds raised by the script pipeline and its collaborators."""


class MindfulError(Exception):
    """Base class for all errors raised by mindful."""


class UnrecognizedTechniqueError(MindfulError, ValueError):
    """A technique name or value is outside the known set."""


class UnsupportedTechniqueError(MindfulError):
    """No prompt builder is registered for a technique."""


class UpstreamCallError(MindfulError):
    """A call to the LLM or TTS API failed.

    Attributes:
        status_code: HTTP status returned by the upstream API, if any
        body: Response body text, if any
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ScriptParseError(MindfulError):
    """The model's reply could not be parsed into a meditation script."""

    def __init__(self, message: str, raw_content: str | None = None):
        super().__init__(message)
        self.raw_content = raw_content


class MissingCredentialError(MindfulError, ValueError):
    """An API key was required but none was supplied."""
