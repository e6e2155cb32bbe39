"""Classification pipeline errors."""


class ClassificationError(Exception):
    """Base class for classification pipeline failures."""


class ModelTransportError(ClassificationError):
    """A transport could not obtain text from the model."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        transport: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.transport = transport


class TransientTransportError(ModelTransportError):
    """Rate limit, overload or network failure."""


class FatalTransportError(ModelTransportError):
    """Any other transport failure (bad request, auth, empty answer)."""


class ParseError(ClassificationError):
    """The model answer does not contain a usable JSON object."""
