## Error types surfaced to the API layer


class PathwiseError(Exception):
    """Base error carrying a message that is safe to show to the learner."""

    default_message = "Something went wrong. Please try again."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class FormatError(PathwiseError):
    """Roadmap text could not be turned into a tree."""

    default_message = "Invalid roadmap format received. Please try again."


class TransportError(PathwiseError):
    """An external call failed or returned a non-success status."""

    default_message = "The text generation service is unavailable. Please try again."


class ValidationError(PathwiseError):
    """Input or parsed result failed a structural check."""

    default_message = "Invalid roadmap structure."


class NotFound(PathwiseError):
    default_message = "Not found."
