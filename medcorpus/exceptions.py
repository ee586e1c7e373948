"""medcorpus exceptions.

Used by the retry utility to classify failures of collaborators (model calls,
fetches) around the kernels. The kernels themselves never raise past
``execute``.
"""


class MedCorpusError(Exception):
    """Base exception for all medcorpus errors.

    Keeps the causing exception so callers can log the full chain.
    """

    def __init__(self, message: str, original_error: BaseException | None = None):
        super().__init__(message)
        self.original_error = original_error
        if original_error is not None:
            self.__cause__ = original_error


class RetryableError(MedCorpusError):
    """Transient failure that may succeed on retry."""

    pass


class ValidationError(MedCorpusError):
    """Data or input error that retrying will not fix."""

    pass
