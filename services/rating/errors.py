"""
Exceptions raised by the rating pipeline.

ValueError / LookupError bases let the API layer map them onto
400 / 404 responses without knowing the rating types.
"""


class RatingError(Exception):
    """Base class for all rating pipeline failures."""


class MalformedHistogramError(RatingError, ValueError):
    """A vote histogram is missing buckets or holds invalid counts."""


class AudienceEstimationError(RatingError, ValueError):
    """The audience estimate cannot be computed from the given results."""


class TitleNotRatedError(RatingError, LookupError):
    """The title has no usable votes at all."""


class FetchError(RatingError):
    """A ratings page could not be retrieved."""

    def __init__(self, message: str, url: str = None, status_code: int = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code
