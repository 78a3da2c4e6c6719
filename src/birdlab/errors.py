class BirdlabError(Exception):
    """Base for all birdlab exceptions."""

    pass


class InvalidArgument(BirdlabError, ValueError):
    """Malformed operator parameters or inputs.

    Raised synchronously by the operation that received them. Every core operation is
    deterministic given its inputs and random stream, so retrying is never useful.
    """

    pass
