"""Errors raised while fetching sources and article pages."""


class TransientFetchError(Exception):
    """A feed, page or article could not be fetched or parsed.

    Callers log it and skip the source or item; it never aborts a run.
    """

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch {url}: {reason}")
