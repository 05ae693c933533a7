from typing import Optional


class ScrapeError(Exception):
    pass


class TransportFailure(ScrapeError):
    def __init__(
        self,
        message: str,
        *,
        url: str,
        status_code: Optional[int] = None,
        error_kind: Optional[str] = None,
    ):
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.error_kind = error_kind


class BlockedFailure(ScrapeError):
    def __init__(self, url: str, status_code: int):
        super().__init__(f"HTTP {status_code}: request blocked")
        self.url = url
        self.status_code = status_code


class RenderFailure(ScrapeError):
    def __init__(self, url: str, cause: str):
        super().__init__(f"render failed for {url}: {cause}")
        self.url = url
        self.cause = cause


class ExtractionFailure(ScrapeError):
    """No listings could be located for one source. Never escapes the aggregator."""

    def __init__(self, source_name: str, cause: str):
        super().__init__(f"{source_name}: {cause}")
        self.source_name = source_name
        self.cause = cause


class FragmentFailure(ScrapeError):
    def __init__(self, source_name: str, index: int, cause: str):
        super().__init__(f"{source_name} fragment {index}: {cause}")
        self.source_name = source_name
        self.index = index
        self.cause = cause
