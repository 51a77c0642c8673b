class UpstreamError(Exception):
    """Base class for failures talking to the movie metadata API."""


class NetworkError(UpstreamError):
    """The request never produced a response (connection error, timeout)."""


class UpstreamStatusError(UpstreamError):
    def __init__(self, status_code: int, url: str = ""):
        self.status_code = status_code
        self.url = url
        super().__init__(f"Upstream responded with status {status_code} for {url}")


class DecodeError(UpstreamError):
    """The response body could not be decoded into the expected shape."""
