"""Error taxonomy shared by the builders, the orchestrator and the HTTP layer."""


class LensError(Exception):
    """Base error; carries the HTTP status the API should answer with."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidRequestError(LensError):
    status_code = 400


class PlatformNotFoundError(LensError):
    """Upstream says the identifier does not exist, or the primary fetch failed."""

    status_code = 404

    def __init__(self, platform: str, identifier: str, detail: str = "User not found or API error") -> None:
        super().__init__(f"{platform}: {detail} ({identifier})")
        self.platform = platform
        self.identifier = identifier


class FeedError(LensError):
    """A single upstream endpoint failed or returned a payload we cannot read."""

    status_code = 502

    def __init__(self, platform: str, endpoint: str, detail: str) -> None:
        super().__init__(f"{platform} {endpoint}: {detail}")
        self.platform = platform
        self.endpoint = endpoint


class BothPlatformsFailedError(LensError):
    status_code = 502

    def __init__(self, reasons: dict[str, str]) -> None:
        detail = "; ".join(f"{name}: {reason}" for name, reason in reasons.items())
        message = "Failed to fetch data from both platforms"
        super().__init__(f"{message} ({detail})" if detail else message)
        self.reasons = reasons


class MalformedTimestampError(LensError, ValueError):
    """Calendar key that cannot be turned into a calendar date."""

    status_code = 400

    def __init__(self, key: object) -> None:
        super().__init__(f"Malformed calendar key: {key!r}")
        self.key = key


class MalformedCountError(LensError, ValueError):
    """Calendar count that is not a non-negative integer."""

    status_code = 400

    def __init__(self, key: object, count: object) -> None:
        super().__init__(f"Malformed calendar count for {key!r}: {count!r}")
        self.key = key
        self.count = count
