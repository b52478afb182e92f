class UpstreamError(RuntimeError):
    """Raised when the check-in API fails (timeouts, network errors, error responses)."""
    pass


class RateLimitedError(UpstreamError):
    """Raised when the check-in API answers 429. Callers skip the cycle quietly."""
    pass
