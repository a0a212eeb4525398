from ninja_extra.throttling import AnonRateThrottle


class VerificationRateThrottle(AnonRateThrottle):
    """Public verification hits the RPC node on every call; limit per IP."""
    rate = "60/min"
    scope = "certificate_verification"
