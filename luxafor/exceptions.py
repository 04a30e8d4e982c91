class LuxaforError(Exception):
    """Base exception for Luxafor webhook errors."""
    pass

class FlagUpdateError(LuxaforError):
    """Raised when a batch write to the flags fails in transport."""
    pass
