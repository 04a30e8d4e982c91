class ServiceNowError(Exception):
    """Base exception for ServiceNow client errors."""
    pass

class ServiceNowResponseError(ServiceNowError):
    """Raised when a successful response carries a body that cannot be parsed."""
    pass
