import logging
from typing import Any, Dict, Optional, Tuple

import requests

from ..exceptions import ServiceNowResponseError

# Set up logging
logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://servicenow.com"
REQUEST_TIMEOUT = 15


def create_auth(username: str, password: str) -> Tuple[str, str]:
    """
    Create HTTP Basic credentials for ServiceNow API requests.

    Args:
        username (str): The ServiceNow account username.
        password (str): The ServiceNow account password.

    Returns:
        Tuple[str, str]: A (username, password) pair accepted by requests.

    Raises:
        ValueError: If either value is empty.
    """
    if not username or not password:
        raise ValueError("ServiceNow username and password must be non-empty")
    return (username, password)


class ServiceNowAPI:
    """
    Base class for interacting with the ServiceNow REST API.

    Transport errors from requests are not caught here; callers decide
    whether a failed call ends the cycle or the process.

    Attributes:
        base_url (str): The instance URL, e.g. https://example.service-now.com.
        auth (Tuple[str, str]): HTTP Basic credentials.
        timeout (float): Per-request timeout in seconds.
    """

    def __init__(self, base_url: str, auth: Tuple[str, str], timeout: float = REQUEST_TIMEOUT):
        """
        Initialize the ServiceNow API client.

        Args:
            base_url (str): The instance URL. A trailing slash is ignored.
            auth (Tuple[str, str]): HTTP Basic credentials, see create_auth.
            timeout (float): Per-request timeout in seconds (default: 15).
        """
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.auth = auth
        self.timeout = timeout

    def get(self, url_suffix: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        """
        Perform a GET request to the specified ServiceNow API endpoint.

        Args:
            url_suffix (str): The API endpoint path to append to the base URL.
            params (Optional[Dict[str, Any]]): Query string parameters.

        Returns:
            requests.Response: The raw response, whatever its status code.

        Raises:
            requests.exceptions.RequestException: On connection errors and timeouts.
        """
        url = f"{self.base_url}/{url_suffix}"
        return requests.get(
            url,
            params=params,
            auth=self.auth,
            headers={"Accept": "application/json"},
            timeout=self.timeout,
        )

    def _handle_response(self, response: requests.Response) -> Optional[Dict[str, Any]]:
        """
        Handle the HTTP response from the ServiceNow API.

        Args:
            response (requests.Response): The HTTP response object.

        Returns:
            Optional[Dict[str, Any]]: The decoded JSON body on a 200, None otherwise.

        Raises:
            ServiceNowResponseError: If a 200 response body is not a JSON object.
        """
        if response.status_code != 200:
            logger.error(f"Data retrieval failed with {response.status_code} {response.reason}")
            if response.status_code in (401, 403):
                logger.error("ServiceNow rejected the credentials, check username and password")
            return None

        logger.debug(f"Rest API GET completed successfully: {response.status_code} (ServiceNow)")
        try:
            data = response.json()
        except ValueError as e:
            raise ServiceNowResponseError(f"Response body is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ServiceNowResponseError(
                f"Expected a JSON object, got {type(data).__name__}"
            )
        return data
