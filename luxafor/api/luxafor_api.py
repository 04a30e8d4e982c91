import logging
import re
from typing import Any, Dict

import requests

# Set up logging
logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.luxafor.com/webhook/v1/actions"
REQUEST_TIMEOUT = 15

SOLID_COLOR = "solid_color"
BLINK = "blink"
ACTIONS = (SOLID_COLOR, BLINK)

_COLOR_PATTERN = re.compile(r"[0-9a-fA-F]{6}")


def create_payload(device_id: str, color: str) -> Dict[str, Any]:
    """
    Create the webhook body for a custom color.

    Args:
        device_id (str): The Luxafor webhook ID of the flag.
        color (str): Six hex digits, without a leading '#'.

    Returns:
        Dict[str, Any]: The JSON body expected by the webhook.
    """
    return {
        "userId": device_id,
        "actionFields": {"color": "custom", "custom_color": color},
    }


class LuxaforAPI:
    """
    Client for the Luxafor webhook relay.

    Each call changes one flag. Fan-out over several flags is done by
    FlagFacade.

    Attributes:
        base_url (str): The webhook actions URL.
        timeout (float): Per-request timeout in seconds.
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: float = REQUEST_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = {"Content-Type": "application/json"}

    def set_color(self, device_id: str, color: str, action: str = SOLID_COLOR) -> bool:
        """
        Set a flag to a solid or blinking custom color.

        Args:
            device_id (str): The Luxafor webhook ID of the flag.
            color (str): Six hex digits, e.g. "ff0000".
            action (str): Either "solid_color" or "blink".

        Returns:
            bool: True if the relay accepted the request, False on a non-200 status.

        Raises:
            ValueError: If the action or color is invalid.
            requests.exceptions.RequestException: On connection errors and timeouts.
        """
        if action not in ACTIONS:
            raise ValueError(f"Unsupported action: {action}")
        if not _COLOR_PATTERN.fullmatch(color):
            raise ValueError(f"Color must be six hex digits, got {color!r}")

        url = f"{self.base_url}/{action}"
        response = requests.post(
            url,
            json=create_payload(device_id, color),
            headers=self.headers,
            timeout=self.timeout,
        )
        return self._handle_response(response, action)

    def _handle_response(self, response: requests.Response, action: str) -> bool:
        if response.status_code != 200:
            logger.error(f"API call failed with {response.status_code} {response.reason}")
            return False

        logger.debug(
            f"Rest API POST completed successfully: {response.status_code} (Luxafor Flag - {action})"
        )
        return True
