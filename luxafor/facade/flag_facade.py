import logging
from typing import List, Sequence

import requests

from ..api.luxafor_api import LuxaforAPI, SOLID_COLOR, BLINK
from ..exceptions import FlagUpdateError

logger = logging.getLogger(__name__)

OFF = "000000"


class FlagFacade:
    """Applies the same color and action to every configured flag."""

    def __init__(self, device_ids: Sequence[str], api: LuxaforAPI):
        self.device_ids = tuple(device_ids)
        self.api = api

    def apply(self, color: str, action: str, stop_on_error: bool = True) -> List[bool]:
        """
        Sends one write per device, in configuration order.

        Args:
            color: Six hex digits.
            action: Either "solid_color" or "blink".
            stop_on_error: If False, a transport failure is logged, recorded
                as False and the remaining devices are still written.

        Returns:
            List[bool]: Per-device acceptance, see LuxaforAPI.set_color.

        Raises:
            FlagUpdateError: If a request fails in transport and stop_on_error
            is set. Devices after the failing one are not written.
        """
        results = []
        for device_id in self.device_ids:
            try:
                results.append(self.api.set_color(device_id, color, action))
            except requests.exceptions.RequestException as e:
                message = f"Failed to update flag {device_id} ({action} {color}): {e}"
                if stop_on_error:
                    raise FlagUpdateError(message) from e
                logger.error(message)
                results.append(False)
        return results

    def solid(self, color: str) -> List[bool]:
        return self.apply(color, SOLID_COLOR)

    def blink(self, color: str) -> List[bool]:
        return self.apply(color, BLINK)

    def reset(self) -> List[bool]:
        """Turns every flag off, trying each flag even if another one fails."""
        return self.apply(OFF, SOLID_COLOR, stop_on_error=False)
