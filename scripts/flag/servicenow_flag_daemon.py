"""
ServiceNow Flag Daemon

Polls a ServiceNow assignment group for active, unassigned tasks and shows
the queue size on one or more Luxafor flags. A changed count makes the flags
blink before settling on the new color; an unchanged color is re-sent after
twelve quiet cycles, on the 13th, in case a flag lost its state.
"""

import argparse
import functools
import logging
import os
import sys
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from luxafor.api.luxafor_api import LuxaforAPI
from luxafor.exceptions import FlagUpdateError
from luxafor.facade.flag_facade import FlagFacade
from scripts.flag.config import ConfigurationError, FlagConfig, load_config
from scripts.flag.tiers import tier_for_count
from servicenow.api.servicenow_api import create_auth
from servicenow.api.task_api import TaskAPI
from servicenow.exceptions import ServiceNowResponseError

logger = logging.getLogger(__name__)

# Cycles without an update after which the current color is sent again.
# The counter must exceed this, so a steady color is re-sent every 13th cycle.
REFRESH_AFTER_CYCLES = 11
BLINK_SECONDS = 3

FLAG_UPDATE = "flag"
PERIODIC_UPDATE = "periodic"
NO_UPDATE = "none"


def handle_keyboard_interrupt(exit_message="Daemon interrupted by user"):
    """Decorator to handle KeyboardInterrupt and exit gracefully."""

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except KeyboardInterrupt:
                logger.info(f"\n{exit_message}")
                sys.exit(0)

        return wrapper

    return decorator


@dataclass
class CycleState:
    previous_count: int = 0
    cycles_since_update: int = 0


class ServiceNowFlagDaemon:
    """
    Keeps the flags in line with the ServiceNow task queue.

    Every flag always shows the same color; writes go through FlagFacade,
    which updates all flags as one batch.
    """

    def __init__(self, config: FlagConfig, tasks: TaskAPI, flags: FlagFacade):
        """
        Initialize the flag daemon.

        Args:
            config: Validated daemon configuration
            tasks: TaskAPI client for the ServiceNow instance
            flags: FlagFacade wrapping every configured flag
        """
        self.config = config
        self.tasks = tasks
        self.flags = flags
        self.state = CycleState()

    def reset_flags(self) -> None:
        """Turn every flag off so the first cycle starts from a known color."""
        results = self.flags.reset()
        if not all(results):
            logger.warning(f"Reset failed for {results.count(False)} of {len(results)} flag(s)")

    def poll(self) -> Optional[int]:
        """
        Read the current number of open tasks.

        Returns:
            The task count, or None if this cycle should not react.
        """
        try:
            result = self.tasks.get_open_task_count(self.config.assignment_group)
        except (requests.exceptions.RequestException, ServiceNowResponseError) as e:
            logger.error(f"API call failed with error: {e}")
            return None

        if not result.ok and self.config.hold_on_error:
            logger.warning(
                f"ServiceNow returned {result.status_code}, holding current flag color"
            )
            return None

        return result.count

    def react(self, count: int) -> str:
        """
        Update the flags for a new task count if needed.

        Args:
            count: The task count from this cycle's poll

        Returns:
            The kind of update performed: "flag", "periodic" or "none".

        Raises:
            FlagUpdateError: If a flag write fails in transport.
        """
        color = tier_for_count(count, self.config.low, self.config.high).color

        if count != self.state.previous_count:
            update = FLAG_UPDATE
        elif self.state.cycles_since_update > REFRESH_AFTER_CYCLES:
            update = PERIODIC_UPDATE
        else:
            update = NO_UPDATE

        try:
            if update == FLAG_UPDATE:
                self.flags.blink(color)
                # Space the blink and the solid color apart
                time.sleep(BLINK_SECONDS)
                self.flags.solid(color)
                logger.info(f"{count} tickets in queue (Flag update)")
            elif update == PERIODIC_UPDATE:
                self.flags.solid(color)
                logger.info(f"{count} tickets in queue (Periodic flag update)")
            else:
                logger.info(f"{count} tickets in queue (No update)")
        except FlagUpdateError as e:
            logger.error(f"Failed to update flag with error: {e}")
            raise

        self.state.previous_count = count
        if update == NO_UPDATE:
            self.state.cycles_since_update += 1
        else:
            self.state.cycles_since_update = 0
        return update

    def run_once(self) -> Dict[str, Any]:
        """
        Run a single poll and react cycle.

        Returns:
            Cycle summary with the count, tier and update kind. Count and
            tier are None when the poll failed.
        """
        count = self.poll()
        if count is None:
            return {"count": None, "tier": None, "update": NO_UPDATE}

        update = self.react(count)
        tier = tier_for_count(count, self.config.low, self.config.high)
        return {"count": count, "tier": tier, "update": update}

    def run_continuous(self) -> None:
        """
        Poll forever, sleeping between cycles.

        Stops when a flag write fails or on Ctrl+C.
        """
        interval = self.config.interval
        logger.info(f"Starting continuous daemon mode (interval: {interval}s)")

        first_cycle = True
        while True:
            try:
                if not first_cycle:
                    time.sleep(interval)
                first_cycle = False
                self.run_once()

            except FlagUpdateError:
                logger.error("Stopping daemon after failed flag update")
                return

            except KeyboardInterrupt:
                logger.info("\nDaemon stopped by user")
                return


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="ServiceNow Flag - Show the ServiceNow task queue on Luxafor flags"
    )
    parser.add_argument(
        "-l",
        "--luxaforapiid",
        metavar="<luxid>",
        help="Luxafor API key ID, comma separated IDs are supported (env: SNF_LUXID)",
    )
    parser.add_argument(
        "-u", "--username", metavar="<username>", help="ServiceNow account username (env: SNF_SNUSER)"
    )
    parser.add_argument(
        "-p", "--password", metavar="<password>", help="ServiceNow account password (env: SNF_SNPASS)"
    )
    parser.add_argument(
        "-a",
        "--assignmentgroup",
        metavar="<assignmentgroup>",
        help="ServiceNow assignment group (env: SNF_SNASSIGNGROUP)",
    )
    parser.add_argument(
        "-c",
        "--customurl",
        metavar="<customurl>",
        help="ServiceNow custom base-url, e.g. https://servicenow.com (env: SNF_SNBASEURL)",
    )
    parser.add_argument(
        "--low", type=int, metavar="<low>", help="Low value for led color (default: 1, env: SNF_LOW)"
    )
    parser.add_argument(
        "--high", type=int, metavar="<high>", help="High value for led color (default: 2, env: SNF_HIGH)"
    )
    parser.add_argument(
        "--interval",
        type=int,
        help="Polling interval in seconds (default: 300 = 5 minutes, env: SNF_INTERVAL)",
    )
    parser.add_argument(
        "--hold-on-error",
        action="store_true",
        help="Keep the current color when ServiceNow answers with an error status",
    )
    parser.add_argument(
        "--once", action="store_true", help="Run a single cycle and exit"
    )
    parser.add_argument(
        "--log",
        nargs="?",
        const="servicenow_flag.log",
        help="Enable logging to file (default: servicenow_flag.log)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Show verbose debug information"
    )
    return parser.parse_args(argv)


def setup_logging(config: FlagConfig) -> None:
    log_level = logging.DEBUG if config.verbose else logging.INFO
    handlers = [logging.StreamHandler(sys.stdout)]

    if config.log_path:
        log_dir = os.path.dirname(config.log_path)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)
        handlers.insert(0, logging.FileHandler(config.log_path))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )
    if config.log_path:
        logger.info(f"Logging to file: {config.log_path}")


@handle_keyboard_interrupt("Script interrupted by user")
def main(argv=None):
    """Main entry point for the ServiceNow flag daemon."""
    args = parse_args(argv)
    config = load_config(args)
    setup_logging(config)
    config.log_load_warnings()

    try:
        config.validate()
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(0)

    config.log_settings()
    logger.info("Application starting...")

    tasks = TaskAPI(config.servicenow_url, create_auth(config.username, config.password))
    flags = FlagFacade(config.device_ids, LuxaforAPI(config.luxafor_url))
    daemon = ServiceNowFlagDaemon(config, tasks, flags)

    daemon.reset_flags()

    if args.once:
        try:
            daemon.run_once()
        except FlagUpdateError:
            logger.error("Stopping daemon after failed flag update")
    else:
        daemon.run_continuous()

    logger.info("Daemon shutdown complete")


if __name__ == "__main__":
    main()
