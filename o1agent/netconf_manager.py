"""Starting and stopping the NETCONF server process."""

from __future__ import annotations

import logging
import subprocess

logger = logging.getLogger(__name__)

START_COMMAND = "netopeer2-server -d -v3 > /etc/netopeer2-server.log 2>&1 &"
STOP_COMMAND = "kill -9 `pidof netopeer2-server`"


def _run(command: str, what: str) -> bool:
    try:
        result = subprocess.run(command, shell=True, check=False)
    except OSError as exc:
        logger.debug("Error during netopeer server %s : %s", what, exc)
        return False
    if result.returncode >= 0:
        logger.debug(
            "netopeer server %s normally with status : %d", what, result.returncode
        )
    else:
        logger.debug(
            "netopeer server %s abnormally with status : %d", what, result.returncode
        )
    return result.returncode == 0


def start_netopeer_server() -> bool:
    """Start the server in the background, logging to a file; True on success."""
    return _run(START_COMMAND, "started")


def stop_netopeer_server() -> bool:
    """Kill the running server; True on success."""
    return _run(STOP_COMMAND, "stopped")


def sigint_handler(signum, frame=None) -> None:
    """Signal handler that stops the server."""
    if not stop_netopeer_server():
        logger.debug("Error stopping Netopeer server")