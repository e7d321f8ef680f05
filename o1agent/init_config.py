"""Interface addresses read from the running datastore at start-up."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from enum import IntEnum
from types import MappingProxyType
from typing import Protocol

from .defs import O1Error, StartupConfig

logger = logging.getLogger(__name__)

IP_ADDRESS = "interface-address"
PORT = "port"
INTERFACE_MODULE_NAME_ORAN = "/o-ran-sc-odu-interface-v1:odu"
MAX_XPATH = 100
NETCONF_STARTUP_CFG = "/etc/netconf_startup.cfg"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class Session(Protocol):
    """Datastore session: ``get_item`` returns the value at an xpath or None."""

    def get_item(self, xpath: str) -> object | None: ...


class Interface(IntEnum):
    """Peers whose address the DU is configured with."""

    ODU = 0
    OCU = 1
    RIC = 2


_INTERFACE_NAMES = {
    Interface.ODU: "odu",
    Interface.OCU: "ocu",
    Interface.RIC: "ric",
}

Address = tuple[str, int]


def interface_xpath(sinf: str, param: str) -> str:
    """Build the xpath of a parameter of the named interface."""
    return (
        f"{INTERFACE_MODULE_NAME_ORAN}/interfaces/"
        f"interface[interface-name='{sinf}']/{param}"
    )


def interface_to_string(inf) -> str:
    """Return the datastore name of an interface, or "" if unknown."""
    try:
        return _INTERFACE_NAMES[Interface(inf)]
    except (ValueError, KeyError):
        logger.debug("no matching interface %r", inf)
        return ""


def _to_port(text: str) -> int:
    match = _LEADING_INT.match(text)
    number = int(match.group(1)) if match else 0
    return number % 0x10000


def _get_data(session: Session, xpath: str) -> str | None:
    try:
        value = session.get_item(xpath)
    except Exception:  # any datastore failure means the value is unavailable
        logger.debug("exception occurred for xpath= %s", xpath)
        return None
    if value is None:
        logger.debug("no data available at xpath= %s", xpath)
        return None
    return str(value)


class InitConfig:
    """Addresses and ports of the DU, CU and RIC interfaces."""

    def __init__(self) -> None:
        self._interfaces: dict[Interface, Address] = {}
        self._session: Session | None = None

    def init(self, session: Session) -> None:
        """Read all interface addresses; raises O1Error if any is missing."""
        self._session = session
        addresses: dict[Interface, Address] = {}
        for inf in Interface:
            address = self._interface_data(session, inf)
            if address is None:
                raise O1Error(
                    f"interface configuration for {interface_to_string(inf)} unavailable"
                )
            addresses[inf] = address
        for inf, address in addresses.items():
            self._interfaces.setdefault(inf, address)

    @staticmethod
    def _interface_data(session: Session, inf: Interface) -> Address | None:
        name = interface_to_string(inf)
        ip = _get_data(session, interface_xpath(name, IP_ADDRESS))
        if ip is None:
            return None
        port = _get_data(session, interface_xpath(name, PORT))
        if port is None:
            return None
        return ip, _to_port(port)

    def get_curr_interface_config(self) -> StartupConfig:
        """Return the startup config; raises O1Error on an empty ip or zero port."""
        cfg = StartupConfig()
        for inf, (ip, port) in sorted(self._interfaces.items()):
            name = interface_to_string(inf)
            if not ip:
                raise O1Error(f"no address configured for interface {name}")
            if port == 0:
                raise O1Error(f"no port configured for interface {name}")
            if inf is Interface.ODU:
                cfg.du_ipv4_addr, cfg.du_port = ip, port
            elif inf is Interface.OCU:
                cfg.cu_ipv4_addr, cfg.cu_port = ip, port
            else:
                cfg.ric_ipv4_addr, cfg.ric_port = ip, port
        return cfg

    def print_interface_config(self) -> list[str]:
        """Log each interface's address and port and return the lines."""
        lines = [
            f"interface [{interface_to_string(inf)}] : IP = {ip} Port = {port}"
            for inf, (ip, port) in sorted(self._interfaces.items())
        ]
        for line in lines:
            logger.debug(line)
        return lines

    def interfaces(self) -> Mapping[Interface, Address]:
        """Return a read-only view of the known interface addresses."""
        return MappingProxyType(dict(sorted(self._interfaces.items())))


_default_init_config: InitConfig | None = None


def default_init_config() -> InitConfig:
    """Return the process-wide interface configuration, creating it on first use."""
    global _default_init_config
    if _default_init_config is None:
        _default_init_config = InitConfig()
    return _default_init_config