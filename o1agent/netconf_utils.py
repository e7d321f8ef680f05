"""Change records, data trees and helpers shared by the NETCONF callbacks."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum

logger = logging.getLogger(__name__)


class Operation(IntEnum):
    """Kind of change reported for a datastore node."""

    CREATED = 0
    MODIFIED = 1
    DELETED = 2
    MOVED = 3


class Event(IntEnum):
    """Phase of a datastore change notification."""

    UPDATE = 0
    CHANGE = 1
    DONE = 2
    ABORT = 3
    ENABLED = 4
    RPC = 5


@dataclass(frozen=True)
class Value:
    """A datastore value at an xpath; ``value`` is None for containers."""

    xpath: str
    value: str | None = None

    def __str__(self) -> str:
        if self.value is None:
            return self.xpath
        return f"{self.xpath} = {self.value}"


@dataclass(frozen=True)
class Change:
    """One change of a datastore node, with its old and new values."""

    oper: Operation
    old_val: Value | None = None
    new_val: Value | None = None


@dataclass
class DataNode:
    """A node of a YANG data tree: a container or a leaf with a value."""

    name: str
    value: str | None = None
    children: list[DataNode] = field(default_factory=list)

    def add(self, name: str, value: str | None = None) -> DataNode:
        """Append a child node and return it."""
        child = DataNode(name, value)
        self.children.append(child)
        return child

    def find(self, name: str) -> DataNode | None:
        """Return the first child with the given name, or None."""
        return next((child for child in self.children if child.name == name), None)

    def _content(self):
        if not self.children:
            return self.value
        content: dict = {}
        for child in self.children:
            item = child._content()
            if child.name not in content:
                content[child.name] = item
            elif isinstance(content[child.name], _Repeated):
                content[child.name].append(item)
            else:
                content[child.name] = _Repeated([content[child.name], item])
        return {key: list(val) if isinstance(val, _Repeated) else val
                for key, val in content.items()}

    def to_dict(self) -> dict:
        """Return the subtree as nested dicts; repeated names become lists."""
        return {self.name: self._content()}


class _Repeated(list):
    """Marks a list built from repeated sibling names."""


def print_change(change: Change) -> str | None:
    """Log a change with its old and new values and return the message."""
    old, new = change.old_val, change.new_val
    message = None
    if change.oper is Operation.CREATED:
        if new is not None:
            message = f"CREATED: {new}"
    elif change.oper is Operation.DELETED:
        if old is not None:
            message = f"DELETED:  {old}"
    elif change.oper is Operation.MODIFIED:
        if old is not None and new is not None:
            message = f"MODIFIED: old value {old} :new value {new}"
    elif change.oper is Operation.MOVED:
        if old is not None and new is not None:
            message = f"MOVED: {new.xpath} :after {old.xpath} "
        elif new is not None:
            message = f"MOVED: {new.xpath} : first"
    if message is not None:
        logger.debug(message)
    return message


def ev_to_str(ev) -> str:
    """Name of a notification event; anything but change or done is abort."""
    if ev == Event.CHANGE:
        return "change"
    if ev == Event.DONE:
        return "done"
    return "abort"


def get_leaf_info(xpath: str) -> tuple[str, str]:
    """Split a value string into the parent node name and the leaf name."""
    segments = xpath.split("/")
    if len(segments) == 1:
        parent, leaf = "", segments[0]
    else:
        parent, leaf = segments[-2], segments[-1]
    return parent, leaf.split(" ", 1)[0]