"""Alarm records received over the alarm socket and the active alarm store."""

from __future__ import annotations

import logging
import re
import struct
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType

from .defs import MAX_ALARM_ID_LEN, O1Error

logger = logging.getLogger(__name__)

ADDITIONAL_TEXT_LEN = 100
SPECIFIC_PROBLEM_LEN = 100
ADDITIONAL_INFO_LEN = 100
ALARM_RAISE_TIME_LEN = 20

INDETERMINATE = 0
COMMUNICATIONS_ALARM = 1

_RECORD = struct.Struct(
    f"<iii{MAX_ALARM_ID_LEN}si{ADDITIONAL_TEXT_LEN}s"
    f"{SPECIFIC_PROBLEM_LEN}s{ADDITIONAL_INFO_LEN}s{ALARM_RAISE_TIME_LEN}s"
)
RECORD_SIZE = _RECORD.size

_ID_PATTERN = re.compile(r"\s*([+-]?)(\d+)")


class MsgType(IntEnum):
    """Kind of message carried on the alarm socket."""

    ALARM = 1


class AlarmAction(IntEnum):
    """What the receiver should do with an alarm message."""

    RAISE_ALARM = 1
    CLEAR_ALARM = 2


@dataclass
class Alarm:
    """An active alarm as kept by the alarm manager."""

    alarm_id: int = 0
    perceived_severity: int = 0
    additional_text: str = ""
    event_type: int = 0
    specific_problem: str = ""
    additional_info: str = ""


def _pack_text(text: str, size: int) -> bytes:
    return text.encode("utf-8")[: size - 1]


def _unpack_text(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("utf-8", errors="replace")


@dataclass
class AlarmRecord:
    """An alarm message as sent over the alarm socket."""

    msg_type: int = MsgType.ALARM
    action: int = 0
    event_type: int = 0
    alarm_id: str = ""
    perceived_severity: int = 0
    additional_text: str = ""
    specific_problem: str = ""
    additional_info: str = ""
    alarm_raise_time: str = ""

    def encode(self) -> bytes:
        """Serialise to the fixed-size wire form; long strings are cut short."""
        return _RECORD.pack(
            int(self.msg_type),
            int(self.action),
            int(self.event_type),
            _pack_text(self.alarm_id, MAX_ALARM_ID_LEN),
            int(self.perceived_severity),
            _pack_text(self.additional_text, ADDITIONAL_TEXT_LEN),
            _pack_text(self.specific_problem, SPECIFIC_PROBLEM_LEN),
            _pack_text(self.additional_info, ADDITIONAL_INFO_LEN),
            _pack_text(self.alarm_raise_time, ALARM_RAISE_TIME_LEN),
        )


def decode_record(data: bytes) -> AlarmRecord:
    """Parse an alarm message; raises O1Error if the data is too short."""
    if len(data) < RECORD_SIZE:
        raise O1Error(f"alarm record needs {RECORD_SIZE} bytes, got {len(data)}")
    (msg_type, action, event_type, alarm_id, severity,
     text, problem, info, raise_time) = _RECORD.unpack_from(data)
    return AlarmRecord(
        msg_type=msg_type,
        action=action,
        event_type=event_type,
        alarm_id=_unpack_text(alarm_id),
        perceived_severity=severity,
        additional_text=_unpack_text(text),
        specific_problem=_unpack_text(problem),
        additional_info=_unpack_text(info),
        alarm_raise_time=_unpack_text(raise_time),
    )


def _parse_alarm_id(text: str) -> int:
    match = _ID_PATTERN.match(text)
    if match is None:
        raise O1Error(f"invalid alarm id {text!r}")
    number = int(match.group(2))
    if match.group(1) == "-":
        number = -number
    return number % 0x10000


class AlarmManager:
    """Store of active alarms keyed by alarm id."""

    def __init__(self, notifier: Callable[[Alarm], bool] | None = None) -> None:
        self._alarms: dict[int, Alarm] = {}
        self._notifier = notifier

    def update(self, data: bytes) -> bool:
        """Apply an alarm message; return True if its action took effect."""
        record = decode_record(data)
        logger.debug("AlarmManager: MsgType %d", record.msg_type)
        alarm = Alarm()
        if record.msg_type == MsgType.ALARM:
            logger.debug("AlarmManager: alarm info %s", record)
            alarm = Alarm(
                alarm_id=_parse_alarm_id(record.alarm_id),
                perceived_severity=record.perceived_severity,
                additional_text=record.additional_text,
                event_type=record.event_type,
                specific_problem=record.specific_problem,
                additional_info=record.additional_info,
            )

        if record.action == AlarmAction.RAISE_ALARM:
            if not self.raise_alarm(alarm):
                logger.debug("Error in raising alarm for alarm Id %s", record.alarm_id)
                return False
            if self._notifier is not None and not self._notifier(alarm):
                return False
            logger.debug("Alarm raised for alarm Id %s", record.alarm_id)
            return True
        if record.action == AlarmAction.CLEAR_ALARM:
            if self.clear_alarm(alarm):
                logger.debug("Alarm cleared for alarm Id %s", record.alarm_id)
                return True
            logger.debug("Error in clearing alarm for alarm Id %s", record.alarm_id)
            return False
        logger.debug("No action performed")
        return False

    def raise_alarm(self, alarm: Alarm) -> bool:
        """Store an alarm; False if one with the same id is already active."""
        if alarm.alarm_id in self._alarms:
            return False
        self._alarms[alarm.alarm_id] = alarm
        return True

    def clear_alarm(self, alarm: Alarm) -> bool:
        """Remove the alarm with the same id; False if none was active."""
        return self.clear_alarm_id(alarm.alarm_id)

    def clear_alarm_id(self, alarm_id: int) -> bool:
        """Remove the alarm with this id; False if none was active."""
        return self._alarms.pop(alarm_id, None) is not None

    def alarms(self) -> Mapping[int, Alarm]:
        """Return a read-only view of active alarms, ordered by id."""
        return MappingProxyType(dict(sorted(self._alarms.items())))


_default_alarm_manager: AlarmManager | None = None


def default_alarm_manager() -> AlarmManager:
    """Return the process-wide alarm manager, creating it on first use."""
    global _default_alarm_manager
    if _default_alarm_manager is None:
        _default_alarm_manager = AlarmManager()
    return _default_alarm_manager