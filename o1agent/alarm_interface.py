"""Raising and clearing alarms by sending records to the alarm socket."""

from __future__ import annotations

import contextlib
import dataclasses
import logging
import socket
import time

from .alarms import COMMUNICATIONS_ALARM, INDETERMINATE, AlarmAction, AlarmRecord, MsgType
from .defs import ALARM_SOCK_PATH, O1Error

logger = logging.getLogger(__name__)

CELL_UP_ALARM_ID = 1009
CELL_DOWN_ALARM_ID = 1010
BUFF_SIZE = 20

_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def _send(record: AlarmRecord, socket_path: str) -> None:
    payload = record.encode()
    try:
        with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
            sock.connect(socket_path)
            sock.sendall(payload)
    except OSError as exc:
        raise O1Error(f"cannot send alarm to {socket_path}: {exc}") from exc


def _send_with_action(
    record: AlarmRecord, action: AlarmAction, socket_path: str
) -> AlarmRecord:
    message = dataclasses.replace(record, msg_type=MsgType.ALARM, action=action)
    _send(message, socket_path)
    return message


def raise_alarm(record: AlarmRecord, socket_path: str = ALARM_SOCK_PATH) -> AlarmRecord:
    """Send the record with the raise action; return the record as sent."""
    return _send_with_action(record, AlarmAction.RAISE_ALARM, socket_path)


def clear_alarm(record: AlarmRecord, socket_path: str = ALARM_SOCK_PATH) -> AlarmRecord:
    """Send the record with the clear action; return the record as sent."""
    return _send_with_action(record, AlarmAction.CLEAR_ALARM, socket_path)


def raise_cell_alarm(
    alarm_id: int, cell_id: int, socket_path: str = ALARM_SOCK_PATH
) -> AlarmRecord:
    """Raise a cell up or cell down alarm for the given cell.

    Any id other than the cell up alarm id is treated as cell down, and
    first clears a pending cell up alarm.
    """
    raise_time = time.strftime(_TIME_FORMAT, time.localtime())[: BUFF_SIZE - 1]
    if alarm_id == CELL_UP_ALARM_ID:
        text, info = f"CELL {cell_id} UP", "CELL UP"
    else:
        with contextlib.suppress(O1Error):
            clear_cell_alarm(CELL_UP_ALARM_ID, socket_path)
        text, info = f"CELL {cell_id} DOWN", "CELL DOWN"
    record = AlarmRecord(
        event_type=COMMUNICATIONS_ALARM,
        alarm_id=str(alarm_id),
        perceived_severity=INDETERMINATE,
        additional_text=text,
        additional_info=info,
        specific_problem="Active",
        alarm_raise_time=raise_time,
    )
    logger.debug("Raising cell alarm %s: %s", alarm_id, text)
    return raise_alarm(record, socket_path)


def clear_cell_alarm(alarm_id: int, socket_path: str = ALARM_SOCK_PATH) -> AlarmRecord:
    """Clear the cell alarm with the given id."""
    return clear_alarm(AlarmRecord(alarm_id=str(alarm_id)), socket_path)