"""Operational data trees of active alarms for the O-RAN and 3GPP models."""

from __future__ import annotations

import logging

from .alarms import Alarm, AlarmManager, default_alarm_manager
from .defs import ALARM_MODULE_PATH_3GPP, ALARM_MODULE_PATH_ORAN
from .netconf_utils import DataNode

logger = logging.getLogger(__name__)


def _add_alarm(parent: DataNode, alarm: Alarm) -> None:
    logger.debug("Alarm ID %d", alarm.alarm_id)
    node = parent.add("alarm")
    node.add("alarm-id", str(alarm.alarm_id))
    node.add("alarm-text", alarm.additional_text)
    node.add("severity", str(alarm.event_type))
    node.add("status", alarm.specific_problem)
    node.add("additional-info", alarm.additional_info)


def alarm_oran_tree(manager: AlarmManager) -> DataNode:
    """Build the O-RAN alarm tree from the manager's active alarms."""
    root = DataNode(ALARM_MODULE_PATH_ORAN)
    alarms = root.add("alarms")
    for alarm in manager.alarms().values():
        _add_alarm(alarms, alarm)
    return root


def alarm_3gpp_tree(manager: AlarmManager) -> DataNode:
    """Build the 3GPP alarm list tree from the manager's active alarms."""
    root = DataNode(ALARM_MODULE_PATH_3GPP)
    alarms = root.add("AlarmList")
    alarms.add("AlarmListGrp")
    record_list = root.add("alarmRecordList")
    record_list.add("AlarmRecordGrp")
    for alarm in manager.alarms().values():
        _add_alarm(alarms, alarm)
    return root


class AlarmOranYangModel:
    """Answers operational get requests for the O-RAN alarm module."""

    def __init__(self, manager: AlarmManager | None = None) -> None:
        self._manager = manager

    def oper_get_items(self, module_name: str, path: str) -> DataNode:
        """Return the alarm tree for a get request on ``path``."""
        logger.debug("Callback called to provide %s data (%s)", path, module_name)
        return alarm_oran_tree(self._manager or default_alarm_manager())


class Alarm3GPPYangModel:
    """Answers operational get requests for the 3GPP fault management module."""

    def __init__(self, manager: AlarmManager | None = None) -> None:
        self._manager = manager

    def oper_get_items(self, module_name: str, path: str) -> DataNode:
        """Return the alarm list tree for a get request on ``path``."""
        logger.debug("Callback called to provide %s data (%s)", path, module_name)
        return alarm_3gpp_tree(self._manager or default_alarm_manager())