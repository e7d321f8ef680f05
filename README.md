# o1agent

The management side of an O-RAN distributed unit. It keeps the list of active
alarms and the state of each cell, builds the YANG data trees that answer
operational get requests, and applies configuration change sets to cells.

## What it covers

- **Alarms**: `o1agent.alarms.AlarmManager` stores raised alarms keyed by alarm
  id (`raise_alarm`, `clear_alarm`, `clear_alarm_id`, `alarms`). Its `update`
  method takes a binary alarm record, decodes it with `decode_record` and
  raises or clears the alarm it carries; an optional `notifier` callable is
  called for each newly raised alarm. `AlarmRecord.encode` produces the
  fixed-size wire form.
- **Sending alarms**: `o1agent.alarm_interface` connects to a Unix stream
  socket (by default `/tmp/alarmsock`) and sends one record per call:
  `raise_alarm`, `clear_alarm`, `raise_cell_alarm` and `clear_cell_alarm`.
  `raise_cell_alarm` with any id other than `CELL_UP_ALARM_ID` (1009) sends a
  cell down alarm, first clearing the cell up alarm.
- **Alarm YANG views**: `o1agent.yang_alarms` builds the operational data trees
  for the O-RAN alarm module and the 3GPP fault-management module
  (`alarm_oran_tree`, `alarm_3gpp_tree`, and the `AlarmOranYangModel` and
  `Alarm3GPPYangModel` callback classes).
- **Cells**: `o1agent.cells.NrCellList` records each cell's operational and
  cell state. `o1agent.cm_interface.set_cell_op_state` is the entry point for
  reporting a change.
- **Configuration callbacks**: `o1agent.nr_cell_cb.NrCellCb` reports cell
  states and, when a cell's administrative state changes, calls the
  `bring_cell_up` or `bring_cell_down` callable it was given.
  `o1agent.nr_cell_du_cb.NrCellDuCb` collects NRCellDU attributes, PLMN data
  and element identifiers from a change set and passes the resulting
  `NrCellDu` to the `set_cell_param` callable it was given.
- **Start-up configuration**: `o1agent.init_config.InitConfig` reads the DU, CU
  and RIC addresses and ports from a session's `get_item`.
  `o1agent.cm_interface.get_startup_config` returns them as a `StartupConfig`.
- **NETCONF server process**: `o1agent.netconf_manager` starts and stops the
  `netopeer2-server` process through the shell (`start_netopeer_server`,
  `stop_netopeer_server`, `sigint_handler`).

Data trees are `o1agent.netconf_utils.DataNode` objects; `to_dict()` turns one
into nested dicts. Change sets are iterables of `o1agent.netconf_utils.Change`.

## Example

```python
from o1agent.alarms import Alarm, AlarmManager
from o1agent.yang_alarms import alarm_oran_tree

manager = AlarmManager()
manager.raise_alarm(Alarm(alarm_id=1009, additional_text="CELL 1 UP"))
tree = alarm_oran_tree(manager)
print(tree.to_dict())
```

```python
from o1agent.cells import NrCellList
from o1agent.defs import CellState, OpState

cells = NrCellList()
cells.set_cell_op_state(1, OpState.ENABLED, CellState.ACTIVE)
for cell_id, info in cells.cell_op_states().items():
    print(cell_id, info)
```

Failures are raised as `o1agent.defs.O1Error`.

## What it does not do

- It has no datastore binding of its own. Sessions are objects you supply:
  `InitConfig.init` needs one with `get_item(xpath)`, and the `module_change`
  callbacks need one with `get_changes(xpath)`. Registering the callbacks with
  a NETCONF datastore is left to the caller.
- It does not listen on the alarm socket. `AlarmManager.update` decodes
  records you hand to it; accepting connections is left to the caller.
- It does not send fault notifications anywhere by itself; pass a `notifier`
  to `AlarmManager` for that.
- It has no command-line program.

## Tests

```
pip install .[test]
pytest
```