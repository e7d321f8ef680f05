"""Get and change handling for the cell state (hello-world) module."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Protocol

from .cells import (
    NrCellList,
    admin_state_to_enum,
    default_cell_list,
    enum_to_cell_state_string,
    enum_to_operational_state_string,
)
from .defs import CELL_STATE_MODULE_PATH, AdminState, O1Error
from .netconf_utils import Change, DataNode, Event, ev_to_str, print_change

logger = logging.getLogger(__name__)

CellAction = Callable[[int], bool]


class ChangeSession(Protocol):
    """Datastore session that reports the changes under an xpath."""

    def get_changes(self, xpath: str) -> Iterable[Change]: ...


def _admin_state_xpath(cell_id: int) -> str:
    return (
        f"{CELL_STATE_MODULE_PATH}/du-to-ru-connection[name='{cell_id}']"
        "/administrative-state"
    )


class NrCellCb:
    """Answers get requests for cell states and applies admin state changes."""

    def __init__(
        self,
        cell_list: NrCellList | None = None,
        bring_cell_up: CellAction | None = None,
        bring_cell_down: CellAction | None = None,
    ) -> None:
        self._cell_list = cell_list
        self._bring_cell_up = bring_cell_up
        self._bring_cell_down = bring_cell_down

    @property
    def cell_list(self) -> NrCellList:
        return self._cell_list or default_cell_list()

    def oper_get_items(self, module_name: str, path: str) -> DataNode:
        """Return the cell state tree for a get request on ``path``."""
        logger.debug("Callback called for path=%s on get request (%s)", path, module_name)
        root = DataNode(CELL_STATE_MODULE_PATH)
        connection = root.add("du-to-ru-connection")
        for cell_id, info in self.cell_list.cell_op_states().items():
            logger.debug(
                "cellId = %d, opState=%d, cellState=%d",
                cell_id,
                info.op_state,
                info.cell_state,
            )
            connection.add("name", str(cell_id))
            connection.add(
                "operational-state", enum_to_operational_state_string(info.op_state)
            )
            connection.add("cell-state", enum_to_cell_state_string(info.cell_state))
        return root

    def module_change(
        self, session: ChangeSession, module_name: str, event
    ) -> list[tuple[int, AdminState]]:
        """Apply admin state changes; return the (cell id, state) pairs applied.

        Raises O1Error if a cell could not be brought to its new state.
        """
        logger.debug("Notification %s", ev_to_str(event))
        applied: list[tuple[int, AdminState]] = []
        if event != Event.CHANGE:
            return applied
        cells = self.cell_list.cell_op_states()
        try:
            for change in session.get_changes(f"/{module_name}:*//."):
                new = change.new_val
                if new is None:
                    continue
                logger.debug("Parameter value has been changed val=%s", new.value)
                for cell_id in cells:
                    if _admin_state_xpath(cell_id) not in str(new):
                        continue
                    print_change(change)
                    text = new.value or ""
                    state = admin_state_to_enum(text)
                    logger.debug(
                        "Update admin state cellId =%d with admin-state value=%s",
                        cell_id,
                        text,
                    )
                    if not self.set_admin_state(cell_id, state):
                        raise O1Error(f"could not change parameter value ={text}")
                    applied.append((cell_id, state))
        except O1Error:
            raise
        except Exception as exc:  # session failures are reported, not propagated
            logger.debug("NrCellCb exception : %s", exc)
        return applied

    def set_admin_state(self, cell_id: int, new_admin_state: AdminState) -> bool:
        """Bring the cell up when unlocked, down otherwise."""
        if new_admin_state == AdminState.UNLOCKED:
            logger.debug("set Admin State UNLOCKED")
            action = self._bring_cell_up
        else:
            logger.debug("set Admin State LOCKED")
            action = self._bring_cell_down
        if action is None:
            return True
        return bool(action(cell_id))