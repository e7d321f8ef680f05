"""Cell operational state records and the list of known cells."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .defs import AdminState, CellState, OpState

logger = logging.getLogger(__name__)


@dataclass
class NrCellInfo:
    """Operational and activity state of one cell."""

    cell_id: int = 0
    op_state: OpState = OpState.DISABLED
    cell_state: CellState = CellState.IDLE


def enum_to_operational_state_string(val) -> str:
    """Return the YANG string for an operational state; unknown gives DISABLED."""
    try:
        return OpState(val).name
    except ValueError:
        logger.debug("%s operational state not handled", val)
        return "DISABLED"


def enum_to_cell_state_string(val) -> str:
    """Return the YANG string for a cell state; unknown gives IDLE."""
    try:
        return CellState(val).name
    except ValueError:
        logger.debug("%s cell state not handled", val)
        return "IDLE"


def admin_state_to_enum(val: str) -> AdminState:
    """Parse an administrative state string; unknown values give LOCKED."""
    try:
        return AdminState[val]
    except KeyError:
        logger.debug("%s admin state not handled", val)
        return AdminState.LOCKED


class NrCellList:
    """Cells keyed by cell id, kept in ascending id order."""

    def __init__(self) -> None:
        self._cells: dict[int, NrCellInfo] = {}

    def set_cell_op_state(
        self, cell_id: int, op_state: OpState, cell_state: CellState
    ) -> bool:
        """Record the states of a cell, replacing any earlier entry."""
        logger.debug(
            "Setting cellId = %d, opState=%d, cellState=%d",
            cell_id,
            op_state,
            cell_state,
        )
        self._cells[cell_id] = NrCellInfo(
            cell_id=cell_id, op_state=OpState(op_state), cell_state=CellState(cell_state)
        )
        return True

    def cell_op_states(self) -> Mapping[int, NrCellInfo]:
        """Return a read-only view of the cells, ordered by cell id."""
        return MappingProxyType(dict(sorted(self._cells.items())))


_default_cell_list: NrCellList | None = None


def default_cell_list() -> NrCellList:
    """Return the process-wide cell list, creating it on first use."""
    global _default_cell_list
    if _default_cell_list is None:
        _default_cell_list = NrCellList()
    return _default_cell_list