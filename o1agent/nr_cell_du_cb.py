"""Get and change handling for the NR cell DU managed element modules."""

from __future__ import annotations

import logging
import re
import string
from collections.abc import Callable, Iterable
from typing import Protocol

from .cells import (
    NrCellList,
    default_cell_list,
    enum_to_cell_state_string,
    enum_to_operational_state_string,
)
from .defs import (
    GNB_DU_FUNTION_MODULE_NAME,
    MANAGED_ELEMENT_MODULE_PATH,
    MAX_SUPPORTED_PLMN,
    MNC_LEN,
    NR_CELL_DU_MODULE_NAME,
    SD_LEN,
    AdminState,
    ManagedElement,
    NrCellDu,
    O1Error,
)
from .netconf_utils import Change, DataNode, Event, ev_to_str, get_leaf_info

logger = logging.getLogger(__name__)

XPATH_MAX_LEN = 256
MAX_PLMN_MEMBER = 4
ROK = 0

_ATOI = re.compile(r"\s*([+-]?\d+)")

_ATTRIBUTE_FIELDS = {
    "cellLocalId": "cell_local_id",
    "nRPCI": "nr_pci",
    "nRTAC": "nr_tac",
    "arfcnDL": "arfcn_dl",
    "arfcnUL": "arfcn_ul",
    "arfcnSUL": "arfcn_sul",
    "ssbFrequency": "ssb_frequency",
    "ssbPeriodicity": "ssb_periodicity",
    "ssbSubCarrierSpacing": "ssb_sub_carrier_spacing",
    "ssbOffset": "ssb_offset",
    "ssbDuration": "ssb_duration",
    "bSChannelBwUL": "bs_channel_bw_ul",
    "bSChannelBwDL": "bs_channel_bw_dl",
    "bSChannelBwSUL": "bs_channel_bw_sul",
}


class ChangeSession(Protocol):
    """Datastore session that reports the changes under an xpath."""

    def get_changes(self, xpath: str) -> Iterable[Change]: ...


def _atoi(text: str) -> int:
    match = _ATOI.match(text)
    return int(match.group(1)) if match else 0


def _stoi(text: str, base: int) -> int:
    """Parse the leading number of ``text``; raise O1Error if there is none."""
    stripped = text.lstrip()
    sign = ""
    if stripped[:1] in ("+", "-"):
        sign, stripped = stripped[0], stripped[1:]
    valid = string.digits[:base] if base <= 10 else (
        string.digits + string.ascii_lowercase[: base - 10]
    )
    digits = ""
    for char in stripped:
        if char.lower() not in valid:
            break
        digits += char
    if not digits:
        raise O1Error(f"invalid number {text!r} in base {base}")
    return int(sign + digits, base)


def _digit_at(val: str, index: int, width: int, base: int) -> int:
    if index > len(val):
        raise O1Error(f"value {val!r} too short")
    return _stoi(val[index:index + width], base)


def administrative_state_to_enum(val: str) -> AdminState:
    """Parse an administrative state; raises O1Error for unknown values."""
    try:
        return AdminState[val]
    except KeyError:
        raise O1Error(f"unknown administrative state {val!r}") from None


class NrCellDuCb:
    """Answers get requests for NR cell DU data and applies its configuration."""

    def __init__(
        self,
        cell_list: NrCellList | None = None,
        set_cell_param: Callable[[NrCellDu], int] | None = None,
    ) -> None:
        self._cell_list = cell_list
        self._set_cell_param = set_cell_param
        self.cell_params = NrCellDu()
        self.managed_element = ManagedElement()
        self.plmn_list_num = 0

    @property
    def cell_list(self) -> NrCellList:
        return self._cell_list or default_cell_list()

    def oper_get_items(self, module_name: str, path: str) -> DataNode:
        """Return the managed element tree for a get request on ``path``."""
        logger.debug("Callback called for path=%s on get request (%s)", path, module_name)
        root = DataNode(MANAGED_ELEMENT_MODULE_PATH)
        root.add("id", self.managed_element.me_id)
        gnbdu = root.add(f"{GNB_DU_FUNTION_MODULE_NAME}:GNBDUFunction")
        gnbdu.add("id", self.managed_element.gnb_id)
        nr_cell_du = gnbdu.add(f"{NR_CELL_DU_MODULE_NAME}:NRCellDU")
        nr_cell_du.add("id", self.managed_element.nr_cell_du_id)
        attributes = nr_cell_du.add("attributes")
        for cell_id, info in self.cell_list.cell_op_states().items():
            logger.debug(
                "cellId = %d, opState=%d, cellState=%d",
                cell_id,
                info.op_state,
                info.cell_state,
            )
            attributes.add(
                "operationalState", enum_to_operational_state_string(info.op_state)
            )
            attributes.add("cellState", enum_to_cell_state_string(info.cell_state))
        return root

    def update_params(self, parent: str, leaf: str, val: str) -> None:
        """Store one changed leaf value in the cell parameters or identifiers."""
        member_num = self.plmn_list_num // MAX_PLMN_MEMBER
        params = self.cell_params
        if "attribute" in parent:
            if leaf in _ATTRIBUTE_FIELDS:
                setattr(params, _ATTRIBUTE_FIELDS[leaf], _atoi(val))
                logger.debug("%s = %s", leaf, getattr(params, _ATTRIBUTE_FIELDS[leaf]))
            elif leaf == "administrativeState":
                params.administrative_state = administrative_state_to_enum(val)
                logger.debug("administrativeState = %s", params.administrative_state)
        elif "pLMNInfoList" in parent and member_num < MAX_SUPPORTED_PLMN:
            plmn = params.plmn_list[member_num]
            if leaf == "mcc":
                plmn.mcc = [_digit_at(val, i, 1, 10) for i in range(3)]
            elif leaf == "mnc":
                mnc = [_digit_at(val, 0, 1, 10), _digit_at(val, 1, 1, 10)]
                mnc.append(_digit_at(val, 2, 1, 10) if len(val) > 2 else 0)
                plmn.mnc = mnc[:MNC_LEN]
            elif leaf == "sst":
                plmn.sst = _atoi(val)
            elif leaf == "sd":
                plmn.sd = [_digit_at(val, i * 2, 2, 16) for i in range(SD_LEN)]
            logger.debug("plmnList[%d] = %s", member_num, plmn)
            self.plmn_list_num += 1
        elif "ManagedElement" in parent:
            if leaf == "id":
                self.managed_element.me_id = val
        elif "GNBDUFunction" in parent:
            if leaf == "id":
                self.managed_element.gnb_id = val
        elif "NRCellDu" in parent:
            if leaf == "id":
                self.managed_element.nr_cell_du_id = val

    def configure_cell(self) -> bool:
        """Pass the cell parameters on to the DU; True on success."""
        logger.debug("configcell")
        if self._set_cell_param is None:
            return True
        if self._set_cell_param(self.cell_params) != ROK:
            logger.debug("fail to set cell configuration in DU")
            return False
        return True

    def module_change(
        self, session: ChangeSession, module_name: str, event
    ) -> list[tuple[str, str, str]]:
        """Apply changed values and configure the cell.

        Returns the (parent, leaf, value) triples applied. Raises O1Error if
        a value cannot be applied or the cell cannot be configured.
        """
        logger.debug("Notification %s", ev_to_str(event))
        self.plmn_list_num = 0
        applied: list[tuple[str, str, str]] = []
        if event != Event.CHANGE:
            return applied
        try:
            for change in session.get_changes(f"/{module_name}:*//."):
                new = change.new_val
                if new is None:
                    continue
                val = new.value or ""
                parent, leaf = get_leaf_info(str(new))
                logger.debug("parent = [%s], leaf = [%s]", parent, leaf)
                self.update_params(parent, leaf, val)
                applied.append((parent, leaf, val))
        except O1Error:
            raise
        except Exception as exc:
            raise O1Error(f"cell configuration change failed: {exc}") from exc
        if not self.configure_cell():
            raise O1Error("configcell failed")
        return applied