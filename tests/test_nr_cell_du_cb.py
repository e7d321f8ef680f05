import pytest

from o1agent.cells import NrCellList
from o1agent.defs import (
    MANAGED_ELEMENT_MODULE_PATH,
    AdminState,
    CellState,
    O1Error,
    OpState,
)
from o1agent.netconf_utils import Change, Event, Operation, Value
from o1agent.nr_cell_du_cb import NrCellDuCb, administrative_state_to_enum


class FakeSession:
    def __init__(self, changes):
        self.changes = changes
        self.requested = []

    def get_changes(self, xpath):
        self.requested.append(xpath)
        return iter(self.changes)


class BrokenSession:
    def get_changes(self, xpath):
        raise RuntimeError("datastore gone")


def created(xpath, value):
    return Change(Operation.CREATED, None, Value(xpath, value))


@pytest.mark.parametrize("state", list(AdminState))
def test_administrative_state_round_trip(state):
    assert administrative_state_to_enum(state.name) is state


def test_administrative_state_unknown():
    with pytest.raises(O1Error):
        administrative_state_to_enum("BROKEN")


def test_update_attribute_values():
    cb = NrCellDuCb(NrCellList())
    cb.update_params("attributes", "nRPCI", "42")
    cb.update_params("attributes", "arfcnDL", "428000")
    cb.update_params("attributes", "administrativeState", "UNLOCKED")
    assert cb.cell_params.nr_pci == 42
    assert cb.cell_params.arfcn_dl == 428000
    assert cb.cell_params.administrative_state is AdminState.UNLOCKED


def test_update_attribute_non_numeric_is_zero():
    cb = NrCellDuCb(NrCellList())
    cb.update_params("attributes", "nRTAC", "7")
    cb.update_params("attributes", "nRTAC", "abc")
    assert cb.cell_params.nr_tac == 0


def test_update_plmn_fields():
    cb = NrCellDuCb(NrCellList())
    cb.update_params("pLMNInfoList[mcc='001']", "mcc", "001")
    cb.update_params("pLMNInfoList[mcc='001']", "mnc", "01")
    cb.update_params("pLMNInfoList[mcc='001']", "sst", "1")
    cb.update_params("pLMNInfoList[mcc='001']", "sd", "010203")
    plmn = cb.cell_params.plmn_list[0]
    assert plmn.mcc == [0, 0, 1]
    assert plmn.mnc == [0, 1, 0]
    assert plmn.sst == 1
    assert plmn.sd == [1, 2, 3]
    assert cb.plmn_list_num == 4


def test_second_plmn_member_after_four_leaves():
    cb = NrCellDuCb(NrCellList())
    for leaf, val in [("mcc", "001"), ("mnc", "01"), ("sst", "1"), ("sd", "010203")]:
        cb.update_params("pLMNInfoList", leaf, val)
    cb.update_params("pLMNInfoList", "mcc", "999")
    assert cb.cell_params.plmn_list[1].mcc == [9, 9, 9]
    assert cb.cell_params.plmn_list[0].mcc == [0, 0, 1]


def test_plmn_beyond_supported_is_ignored():
    cb = NrCellDuCb(NrCellList())
    cb.plmn_list_num = 8
    cb.update_params("pLMNInfoList", "sst", "5")
    assert cb.plmn_list_num == 8
    assert all(plmn.sst == 0 for plmn in cb.cell_params.plmn_list)


def test_bad_mcc_raises():
    cb = NrCellDuCb(NrCellList())
    with pytest.raises(O1Error):
        cb.update_params("pLMNInfoList", "mcc", "0x")


def test_identifiers():
    cb = NrCellDuCb(NrCellList())
    cb.update_params("_3gpp-common-managed-element:ManagedElement[id='me-a']", "id", "me-a")
    cb.update_params("GNBDUFunction[id='gnb-b']", "id", "gnb-b")
    cb.update_params("NRCellDu[id='cell-c']", "id", "cell-c")
    assert cb.managed_element.me_id == "me-a"
    assert cb.managed_element.gnb_id == "gnb-b"
    assert cb.managed_element.nr_cell_du_id == "cell-c"


def test_oper_get_items_tree():
    cells = NrCellList()
    cells.set_cell_op_state(1, OpState.ENABLED, CellState.ACTIVE)
    cb = NrCellDuCb(cells)
    cb.managed_element.me_id = "me-a"
    root = cb.oper_get_items("_3gpp-common-managed-element", MANAGED_ELEMENT_MODULE_PATH)
    assert root.name == MANAGED_ELEMENT_MODULE_PATH
    assert root.find("id").value == "me-a"
    gnbdu = root.children[1]
    nr_cell = gnbdu.children[1]
    attributes = nr_cell.find("attributes")
    assert attributes.find("operationalState").value == "ENABLED"
    assert attributes.find("cellState").value == "ACTIVE"


def test_configure_cell_results():
    received = []

    def accept(params):
        received.append(params)
        return 0

    cb = NrCellDuCb(NrCellList(), accept)
    assert cb.configure_cell() is True
    assert received == [cb.cell_params]
    assert NrCellDuCb(NrCellList(), lambda params: 1).configure_cell() is False
    assert NrCellDuCb(NrCellList()).configure_cell() is True


def test_module_change_applies_values():
    xpath = "/_3gpp-nr-nrm-nrcelldu:NRCellDU[id='1']/attributes/nRPCI"
    session = FakeSession([created(xpath, "17"), Change(Operation.DELETED, Value(xpath), None)])
    cb = NrCellDuCb(NrCellList(), lambda params: 0)
    applied = cb.module_change(session, "_3gpp-nr-nrm-nrcelldu", Event.CHANGE)
    assert applied == [("attributes", "nRPCI", "17")]
    assert cb.cell_params.nr_pci == 17
    assert session.requested == ["/_3gpp-nr-nrm-nrcelldu:*//."]


def test_module_change_other_event_does_nothing():
    xpath = "/m:x/attributes/nRPCI"
    cb = NrCellDuCb(NrCellList())
    assert cb.module_change(FakeSession([created(xpath, "9")]), "m", Event.DONE) == []
    assert cb.cell_params.nr_pci == 0


def test_module_change_configure_failure():
    cb = NrCellDuCb(NrCellList(), lambda params: 1)
    with pytest.raises(O1Error):
        cb.module_change(FakeSession([]), "m", Event.CHANGE)


def test_module_change_session_failure():
    cb = NrCellDuCb(NrCellList())
    with pytest.raises(O1Error):
        cb.module_change(BrokenSession(), "m", Event.CHANGE)


def test_module_change_resets_plmn_counter():
    cb = NrCellDuCb(NrCellList())
    cb.plmn_list_num = 5
    cb.module_change(FakeSession([]), "m", Event.CHANGE)
    assert cb.plmn_list_num == 0