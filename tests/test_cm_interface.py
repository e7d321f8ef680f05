import pytest

from o1agent.cells import NrCellList
from o1agent.cm_interface import (
    get_startup_config,
    get_startup_config_for_stub,
    set_cell_op_state,
)
from o1agent.defs import CellState, O1Error, OpState
from o1agent.init_config import IP_ADDRESS, PORT, InitConfig, interface_xpath


class FakeSession:
    def __init__(self, items):
        self.items = items

    def get_item(self, xpath):
        return self.items.get(xpath)


def full_items(ocu_port="38471"):
    return {
        interface_xpath("odu", IP_ADDRESS): "10.0.0.1",
        interface_xpath("odu", PORT): "38472",
        interface_xpath("ocu", IP_ADDRESS): "10.0.0.2",
        interface_xpath("ocu", PORT): ocu_port,
        interface_xpath("ric", IP_ADDRESS): "10.0.0.3",
        interface_xpath("ric", PORT): "36421",
    }


def test_get_startup_config_for_stub_reads_session():
    cfg = get_startup_config_for_stub(FakeSession(full_items()), InitConfig())
    assert cfg.du_ipv4_addr == "10.0.0.1"
    assert cfg.cu_port == 38471
    assert cfg.ric_ipv4_addr == "10.0.0.3"


def test_get_startup_config_after_init():
    config = InitConfig()
    config.init(FakeSession(full_items()))
    cfg = get_startup_config(config)
    assert cfg.du_port == 38472
    assert cfg.cu_ipv4_addr == "10.0.0.2"


def test_get_startup_config_for_stub_missing_data():
    with pytest.raises(O1Error):
        get_startup_config_for_stub(FakeSession({}), InitConfig())


def test_get_startup_config_zero_port():
    config = InitConfig()
    config.init(FakeSession(full_items(ocu_port="0")))
    with pytest.raises(O1Error):
        get_startup_config(config)


def test_set_cell_op_state_updates_list():
    cells = NrCellList()
    assert set_cell_op_state(1, OpState.ENABLED, CellState.ACTIVE, cells) is True
    info = cells.cell_op_states()[1]
    assert info.op_state is OpState.ENABLED
    assert info.cell_state is CellState.ACTIVE


def test_set_cell_op_state_replaces_entry():
    cells = NrCellList()
    set_cell_op_state(2, OpState.ENABLED, CellState.ACTIVE, cells)
    set_cell_op_state(2, OpState.DISABLED, CellState.INACTIVE, cells)
    states = cells.cell_op_states()
    assert len(states) == 1
    assert states[2].op_state is OpState.DISABLED
    assert states[2].cell_state is CellState.INACTIVE