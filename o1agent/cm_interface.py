"""Startup configuration and cell state entry points for the DU."""

from __future__ import annotations

import logging

from .cells import NrCellList, default_cell_list
from .defs import CellState, OpState, StartupConfig
from .init_config import InitConfig, Session, default_init_config

logger = logging.getLogger(__name__)


def _log_config(cfg: StartupConfig) -> None:
    logger.debug("cfg.DU_IPV4_Addr [%s]", cfg.du_ipv4_addr)
    logger.debug("cfg.DU_Port [%d]", cfg.du_port)
    logger.debug("cfg.CU_IPV4_Addr [%s]", cfg.cu_ipv4_addr)
    logger.debug("cfg.CU_Port [%d]", cfg.cu_port)
    logger.debug("cfg.RIC_IPV4_Addr [%s]", cfg.ric_ipv4_addr)
    logger.debug("cfg.RIC_Port [%d]", cfg.ric_port)


def get_startup_config(init_config: InitConfig | None = None) -> StartupConfig:
    """Return the DU, CU and RIC addresses; raises O1Error if incomplete."""
    cfg = (init_config or default_init_config()).get_curr_interface_config()
    _log_config(cfg)
    return cfg


def get_startup_config_for_stub(
    session: Session, init_config: InitConfig | None = None
) -> StartupConfig:
    """Read the interfaces from the session, then return the startup config."""
    config = init_config or default_init_config()
    config.init(session)
    return get_startup_config(config)


def set_cell_op_state(
    cell_id: int,
    op_state: OpState,
    cell_state: CellState,
    cell_list: NrCellList | None = None,
) -> bool:
    """Record the operational and activity state of a cell."""
    logger.debug(
        "Setting cellId = %d, opState=%d, cellState=%d", cell_id, op_state, cell_state
    )
    return (cell_list or default_cell_list()).set_cell_op_state(
        cell_id, op_state, cell_state
    )