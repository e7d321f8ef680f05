"""Shared constants, state enumerations and configuration records."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

ALARM_SOCK_PATH = "/tmp/alarmsock"
CPU_CORE = 22

ALARM_MODULE_NAME_3GPP = "_3gpp-common-fm"
ALARM_MODULE_PATH_3GPP = "/_3gpp-common-fm:AlarmListGrp"
ALARM_MODULE_NAME_ORAN = "o-ran-sc-odu-alarm-v1"
ALARM_MODULE_PATH_ORAN = "/o-ran-sc-odu-alarm-v1:odu"
CELL_STATE_MODULE_NAME = "o-ran-sc-du-hello-world"
CELL_STATE_MODULE_PATH = "/o-ran-sc-du-hello-world:network-function"
IETF_NACM_MODULE_NAME = "ietf-netconf-acm"
IETF_NACM_MODULE_PATH = "/ietf-netconf-acm:nacm"
MANAGED_ELEMENT_MODULE_NAME = "_3gpp-common-managed-element"
MANAGED_ELEMENT_MODULE_PATH = "/_3gpp-common-managed-element:ManagedElement"
GNB_DU_FUNTION_MODULE_NAME = "_3gpp-nr-nrm-gnbdufunction"
NR_CELL_DU_MODULE_NAME = "_3gpp-nr-nrm-nrcelldu"
RRMPOLICY_MODULE_NAME = "_3gpp-nr-nrm-rrmpolicy"
RRMPOLICY_MODULE_PATH = "/_3gpp-nr-nrm-rrmpolicy:RRMPolicyRatio"
MAX_ALARM_ID_LEN = 10

IPV4_LEN = 16
PORT_LEN = 10
MAX_MEMBER_LIST = 2
ID_MAX_LEN = 64
MAX_LEN = 100
MAX_POLICY = 2
MAX_POLICY_LIST = 4
MCC_LEN = 3
MNC_LEN = 3
SD_LEN = 3
MAX_SUPPORTED_PLMN = 2


class O1Error(Exception):
    """Raised when an O1 operation fails."""


class OpState(IntEnum):
    """Operational state of a cell."""

    DISABLED = 0
    ENABLED = 1


class AdminState(IntEnum):
    """Administrative state of a cell."""

    LOCKED = 0
    UNLOCKED = 1
    SHUTTING_DOWN = 2


class CellState(IntEnum):
    """Activity state of a cell."""

    IDLE = 0
    INACTIVE = 1
    ACTIVE = 2


class RrmResourceType(IntEnum):
    """Resource type an RRM policy applies to."""

    PRB = 0
    PRB_UL = 1
    PRB_DL = 2
    RRC = 3
    DRB = 4


@dataclass
class StartupConfig:
    """Addresses and ports of the DU, CU and RIC interfaces."""

    du_ipv4_addr: str = ""
    cu_ipv4_addr: str = ""
    ric_ipv4_addr: str = ""
    cu_port: int = 0
    du_port: int = 0
    ric_port: int = 0


def _zero_digits(length: int) -> list[int]:
    return [0] * length


@dataclass
class PlmnInfo:
    """PLMN identity together with its slice (SST and SD)."""

    mcc: list[int] = field(default_factory=lambda: _zero_digits(MCC_LEN))
    mnc: list[int] = field(default_factory=lambda: _zero_digits(MNC_LEN))
    sd: list[int] = field(default_factory=lambda: _zero_digits(SD_LEN))
    sst: int = 0


@dataclass
class NrCellDu:
    """Configuration parameters of an NR cell in the DU."""

    cell_local_id: int = 0
    operational_state: OpState = OpState.DISABLED
    administrative_state: AdminState = AdminState.LOCKED
    cell_state: CellState = CellState.IDLE
    plmn_list: list[PlmnInfo] = field(
        default_factory=lambda: [PlmnInfo() for _ in range(MAX_SUPPORTED_PLMN)]
    )
    nr_pci: int = 0
    nr_tac: int = 0
    arfcn_dl: int = 0
    arfcn_ul: int = 0
    arfcn_sul: int = 0
    ssb_frequency: int = 0
    ssb_periodicity: int = 0
    ssb_sub_carrier_spacing: int = 0
    ssb_offset: int = 0
    ssb_duration: int = 0
    bs_channel_bw_ul: int = 0
    bs_channel_bw_dl: int = 0
    bs_channel_bw_sul: int = 0


@dataclass
class ManagedElement:
    """Identifiers of the managed element, gNB-DU function and NR cell."""

    me_id: str = ""
    gnb_id: str = ""
    nr_cell_du_id: str = ""