"""Fetch the state of a router from vtysh, the FRR daemons and the host."""

from __future__ import annotations

import os
import re
import subprocess
import sys
from pathlib import Path
from typing import Optional, Protocol, Union

import psutil

from .config_parser import parse_static_frr_config
from .database_parser import (
    parse_full_ospf_database,
    parse_ospf_external_all,
    parse_ospf_neighbors,
)
from .lsa_parser import (
    parse_ospf_asbr_summary_lsa,
    parse_ospf_external_lsa,
    parse_ospf_network_lsa,
    parse_ospf_network_lsa_all,
    parse_ospf_nssa_external_all,
    parse_ospf_nssa_external_lsa,
    parse_ospf_router_lsa,
    parse_ospf_router_lsa_all,
    parse_ospf_summary_lsa,
    parse_ospf_summary_lsa_all,
)
from .models import (
    GeneralOspfInformation,
    InterfaceList,
    OSPFAsbrSummaryData,
    OSPFDatabase,
    OSPFExternalAll,
    OSPFExternalData,
    OSPFNeighbors,
    OSPFNetworkData,
    OSPFNssaExternalAll,
    OSPFNssaExternalData,
    OSPFRouterData,
    OSPFSummaryData,
    RibFibSummaryRoutes,
    RoutingInformationBase,
    StaticFRRConfiguration,
    SystemMetrics,
)
from .state_parser import (
    parse_general_ospf_information,
    parse_interface_status,
    parse_rib,
    parse_rib_fib_summary,
)

_CONFIG_DUMP_PATH: Union[str, Path] = "/tmp/frr-config.conf"
_MEMINFO_PATH = "/proc/meminfo"
_CPU_SAMPLE_SECONDS = 1.0
_UINT64_MAX = 2**64 - 1
_DIGITS = re.compile(r"[0-9]+")


class _Executor(Protocol):
    def exec_ospf_cmd(self, cmd: str) -> bytes: ...

    def exec_zebra_cmd(self, cmd: str) -> bytes: ...


def fetch_static_frr_config() -> StaticFRRConfiguration:
    """Dump the running configuration with vtysh and parse it.

    Raises :class:`subprocess.CalledProcessError` when vtysh fails and
    :class:`OSError` when it cannot be started or the dump cannot be written.
    """
    completed = subprocess.run(
        ["vtysh", "-c", "show running-config"], capture_output=True, check=True
    )
    dump = Path(_CONFIG_DUMP_PATH)
    dump.write_bytes(completed.stdout)
    return parse_static_frr_config(dump)


def fetch_general_ospf_information(executor: _Executor) -> GeneralOspfInformation:
    return parse_general_ospf_information(executor.exec_ospf_cmd("show ip ospf json"))


def fetch_ospf_router_data(executor: _Executor) -> OSPFRouterData:
    return parse_ospf_router_lsa(executor.exec_ospf_cmd("show ip ospf data router self json"))


def fetch_ospf_router_data_all(executor: _Executor) -> OSPFRouterData:
    return parse_ospf_router_lsa_all(executor.exec_ospf_cmd("show ip ospf data router json"))


def fetch_ospf_network_data(executor: _Executor) -> OSPFNetworkData:
    return parse_ospf_network_lsa(executor.exec_ospf_cmd("show ip ospf data network self json"))


def fetch_ospf_network_data_all(executor: _Executor) -> OSPFNetworkData:
    return parse_ospf_network_lsa_all(executor.exec_ospf_cmd("show ip ospf data network json"))


def fetch_ospf_summary_data(executor: _Executor) -> OSPFSummaryData:
    return parse_ospf_summary_lsa(executor.exec_ospf_cmd("show ip ospf data summary self json"))


def fetch_ospf_summary_data_all(executor: _Executor) -> OSPFSummaryData:
    return parse_ospf_summary_lsa_all(executor.exec_ospf_cmd("show ip ospf data summary json"))


def fetch_ospf_asbr_summary_data(executor: _Executor) -> OSPFAsbrSummaryData:
    return parse_ospf_asbr_summary_lsa(
        executor.exec_ospf_cmd("show ip ospf data asbr-summary self json")
    )


def fetch_ospf_external_data(executor: _Executor) -> OSPFExternalData:
    return parse_ospf_external_lsa(executor.exec_ospf_cmd("show ip ospf data external self json"))


def fetch_ospf_nssa_external_data(executor: _Executor) -> OSPFNssaExternalData:
    return parse_ospf_nssa_external_lsa(
        executor.exec_ospf_cmd("show ip ospf data nssa-external self json")
    )


def fetch_full_ospf_database(executor: _Executor) -> OSPFDatabase:
    return parse_full_ospf_database(executor.exec_ospf_cmd("show ip ospf data json"))


def fetch_ospf_external_all(executor: _Executor) -> OSPFExternalAll:
    return parse_ospf_external_all(executor.exec_ospf_cmd("show ip ospf data external json"))


def fetch_ospf_nssa_external_all(executor: _Executor) -> OSPFNssaExternalAll:
    return parse_ospf_nssa_external_all(
        executor.exec_ospf_cmd("show ip ospf data nssa-external json")
    )


def fetch_ospf_neighbors(executor: _Executor) -> OSPFNeighbors:
    return parse_ospf_neighbors(executor.exec_ospf_cmd("show ip ospf neighbor json"))


def fetch_interface_status(executor: _Executor) -> InterfaceList:
    return parse_interface_status(executor.exec_zebra_cmd("show interface json"))


def fetch_rib(executor: _Executor) -> RoutingInformationBase:
    return parse_rib(executor.exec_zebra_cmd("show ip route json"))


def fetch_rib_fib_summary(executor: _Executor) -> RibFibSummaryRoutes:
    return parse_rib_fib_summary(executor.exec_zebra_cmd("show ip route summary json"))


def collect_system_metrics() -> SystemMetrics:
    """Gather host metrics; a metric that cannot be read keeps its zero value."""
    metrics = SystemMetrics()
    try:
        metrics.cpu_amount = get_cpu_amount()
    except Exception:
        pass
    try:
        metrics.cpu_usage = get_cpu_usage_percent()
    except Exception:
        pass
    try:
        metrics.memory_usage = get_memory_usage()
    except Exception:
        pass
    return metrics


def get_cpu_amount() -> int:
    """Number of logical CPUs."""
    return os.cpu_count() or 1


def get_cpu_usage_percent() -> float:
    """Average CPU load over one second, as a fraction between 0 and 1."""
    usage = float(psutil.cpu_percent(interval=_CPU_SAMPLE_SECONDS, percpu=False))
    usage = min(max(usage, 0.0), 100.0)
    return usage / 100


def get_memory_usage(meminfo_path: Optional[Union[str, Path]] = None) -> float:
    """Percentage of memory in use, read from ``/proc/meminfo``.

    Without a path this returns 0 on systems other than Linux. Raises
    :class:`ValueError` when the file holds no total and :class:`OSError`
    when it cannot be read.
    """
    if meminfo_path is None:
        if not sys.platform.startswith("linux"):
            return 0.0
        meminfo_path = _MEMINFO_PATH
    values = {"MemTotal:": 0, "MemFree:": 0, "Buffers:": 0, "Cached:": 0}
    for line in Path(meminfo_path).read_text().split("\n"):
        for key in values:
            if line.startswith(key):
                values[key] = parse_mem_line(line)
                break
    total = values["MemTotal:"]
    if total == 0:
        raise ValueError("could not read memory stats")
    used = total - values["MemFree:"] - values["Buffers:"] - values["Cached:"]
    return used / total * 100


def parse_mem_line(line: str) -> int:
    """Read the number in a meminfo line; anything unreadable gives 0."""
    parts = line.split()
    if len(parts) < 2 or not _DIGITS.fullmatch(parts[1]):
        return 0
    value = int(parts[1])
    return value if value <= _UINT64_MAX else 0