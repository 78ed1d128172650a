"""Periodic collection of everything the monitor knows about the router."""

from __future__ import annotations

import dataclasses
import logging
import threading
import time
from functools import partial
from typing import Any, Callable, Optional

from . import fetcher
from .frrsockets import FRRCommandExecutor
from .models import FRRRouterData, FullFRRData

_COMMAND_TIMEOUT = 2.0
_STATIC_CONFIG_STEP = "StaticFRRConfig"


def new_frr_command_executor(socket_dir: str, timeout: float) -> FRRCommandExecutor:
    """Create an executor for the daemon sockets in ``socket_dir``."""
    return FRRCommandExecutor(dir_path=socket_dir, timeout=timeout)


def init_full_frr_data() -> FullFRRData:
    """A snapshot with every part present and empty."""
    return FullFRRData()


def _replace_contents(target: Any, source: Any) -> None:
    """Make ``target`` equal to ``source`` while keeping its identity."""
    for f in dataclasses.fields(source):
        setattr(target, f.name, getattr(source, f.name))


class Collector:
    """Gathers router state into :attr:`full_frr_data` on each :meth:`collect`.

    The parts of :attr:`full_frr_data` are updated in place, so references
    to them held elsewhere see the new state.
    """

    def __init__(
        self,
        config_path: str,
        socket_path: str,
        logger: Optional[logging.Logger] = None,
        full_frr_data: Optional[FullFRRData] = None,
    ) -> None:
        self.config_path = config_path
        self.socket_path = socket_path
        self.logger = logger or logging.getLogger(__name__)
        self.full_frr_data: Optional[FullFRRData] = (
            full_frr_data if full_frr_data is not None else init_full_frr_data()
        )

    def _ensure_fields_initialized(self) -> FullFRRData:
        if self.full_frr_data is None:
            self.logger.debug("initializing new FullFRRData structure")
            self.full_frr_data = init_full_frr_data()
            return self.full_frr_data
        data = self.full_frr_data
        for f in dataclasses.fields(data):
            if getattr(data, f.name) is None:
                setattr(data, f.name, f.default_factory())  # type: ignore[misc]
        return data

    def _fetch_and_merge(self, name: str, target: Any, fetch: Callable[[], Any]) -> None:
        start = time.monotonic()
        try:
            result = fetch()
        except Exception as exc:
            self.logger.error("failed to fetch data: operation=%s error=%s", name, exc)
            if name == _STATIC_CONFIG_STEP:
                raise
            return
        _replace_contents(target, result)
        self.logger.debug(
            "fetched and merged data: operation=%s duration=%.3fs",
            name,
            time.monotonic() - start,
        )

    def collect(self) -> None:
        """Run one collection cycle.

        A failing fetch is logged and leaves its part unchanged, except for
        the static configuration, whose failure is raised.
        """
        self.logger.debug("collector %#x starting collection", id(self))
        data = self._ensure_fields_initialized()
        executor = new_frr_command_executor(self.socket_path, _COMMAND_TIMEOUT)

        def router_data() -> FRRRouterData:
            return FRRRouterData(
                router_name=data.static_frr_configuration.hostname,
                ospf_router_id=data.ospf_database.router_id,
            )

        steps = (
            (_STATIC_CONFIG_STEP, data.static_frr_configuration, fetcher.fetch_static_frr_config),
            ("GeneralOSPFInformation", data.general_ospf_information,
             partial(fetcher.fetch_general_ospf_information, executor)),
            ("OSPFRouterData", data.ospf_router_data,
             partial(fetcher.fetch_ospf_router_data, executor)),
            ("OSPFRouterDataAll", data.ospf_router_data_all,
             partial(fetcher.fetch_ospf_router_data_all, executor)),
            ("OSPFNetworkData", data.ospf_network_data,
             partial(fetcher.fetch_ospf_network_data, executor)),
            ("OSPFNetworkDataAll", data.ospf_network_data_all,
             partial(fetcher.fetch_ospf_network_data_all, executor)),
            ("OSPFSummaryData", data.ospf_summary_data,
             partial(fetcher.fetch_ospf_summary_data, executor)),
            ("OSPFSummaryDataAll", data.ospf_summary_data_all,
             partial(fetcher.fetch_ospf_summary_data_all, executor)),
            ("OSPFAsbrSummaryData", data.ospf_asbr_summary_data,
             partial(fetcher.fetch_ospf_asbr_summary_data, executor)),
            ("OSPFExternalData", data.ospf_external_data,
             partial(fetcher.fetch_ospf_external_data, executor)),
            ("OSPFNssaExternalData", data.ospf_nssa_external_data,
             partial(fetcher.fetch_ospf_nssa_external_data, executor)),
            ("FullOSPFDatabase", data.ospf_database,
             partial(fetcher.fetch_full_ospf_database, executor)),
            ("OSPFExternalAll", data.ospf_external_all,
             partial(fetcher.fetch_ospf_external_all, executor)),
            ("OSPFNssaExternalAll", data.ospf_nssa_external_all,
             partial(fetcher.fetch_ospf_nssa_external_all, executor)),
            ("OSPFNeighbors", data.ospf_neighbors,
             partial(fetcher.fetch_ospf_neighbors, executor)),
            ("InterfaceStatus", data.interfaces,
             partial(fetcher.fetch_interface_status, executor)),
            ("ExpectedRoutes", data.routing_information_base,
             partial(fetcher.fetch_rib, executor)),
            ("RibFibSummaryRoutes", data.rib_fib_summary_routes,
             partial(fetcher.fetch_rib_fib_summary, executor)),
            ("SystemMetrics", data.system_metrics, fetcher.collect_system_metrics),
            ("FrrRouterData", data.frr_router_data, router_data),
        )
        for name, target, fetch in steps:
            self._fetch_and_merge(name, target, fetch)

        self.logger.info("completed data collection cycle")

    def read_config(self) -> str:
        """Return the FRR configuration file's lines joined by newlines.

        Raises :class:`OSError` when the file cannot be read.
        """
        with open(self.config_path, encoding="utf-8", errors="replace", newline="") as handle:
            content = handle.read()
        lines = content.split("\n")
        if lines and lines[-1] == "":
            lines.pop()
        return "\n".join(line[:-1] if line.endswith("\r") else line for line in lines)


def init_aggregator(
    frr_config_path: str, socket_path: str, logger: Optional[logging.Logger] = None
) -> Collector:
    """Create a collector for the given FRR configuration and socket directory."""
    return Collector(frr_config_path, socket_path, logger)


class _PollingThread(threading.Thread):
    def __init__(self, collector: Collector, poll_interval: float) -> None:
        super().__init__(name="frrmad-aggregator", daemon=True)
        self._collector = collector
        self._interval = poll_interval
        self._stopped = threading.Event()

    def run(self) -> None:
        while not self._stopped.wait(self._interval):
            self._collector.collect()

    def stop(self, timeout: Optional[float] = None) -> None:
        """Stop polling and wait for a running cycle to finish."""
        self._stopped.set()
        if self is not threading.current_thread():
            self.join(timeout)


def start_aggregator(collector: Collector, poll_interval: float) -> _PollingThread:
    """Collect every ``poll_interval`` seconds in a background thread.

    The first cycle runs one interval after the start. The returned thread
    has a ``stop()`` method.
    """
    thread = _PollingThread(collector, poll_interval)
    thread.start()
    return thread