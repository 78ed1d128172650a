"""Parsers for the full OSPF link-state database, AS-external listing and neighbors."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Tuple

from .lsa_parser import (
    _EXTERNAL_LSA_FIELDS,
    FieldMap,
    JsonInput,
    _as_dict,
    _as_list,
    _fill,
    _load,
)
from .models import (
    ASBRSummaryDataLSA,
    ASExternalLinkState,
    BaseLSA,
    ExternalDataLSA,
    Neighbor,
    NeighborList,
    NetworkDataLSA,
    NSSAExternalDataLSA,
    OSPFDatabase,
    OSPFDatabaseArea,
    OSPFExternalAll,
    OSPFNeighbors,
    RouterDataLSA,
    SummaryDataLSA,
    to_int,
    to_str,
)

_BASE_LSA_FIELDS: FieldMap = {
    "lsId": ("ls_id", to_str),
    "advertisedRouter": ("advertised_router", to_str),
    "lsaAge": ("lsa_age", to_int),
    "sequenceNumber": ("sequence_number", to_str),
    "checksum": ("checksum", to_str),
}

_NEIGHBOR_FIELDS: FieldMap = {
    "priority": ("priority", to_int),
    "state": ("state", to_str),
    "nbrPriority": ("nbr_priority", to_int),
    "nbrState": ("nbr_state", to_str),
    "converged": ("converged", to_str),
    "role": ("role", to_str),
    "upTimeInMsec": ("up_time_in_msec", to_int),
    "deadTimeMsecs": ("dead_time_msecs", to_int),
    "routerDeadIntervalTimerDueMsec": ("router_dead_interval_timer_due_msec", to_int),
    "upTime": ("up_time", to_str),
    "deadTime": ("dead_time", to_str),
    "address": ("address", to_str),
    "ifaceAddress": ("iface_address", to_str),
    "ifaceName": ("iface_name", to_str),
    "retransmitCounter": ("retransmit_counter", to_int),
    "linkStateRetransmissionListCounter": (
        "link_state_retransmission_list_counter",
        to_int,
    ),
    "requestCounter": ("request_counter", to_int),
    "linkStateRequestListCounter": ("link_state_request_list_counter", to_int),
    "dbSummaryCounter": ("db_summary_counter", to_int),
    "databaseSummaryListCounter": ("database_summary_list_counter", to_int),
}


def _base(lsa: Dict[str, Any]) -> BaseLSA:
    return _fill(BaseLSA, lsa, _BASE_LSA_FIELDS)


def _router_data_lsa(data: Any) -> RouterDataLSA:
    lsa = _as_dict(data, "router LSA")
    return RouterDataLSA(
        base=_base(lsa), num_of_router_links=to_int(lsa.get("numOfRouterLinks"))
    )


def _network_data_lsa(data: Any) -> NetworkDataLSA:
    return NetworkDataLSA(base=_base(_as_dict(data, "network LSA")))


def _summary_data_lsa(data: Any) -> SummaryDataLSA:
    lsa = _as_dict(data, "summary LSA")
    return SummaryDataLSA(
        base=_base(lsa), summary_address=to_str(lsa.get("summaryAddress"))
    )


def _asbr_summary_data_lsa(data: Any) -> ASBRSummaryDataLSA:
    return ASBRSummaryDataLSA(base=_base(_as_dict(data, "ASBR summary LSA")))


def _nssa_external_data_lsa(data: Any) -> NSSAExternalDataLSA:
    lsa = _as_dict(data, "NSSA external LSA")
    return NSSAExternalDataLSA(
        base=_base(lsa),
        metric_type=to_str(lsa.get("metricType")),
        route=to_str(lsa.get("route")),
        tag=to_int(lsa.get("tag")),
    )


def _external_data_lsa(data: Any) -> ExternalDataLSA:
    lsa = _as_dict(data, "external LSA")
    return ExternalDataLSA(
        base=_base(lsa),
        metric_type=to_str(lsa.get("metricType")),
        route=to_str(lsa.get("route")),
        tag=to_int(lsa.get("tag")),
    )


_AREA_SECTIONS: Tuple[Tuple[str, str, Callable[[Any], Any]], ...] = (
    ("routerLinkStates", "router_link_states", _router_data_lsa),
    ("networkLinkStates", "network_link_states", _network_data_lsa),
    ("summaryLinkStates", "summary_link_states", _summary_data_lsa),
    ("asbrSummaryLinkStates", "asbr_summary_link_states", _asbr_summary_data_lsa),
    ("nssaExternalLinkStates", "nssa_external_link_states", _nssa_external_data_lsa),
)


def _database_area(area_id: str, data: Any) -> OSPFDatabaseArea:
    area_data = _as_dict(data, f"area {area_id}")
    fields: Dict[str, Any] = {}
    for json_key, attr, build in _AREA_SECTIONS:
        lsas = area_data.get(json_key)
        if isinstance(lsas, list):
            fields[attr] = [build(lsa) for lsa in lsas]
            fields[f"{attr}_count"] = to_int(area_data.get(f"{json_key}Count"))
    return OSPFDatabaseArea(**fields)


def parse_full_ospf_database(json_data: JsonInput) -> OSPFDatabase:
    """Parse ``show ip ospf data json``."""
    raw = _load(json_data)
    database = OSPFDatabase(router_id=to_str(raw.get("routerId")))
    areas = raw.get("areas")
    if isinstance(areas, dict):
        database.areas = {
            area_id: _database_area(area_id, area_data)
            for area_id, area_data in areas.items()
        }
    external = raw.get("asExternalLinkStates")
    if isinstance(external, list):
        database.as_external_link_states = [_external_data_lsa(lsa) for lsa in external]
        database.as_external_count = to_int(raw.get("asExternalLinkStatesCount"))
    return database


def parse_ospf_external_all(json_data: JsonInput) -> OSPFExternalAll:
    """Parse ``show ip ospf data external json``."""
    raw = _load(json_data)
    states: List[ASExternalLinkState] = []
    external = raw.get("asExternalLinkStates")
    if isinstance(external, list):
        states = [
            _fill(ASExternalLinkState, _as_dict(lsa, "external LSA"), _EXTERNAL_LSA_FIELDS)
            for lsa in external
        ]
    return OSPFExternalAll(
        router_id=to_str(raw.get("routerId")), as_external_link_states=states
    )


def parse_ospf_neighbors(json_data: JsonInput) -> OSPFNeighbors:
    """Parse ``show ip ospf neighbor json``; neighbors grouped by interface."""
    raw = _load(json_data)
    result = OSPFNeighbors()
    neighbors = raw.get("neighbors")
    if isinstance(neighbors, dict):
        result.neighbors = {
            iface: NeighborList(
                neighbors=[
                    _fill(Neighbor, _as_dict(entry, "neighbor"), _NEIGHBOR_FIELDS)
                    for entry in _as_list(entries, f"neighbors of {iface}")
                ]
            )
            for iface, entries in neighbors.items()
        }
    return result