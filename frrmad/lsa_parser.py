"""Parsers for the per-type OSPF LSA listings that ospfd prints as JSON.

Each parser takes the raw output of one ``show ip ospf data ... json``
command and returns the matching data-model object. Malformed output raises
:class:`~frrmad.models.ParseError`.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, Mapping, Tuple, Type, TypeVar, Union

from .models import (
    ExternalLSA,
    NetAreaState,
    NetworkLSA,
    NssaExternalArea,
    NssaExternalLSA,
    OSPFAsbrSummaryData,
    OSPFExternalData,
    OSPFNetworkData,
    OSPFNssaExternalAll,
    OSPFNssaExternalData,
    OSPFRouterArea,
    OSPFRouterData,
    OSPFRouterLSA,
    OSPFSummaryData,
    ParseError,
    RouterLink,
    SummaryAreaState,
    SummaryLSA,
    to_bool,
    to_int,
    to_str,
)

JsonInput = Union[str, bytes, bytearray]
FieldMap = Mapping[str, Tuple[str, Callable[[Any], Any]]]
T = TypeVar("T")

_COMMON_LSA_FIELDS: FieldMap = {
    "lsaAge": ("lsa_age", to_int),
    "options": ("options", to_str),
    "lsaFlags": ("lsa_flags", to_int),
    "lsaType": ("lsa_type", to_str),
    "linkStateId": ("link_state_id", to_str),
    "advertisingRouter": ("advertising_router", to_str),
    "lsaSeqNumber": ("lsa_seq_number", to_str),
    "checksum": ("checksum", to_str),
    "length": ("length", to_int),
}

_ROUTER_LSA_FIELDS: FieldMap = {
    **_COMMON_LSA_FIELDS,
    "flags": ("flags", to_int),
    "asbr": ("asbr", to_bool),
    "numOfLinks": ("num_of_links", to_int),
}

_ROUTER_LINK_FIELDS: FieldMap = {
    "linkType": ("link_type", to_str),
    "designatedRouterAddress": ("designated_router_address", to_str),
    "neighborRouterId": ("neighbor_router_id", to_str),
    "routerInterfaceAddress": ("router_interface_address", to_str),
    "networkAddress": ("network_address", to_str),
    "networkMask": ("network_mask", to_str),
    "numOfTosMetrics": ("num_of_tos_metrics", to_int),
    "tos0Metric": ("tos0_metric", to_int),
}

_NETWORK_LSA_FIELDS: FieldMap = {
    **_COMMON_LSA_FIELDS,
    "networkMask": ("network_mask", to_int),
}

_SUMMARY_LSA_FIELDS: FieldMap = {
    **_NETWORK_LSA_FIELDS,
    "tos0Metric": ("tos0_metric", to_int),
}

_EXTERNAL_LSA_FIELDS: FieldMap = {
    **_NETWORK_LSA_FIELDS,
    "metricType": ("metric_type", to_str),
    "tos": ("tos", to_int),
    "metric": ("metric", to_int),
    "forwardAddress": ("forward_address", to_str),
    "externalRouteTag": ("external_route_tag", to_int),
}

_NSSA_EXTERNAL_LSA_FIELDS: FieldMap = {
    **_NETWORK_LSA_FIELDS,
    "metricType": ("metric_type", to_str),
    "tos": ("tos", to_int),
    "metric": ("metric", to_int),
    "nssaForwardAddress": ("nssa_forward_address", to_str),
    "externalRouteTag": ("external_route_tag", to_int),
}

_ATTACHED_ROUTERS_KEY = "attchedRouters"


# --- helpers --------------------------------------------------------------


def _load(json_data: JsonInput) -> Dict[str, Any]:
    try:
        raw = json.loads(json_data)
    except (ValueError, TypeError) as exc:
        raise ParseError(f"failed to unmarshal JSON: {exc}") from exc
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ParseError("failed to unmarshal JSON: top level is not an object")
    return raw


def _as_dict(value: Any, what: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ParseError(f"{what} is not an object")
    return value


def _as_list(value: Any, what: str) -> list:
    if not isinstance(value, list):
        raise ParseError(f"{what} is not a list")
    return value


def _fill(cls: Type[T], data: Mapping[str, Any], mapping: FieldMap, **extra: Any) -> T:
    values = {
        attr: convert(data[key])
        for key, (attr, convert) in mapping.items()
        if key in data
    }
    values.update(extra)
    return cls(**values)


def _required_str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ParseError(f"LSA is missing string field {key!r}")
    return value


def _router_lsa(data: Any) -> OSPFRouterLSA:
    data = _as_dict(data, "router LSA")
    extra: Dict[str, Any] = {}
    if "routerLinks" in data:
        links = _as_dict(data["routerLinks"], "routerLinks")
        extra["router_links"] = {
            link_id: _fill(RouterLink, _as_dict(link, "router link"), _ROUTER_LINK_FIELDS)
            for link_id, link in links.items()
        }
    return _fill(OSPFRouterLSA, data, _ROUTER_LSA_FIELDS, **extra)


def _attached_routers(data: Mapping[str, Any]) -> Dict[str, str]:
    routers = data.get(_ATTACHED_ROUTERS_KEY)
    if not isinstance(routers, dict):
        return {}
    return {
        router_key: to_str(router["attachedRouterId"])
        for router_key, router in routers.items()
        if isinstance(router, dict) and "attachedRouterId" in router
    }


def _network_lsa(data: Any) -> NetworkLSA:
    data = _as_dict(data, "network LSA")
    return _fill(
        NetworkLSA, data, _NETWORK_LSA_FIELDS, attached_routers=_attached_routers(data)
    )


def _summary_lsa(data: Any) -> SummaryLSA:
    return _fill(SummaryLSA, _as_dict(data, "summary LSA"), _SUMMARY_LSA_FIELDS)


def _summary_lsa_from_network_fields(data: Any) -> SummaryLSA:
    """Build a summary LSA from the network-LSA field set.

    Summary LSAs carry no attached routers, so their presence is an error.
    """
    data = _as_dict(data, "summary LSA")
    if isinstance(data.get(_ATTACHED_ROUTERS_KEY), dict):
        raise ParseError("unknown field 'attached_routers' in summary LSA")
    return _fill(SummaryLSA, data, _NETWORK_LSA_FIELDS)


def _external_lsa(data: Any) -> ExternalLSA:
    return _fill(ExternalLSA, _as_dict(data, "external LSA"), _EXTERNAL_LSA_FIELDS)


def _nssa_external_lsa(data: Mapping[str, Any]) -> NssaExternalLSA:
    return _fill(NssaExternalLSA, data, _NSSA_EXTERNAL_LSA_FIELDS)


def _area_map(raw: Dict[str, Any], key: str, build: Callable[[Any], T]) -> Dict[str, Dict[str, T]]:
    """Parse ``{area: {lsa_id: lsa}}``; an absent or non-object section is empty."""
    section = raw.get(key)
    if not isinstance(section, dict):
        return {}
    return {
        area_id: {
            lsa_id: build(lsa)
            for lsa_id, lsa in _as_dict(area_data, f"area {area_id}").items()
        }
        for area_id, area_data in section.items()
    }


# --- self-originated LSAs -------------------------------------------------


def parse_ospf_router_lsa(json_data: JsonInput) -> OSPFRouterData:
    """Parse ``show ip ospf data router self json``."""
    raw = _load(json_data)
    areas = _area_map(raw, "Router Link States", _router_lsa)
    return OSPFRouterData(
        router_id=to_str(raw.get("routerId")),
        router_states={
            area_id: OSPFRouterArea(lsa_entries=entries)
            for area_id, entries in areas.items()
        },
    )


def parse_ospf_network_lsa(json_data: JsonInput) -> OSPFNetworkData:
    """Parse ``show ip ospf data network self json``."""
    raw = _load(json_data)
    areas = _area_map(raw, "Net Link States", _network_lsa)
    return OSPFNetworkData(
        router_id=to_str(raw.get("routerId")),
        net_states={
            area_id: NetAreaState(lsa_entries=entries)
            for area_id, entries in areas.items()
        },
    )


def parse_ospf_summary_lsa(json_data: JsonInput) -> OSPFSummaryData:
    """Parse ``show ip ospf data summary self json``."""
    raw = _load(json_data)
    net_areas = _area_map(raw, "Net Link States", _network_lsa)
    summary_areas = _area_map(raw, "Summary Link States", _summary_lsa)
    return OSPFSummaryData(
        router_id=to_str(raw.get("routerId")),
        net_states={
            area_id: NetAreaState(lsa_entries=entries)
            for area_id, entries in net_areas.items()
        },
        summary_states={
            area_id: SummaryAreaState(lsa_entries=entries)
            for area_id, entries in summary_areas.items()
        },
    )


def parse_ospf_asbr_summary_lsa(json_data: JsonInput) -> OSPFAsbrSummaryData:
    """Parse ``show ip ospf data asbr-summary self json``."""
    raw = _load(json_data)
    areas = _area_map(raw, "ASBR-Summary Link States", _summary_lsa)
    return OSPFAsbrSummaryData(
        router_id=to_str(raw.get("routerId")),
        asbr_summary_states={
            area_id: SummaryAreaState(lsa_entries=entries)
            for area_id, entries in areas.items()
        },
    )


def parse_ospf_external_lsa(json_data: JsonInput) -> OSPFExternalData:
    """Parse ``show ip ospf data external self json``."""
    raw = _load(json_data)
    states = raw.get("AS External Link States")
    external = (
        {lsa_id: _external_lsa(lsa) for lsa_id, lsa in states.items()}
        if isinstance(states, dict)
        else {}
    )
    return OSPFExternalData(
        router_id=to_str(raw.get("routerId")), as_external_link_states=external
    )


def parse_ospf_nssa_external_lsa(json_data: JsonInput) -> OSPFNssaExternalData:
    """Parse ``show ip ospf data nssa-external self json``.

    Area and LSA entries that are not objects are skipped.
    """
    raw = _load(json_data)
    areas: Dict[str, NssaExternalArea] = {}
    states = raw.get("NSSA-external Link States")
    if isinstance(states, dict):
        for area_id, area_data in states.items():
            if not isinstance(area_data, dict):
                continue
            areas[area_id] = NssaExternalArea(
                data={
                    lsa_id: _nssa_external_lsa(lsa)
                    for lsa_id, lsa in area_data.items()
                    if isinstance(lsa, dict)
                }
            )
    return OSPFNssaExternalData(
        router_id=to_str(raw.get("routerId")), nssa_external_link_states=areas
    )


# --- LSAs of all routers --------------------------------------------------
#
# These listings are grouped as {router: {area: [lsa, ...]}}. The LSAs found
# under one router are gathered into one table, and every area seen under
# that router refers to the whole table.


def _collect_grouped(
    section: Any,
    key_of: Callable[[Dict[str, Any]], str],
    build: Callable[[Dict[str, Any]], T],
) -> Dict[str, Dict[str, T]]:
    areas: Dict[str, Dict[str, T]] = {}
    if not isinstance(section, dict):
        return areas
    for router_id, router_areas in section.items():
        router_areas = _as_dict(router_areas, f"entry {router_id}")
        table: Dict[str, T] = {}
        for area_id, lsas in router_areas.items():
            for lsa in _as_list(lsas, f"area {area_id}"):
                lsa = _as_dict(lsa, "LSA")
                table[key_of(lsa)] = build(lsa)
            areas[area_id] = table
    return {area_id: dict(table) for area_id, table in areas.items()}


def parse_ospf_router_lsa_all(json_data: JsonInput) -> OSPFRouterData:
    """Parse ``show ip ospf data router json``; LSAs keyed by advertising router."""
    raw = _load(json_data)
    areas = _collect_grouped(
        raw.get("routerLinkStates"),
        lambda lsa: _required_str(lsa, "advertisingRouter"),
        _router_lsa,
    )
    return OSPFRouterData(
        router_id=to_str(raw.get("routerId")),
        router_states={
            area_id: OSPFRouterArea(lsa_entries=entries)
            for area_id, entries in areas.items()
        },
    )


def parse_ospf_network_lsa_all(json_data: JsonInput) -> OSPFNetworkData:
    """Parse ``show ip ospf data network json``; LSAs keyed by link-state id."""
    raw = _load(json_data)
    areas = _collect_grouped(
        raw.get("networkLinkStates"),
        lambda lsa: _required_str(lsa, "linkStateId"),
        _network_lsa,
    )
    return OSPFNetworkData(
        router_id=to_str(raw.get("routerId")),
        net_states={
            area_id: NetAreaState(lsa_entries=entries)
            for area_id, entries in areas.items()
        },
    )


def parse_ospf_summary_lsa_all(json_data: JsonInput) -> OSPFSummaryData:
    """Parse ``show ip ospf data summary json``; LSAs keyed by link-state id.

    All LSAs listed under one router are filed under the last area named
    for that router.
    """
    raw = _load(json_data)
    summary_states: Dict[str, SummaryAreaState] = {}
    section = raw.get("summaryLinkStates")
    if isinstance(section, dict):
        for router_id, router_areas in section.items():
            router_areas = _as_dict(router_areas, f"entry {router_id}")
            entries: Dict[str, SummaryLSA] = {}
            last_area = ""
            for area_id, lsas in router_areas.items():
                last_area = area_id
                for lsa in _as_list(lsas, f"area {area_id}"):
                    lsa = _as_dict(lsa, "LSA")
                    entries[_required_str(lsa, "linkStateId")] = (
                        _summary_lsa_from_network_fields(lsa)
                    )
            summary_states[last_area] = SummaryAreaState(lsa_entries=entries)
    return OSPFSummaryData(
        router_id=to_str(raw.get("routerId")), summary_states=summary_states
    )


def parse_ospf_nssa_external_all(json_data: JsonInput) -> OSPFNssaExternalAll:
    """Parse ``show ip ospf data nssa-external json``; LSAs keyed by link-state id.

    Router entries that are not objects are skipped; all LSAs of one router
    are filed under the last area named for it.
    """
    raw = _load(json_data)
    areas: Dict[str, NssaExternalArea] = {}
    section = raw.get("nssaExternalLinkStates")
    if isinstance(section, dict):
        for router_areas in section.values():
            if not isinstance(router_areas, dict):
                continue
            lsas: Dict[str, NssaExternalLSA] = {}
            last_area = ""
            for area_id, link_states in router_areas.items():
                last_area = area_id
                for lsa in _as_list(link_states, f"area {area_id}"):
                    lsa = _as_dict(lsa, "LSA")
                    lsas[_required_str(lsa, "linkStateId")] = _nssa_external_lsa(lsa)
            areas[last_area] = NssaExternalArea(data=lsas)
    return OSPFNssaExternalAll(
        router_id=to_str(raw.get("routerId")), nssa_external_all_link_states=areas
    )