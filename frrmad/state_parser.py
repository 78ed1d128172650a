"""Parsers for general OSPF state, interface status and the routing table.

These parsers are lenient: a field of the wrong JSON type takes its zero
value, and numbers are read only from JSON numbers, truncated to integers.
"""

from __future__ import annotations

import math
from typing import Any, Callable, Dict, Mapping, Tuple, Type, TypeVar

from .lsa_parser import JsonInput, _load
from .models import (
    EvpnMh,
    GeneralInfoOspfArea,
    GeneralOspfInformation,
    InterfaceList,
    IpAddress,
    Nexthop,
    RibFibSummaryRoutes,
    Route,
    RouteEntry,
    RouteSummary,
    RoutingInformationBase,
    SingleInterface,
)

T = TypeVar("T")


def _get_str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def _get_bool(data: Mapping[str, Any], key: str) -> bool:
    value = data.get(key)
    return value if isinstance(value, bool) else False


def _get_num(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    return int(value)


Spec = Tuple[Tuple[str, str, Callable[[Mapping[str, Any], str], Any]], ...]


def _extract(cls: Type[T], data: Mapping[str, Any], spec: Spec, **extra: Any) -> T:
    values = {attr: getter(data, key) for key, attr, getter in spec}
    values.update(extra)
    return cls(**values)


_GENERAL_SPEC: Spec = (
    ("routerId", "router_id", _get_str),
    ("tosRoutesOnly", "tos_routes_only", _get_bool),
    ("rfc2328Conform", "rfc2328_conform", _get_bool),
    ("spfScheduleDelayMsecs", "spf_schedule_delay_msecs", _get_num),
    ("holdtimeMinMsecs", "holdtime_min_msecs", _get_num),
    ("holdtimeMaxMsecs", "holdtime_max_msecs", _get_num),
    ("holdtimeMultplier", "holdtime_multiplier", _get_num),
    ("spfLastExecutedMsecs", "spf_last_executed_msecs", _get_num),
    ("spfLastDurationMsecs", "spf_last_duration_msecs", _get_num),
    ("lsaMinIntervalMsecs", "lsa_min_interval_msecs", _get_num),
    ("lsaMinArrivalMsecs", "lsa_min_arrival_msecs", _get_num),
    ("writeMultiplier", "write_multiplier", _get_num),
    ("refreshTimerMsecs", "refresh_timer_msecs", _get_num),
    ("maximumPaths", "maximum_paths", _get_num),
    ("preference", "preference", _get_num),
    ("asbrRouter", "asbr_router", _get_str),
    ("abrType", "abr_type", _get_str),
    ("lsaExternalCounter", "lsa_external_counter", _get_num),
    ("lsaExternalChecksum", "lsa_external_checksum", _get_num),
    ("lsaAsopaqueCounter", "lsa_asopaque_counter", _get_num),
    ("lsaAsOpaqueChecksum", "lsa_asopaque_checksum", _get_num),
    ("attachedAreaCounter", "attached_area_counter", _get_num),
)

_GENERAL_AREA_SPEC: Spec = (
    ("backbone", "backbone", _get_bool),
    ("areaIfTotalCounter", "area_if_total_counter", _get_num),
    ("areaIfActiveCounter", "area_if_active_counter", _get_num),
    ("nbrFullAdjacentCounter", "nbr_full_adjacent_counter", _get_num),
    ("authentication", "authentication", _get_str),
    ("spfExecutedCounter", "spf_executed_counter", _get_num),
    ("lsaNumber", "lsa_number", _get_num),
    ("lsaRouterNumber", "lsa_router_number", _get_num),
    ("lsaRouterChecksum", "lsa_router_checksum", _get_num),
    ("lsaNetworkNumber", "lsa_network_number", _get_num),
    ("lsaNetworkChecksum", "lsa_network_checksum", _get_num),
    ("lsaSummaryNumber", "lsa_summary_number", _get_num),
    ("lsaSummaryChecksum", "lsa_summary_checksum", _get_num),
    ("lsaAsbrNumber", "lsa_asbr_number", _get_num),
    ("lsaAsbrChecksum", "lsa_asbr_checksum", _get_num),
    ("lsaNssaNumber", "lsa_nssa_number", _get_num),
    ("lsaNssaChecksum", "lsa_nssa_checksum", _get_num),
    ("lsaOpaqueLinkNumber", "lsa_opaque_link_number", _get_num),
    ("lsaOpaqueLinkChecksum", "lsa_opaque_link_checksum", _get_num),
    ("lsaOpaqueAreaNumber", "lsa_opaque_area_number", _get_num),
    ("lsaOpaqueAreaChecksum", "lsa_opaque_area_checksum", _get_num),
)

_INTERFACE_SPEC: Spec = (
    ("administrativeStatus", "administrative_status", _get_str),
    ("operationalStatus", "operational_status", _get_str),
    ("linkDetection", "link_detection", _get_bool),
    ("linkUps", "link_ups", _get_num),
    ("linkDowns", "link_downs", _get_num),
    ("lastLinkUp", "last_link_up", _get_str),
    ("lastLinkDown", "last_link_down", _get_str),
    ("vrfName", "vrf_name", _get_str),
    ("mplsEnabled", "mpls_enabled", _get_bool),
    ("linkDown", "link_down", _get_bool),
    ("linkDownV6", "link_down_v6", _get_bool),
    ("mcForwardingV4", "mc_forwarding_v4", _get_bool),
    ("mcForwardingV6", "mc_forwarding_v6", _get_bool),
    ("pseudoInterface", "pseudo_interface", _get_bool),
    ("index", "index", _get_num),
    ("metric", "metric", _get_num),
    ("mtu", "mtu", _get_num),
    ("speed", "speed", _get_num),
    ("flags", "flags", _get_str),
    ("type", "type", _get_str),
    ("hardwareAddress", "hardware_address", _get_str),
    ("interfaceType", "interface_type", _get_str),
    ("interfaceSlaveType", "interface_slave_type", _get_str),
    ("lacpBypass", "lacp_bypass", _get_bool),
    ("protodown", "protodown", _get_str),
    ("parentIfindex", "parent_ifindex", _get_num),
)

_IP_ADDRESS_SPEC: Spec = (
    ("address", "address", _get_str),
    ("secondary", "secondary", _get_bool),
    ("unnumbered", "unnumbered", _get_bool),
)

_EVPN_SPEC: Spec = (
    ("ethernetSegmentId", "ethernet_segment_id", _get_str),
    ("esi", "esi", _get_str),
    ("dfPreference", "df_preference", _get_num),
    ("dfAlgorithm", "df_algorithm", _get_str),
    ("dfStatus", "df_status", _get_str),
    ("multihomingMode", "multi_homing_mode", _get_str),
    ("activeMode", "active_mode", _get_bool),
    ("bypassMode", "bypass_mode", _get_bool),
    ("localBias", "local_bias", _get_bool),
    ("fastFailover", "fast_failover", _get_bool),
    ("upTime", "up_time", _get_str),
    ("bgpStatus", "bgp_status", _get_str),
    ("protocolStatus", "protocol_status", _get_str),
    ("protocolDown", "protocol_down", _get_bool),
    ("macCount", "mac_count", _get_num),
    ("localIfindex", "local_ifindex", _get_num),
    ("networkCount", "network_count", _get_num),
    ("joinCount", "join_count", _get_num),
    ("leaveCount", "leave_count", _get_num),
)

_ROUTE_SPEC: Spec = (
    ("prefix", "prefix", _get_str),
    ("prefixLen", "prefix_len", _get_num),
    ("protocol", "protocol", _get_str),
    ("vrfId", "vrf_id", _get_num),
    ("vrfName", "vrf_name", _get_str),
    ("selected", "selected", _get_bool),
    ("destSelected", "dest_selected", _get_bool),
    ("distance", "distance", _get_num),
    ("metric", "metric", _get_num),
    ("installed", "installed", _get_bool),
    ("table", "table", _get_num),
    ("internalStatus", "internal_status", _get_num),
    ("internalFlags", "internal_flags", _get_num),
    ("internalNextHopNum", "internal_next_hop_num", _get_num),
    ("internalNextHopActiveNum", "internal_next_hop_active_num", _get_num),
    ("nexthopGroupId", "nexthop_group_id", _get_num),
    ("installedNexthopGroupId", "installed_nexthop_group_id", _get_num),
    ("uptime", "uptime", _get_str),
)

_NEXTHOP_SPEC: Spec = (
    ("flags", "flags", _get_num),
    ("fib", "fib", _get_bool),
    ("directlyConnected", "directly_connected", _get_bool),
    ("duplicate", "duplicate", _get_bool),
    ("ip", "ip", _get_str),
    ("afi", "afi", _get_str),
    ("interfaceIndex", "interface_index", _get_num),
    ("interfaceName", "interface_name", _get_str),
    ("active", "active", _get_bool),
    ("weight", "weight", _get_num),
)

_ROUTE_SUMMARY_SPEC: Spec = (
    ("fib", "fib", _get_num),
    ("rib", "rib", _get_num),
    ("fibOffLoaded", "fib_off_loaded", _get_num),
    ("fibTrapped", "fib_trapped", _get_num),
    ("type", "type", _get_str),
)


def parse_general_ospf_information(json_data: JsonInput) -> GeneralOspfInformation:
    """Parse ``show ip ospf json``; area entries that are not objects are skipped."""
    raw = _load(json_data)
    areas: Dict[str, GeneralInfoOspfArea] = {}
    raw_areas = raw.get("areas")
    if isinstance(raw_areas, dict):
        areas = {
            area_id: _extract(GeneralInfoOspfArea, area, _GENERAL_AREA_SPEC)
            for area_id, area in raw_areas.items()
            if isinstance(area, dict)
        }
    return _extract(GeneralOspfInformation, raw, _GENERAL_SPEC, areas=areas)


def _single_interface(data: Mapping[str, Any]) -> SingleInterface:
    addresses = data.get("ipAddresses")
    ip_addresses = (
        [
            _extract(IpAddress, entry, _IP_ADDRESS_SPEC)
            for entry in addresses
            if isinstance(entry, dict)
        ]
        if isinstance(addresses, list)
        else []
    )
    evpn = data.get("evpnMh")
    evpn_mh = _extract(EvpnMh, evpn, _EVPN_SPEC) if isinstance(evpn, dict) else None
    return _extract(
        SingleInterface,
        data,
        _INTERFACE_SPEC,
        ip_addresses=ip_addresses,
        evpn_mh=evpn_mh,
    )


def parse_interface_status(json_data: JsonInput) -> InterfaceList:
    """Parse ``show interface json``; entries that are not objects are skipped."""
    raw = _load(json_data)
    return InterfaceList(
        interfaces={
            name: _single_interface(data)
            for name, data in raw.items()
            if isinstance(data, dict)
        }
    )


def _route(data: Mapping[str, Any]) -> Route:
    hops = data.get("nexthops")
    nexthops = (
        [_extract(Nexthop, hop, _NEXTHOP_SPEC) for hop in hops if isinstance(hop, dict)]
        if isinstance(hops, list)
        else []
    )
    return _extract(Route, data, _ROUTE_SPEC, nexthops=nexthops)


def parse_rib(json_data: JsonInput) -> RoutingInformationBase:
    """Parse ``show ip route json``; routes grouped by prefix."""
    raw = _load(json_data)
    return RoutingInformationBase(
        routes={
            prefix: RouteEntry(
                routes=[_route(route) for route in routes if isinstance(route, dict)]
            )
            for prefix, routes in raw.items()
            if isinstance(routes, list)
        }
    )


def parse_rib_fib_summary(json_data: JsonInput) -> RibFibSummaryRoutes:
    """Parse ``show ip route summary json``."""
    raw = _load(json_data)
    routes = raw.get("routes")
    summaries = (
        [
            _extract(RouteSummary, route, _ROUTE_SUMMARY_SPEC)
            for route in routes
            if isinstance(route, dict)
        ]
        if isinstance(routes, list)
        else []
    )
    return RibFibSummaryRoutes(
        route_summaries=summaries,
        routes_total=_get_num(raw, "routesTotal"),
        routes_total_fib=_get_num(raw, "routesTotalFib"),
    )