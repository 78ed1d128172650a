"""Data model for the state collected from an FRR router.

Every field has a zero default, so an empty instance stands for "nothing
collected yet". The conversion helpers turn loosely typed JSON values into
these field types. They accept numbers written as strings, which FRR emits
for several integer fields.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class ParseError(ValueError):
    """Raised when FRR output cannot be turned into the data model."""


def to_int(value: Any) -> int:
    """Convert a JSON value to an integer field; ``None`` gives 0."""
    if value is None:
        return 0
    if isinstance(value, bool):
        raise ParseError(f"invalid value for integer field: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return int(value)
        raise ParseError(f"invalid value for integer field: {value!r}")
    if isinstance(value, str):
        text = value.strip()
        if text != value or not text:
            raise ParseError(f"invalid value for integer field: {value!r}")
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError as exc:
            raise ParseError(f"invalid value for integer field: {value!r}") from exc
        if math.isfinite(number) and number.is_integer():
            return int(number)
    raise ParseError(f"invalid value for integer field: {value!r}")


def to_str(value: Any) -> str:
    """Convert a JSON value to a string field; ``None`` gives ''."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    raise ParseError(f"invalid value for string field: {value!r}")


def to_bool(value: Any) -> bool:
    """Convert a JSON value to a boolean field; ``None`` gives False."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    raise ParseError(f"invalid value for bool field: {value!r}")


# --- static configuration -------------------------------------------------


@dataclass
class IPPrefix:
    ip_address: str = ""
    prefix_length: int = 0


@dataclass
class InterfaceIPPrefix:
    ip_prefix: Optional[IPPrefix] = None
    passive: bool = False
    has_peer: bool = False
    peer_ip_prefix: Optional[IPPrefix] = None
    ospf: bool = False
    ospf_area: str = ""


@dataclass
class Interface:
    name: str = ""
    area: str = ""
    interface_ip_prefixes: List[InterfaceIPPrefix] = field(default_factory=list)


@dataclass
class StaticRoute:
    ip_prefix: Optional[IPPrefix] = None
    next_hop: str = ""


@dataclass
class AccessListItem:
    """One access-list entry; the destination is either ``any`` or a prefix."""

    sequence: int = 0
    access_control: str = ""
    match_any: bool = False
    ip_prefix: Optional[IPPrefix] = None


@dataclass
class AccessList:
    access_list_items: List[AccessListItem] = field(default_factory=list)


@dataclass
class RouteMap:
    permit: bool = False
    sequence: str = ""
    match: str = ""
    access_list: str = ""


@dataclass
class Redistribution:
    type: str = ""
    metric: str = ""
    route_map: str = ""


@dataclass
class Area:
    name: str = ""
    type: str = ""


@dataclass
class OSPFConfig:
    router_id: str = ""
    redistribution: List[Redistribution] = field(default_factory=list)
    area: List[Area] = field(default_factory=list)
    virtual_link_neighbor: str = ""


@dataclass
class StaticFRRConfiguration:
    hostname: str = ""
    frr_version: str = ""
    ipv4_forwarding: bool = False
    ipv6_forwarding: bool = False
    service_advanced_vty: bool = False
    interfaces: List[Interface] = field(default_factory=list)
    static_routes: List[StaticRoute] = field(default_factory=list)
    ospf_config: Optional[OSPFConfig] = None
    access_list: Dict[str, AccessList] = field(default_factory=dict)
    route_map: Dict[str, RouteMap] = field(default_factory=dict)


# --- general OSPF information ---------------------------------------------


@dataclass
class GeneralInfoOspfArea:
    backbone: bool = False
    area_if_total_counter: int = 0
    area_if_active_counter: int = 0
    nbr_full_adjacent_counter: int = 0
    authentication: str = ""
    spf_executed_counter: int = 0
    lsa_number: int = 0
    lsa_router_number: int = 0
    lsa_router_checksum: int = 0
    lsa_network_number: int = 0
    lsa_network_checksum: int = 0
    lsa_summary_number: int = 0
    lsa_summary_checksum: int = 0
    lsa_asbr_number: int = 0
    lsa_asbr_checksum: int = 0
    lsa_nssa_number: int = 0
    lsa_nssa_checksum: int = 0
    lsa_opaque_link_number: int = 0
    lsa_opaque_link_checksum: int = 0
    lsa_opaque_area_number: int = 0
    lsa_opaque_area_checksum: int = 0


@dataclass
class GeneralOspfInformation:
    router_id: str = ""
    tos_routes_only: bool = False
    rfc2328_conform: bool = False
    spf_schedule_delay_msecs: int = 0
    holdtime_min_msecs: int = 0
    holdtime_max_msecs: int = 0
    holdtime_multiplier: int = 0
    spf_last_executed_msecs: int = 0
    spf_last_duration_msecs: int = 0
    lsa_min_interval_msecs: int = 0
    lsa_min_arrival_msecs: int = 0
    write_multiplier: int = 0
    refresh_timer_msecs: int = 0
    maximum_paths: int = 0
    preference: int = 0
    asbr_router: str = ""
    abr_type: str = ""
    lsa_external_counter: int = 0
    lsa_external_checksum: int = 0
    lsa_asopaque_counter: int = 0
    lsa_asopaque_checksum: int = 0
    attached_area_counter: int = 0
    areas: Dict[str, GeneralInfoOspfArea] = field(default_factory=dict)


# --- per-type LSA data ----------------------------------------------------


@dataclass
class RouterLink:
    link_type: str = ""
    designated_router_address: str = ""
    neighbor_router_id: str = ""
    router_interface_address: str = ""
    network_address: str = ""
    network_mask: str = ""
    num_of_tos_metrics: int = 0
    tos0_metric: int = 0


@dataclass
class OSPFRouterLSA:
    lsa_age: int = 0
    options: str = ""
    lsa_flags: int = 0
    flags: int = 0
    asbr: bool = False
    lsa_type: str = ""
    link_state_id: str = ""
    advertising_router: str = ""
    lsa_seq_number: str = ""
    checksum: str = ""
    length: int = 0
    num_of_links: int = 0
    router_links: Dict[str, RouterLink] = field(default_factory=dict)


@dataclass
class OSPFRouterArea:
    lsa_entries: Dict[str, OSPFRouterLSA] = field(default_factory=dict)


@dataclass
class OSPFRouterData:
    router_id: str = ""
    router_states: Dict[str, OSPFRouterArea] = field(default_factory=dict)


@dataclass
class NetworkLSA:
    """A network LSA; ``attached_routers`` maps each key to its router id."""

    lsa_age: int = 0
    options: str = ""
    lsa_flags: int = 0
    lsa_type: str = ""
    link_state_id: str = ""
    advertising_router: str = ""
    lsa_seq_number: str = ""
    checksum: str = ""
    length: int = 0
    network_mask: int = 0
    attached_routers: Dict[str, str] = field(default_factory=dict)


@dataclass
class NetAreaState:
    lsa_entries: Dict[str, NetworkLSA] = field(default_factory=dict)


@dataclass
class OSPFNetworkData:
    router_id: str = ""
    net_states: Dict[str, NetAreaState] = field(default_factory=dict)


@dataclass
class SummaryLSA:
    lsa_age: int = 0
    options: str = ""
    lsa_flags: int = 0
    lsa_type: str = ""
    link_state_id: str = ""
    advertising_router: str = ""
    lsa_seq_number: str = ""
    checksum: str = ""
    length: int = 0
    network_mask: int = 0
    tos0_metric: int = 0


@dataclass
class SummaryAreaState:
    lsa_entries: Dict[str, SummaryLSA] = field(default_factory=dict)


@dataclass
class OSPFSummaryData:
    router_id: str = ""
    net_states: Dict[str, NetAreaState] = field(default_factory=dict)
    summary_states: Dict[str, SummaryAreaState] = field(default_factory=dict)


@dataclass
class OSPFAsbrSummaryData:
    router_id: str = ""
    asbr_summary_states: Dict[str, SummaryAreaState] = field(default_factory=dict)


@dataclass
class ExternalLSA:
    lsa_age: int = 0
    options: str = ""
    lsa_flags: int = 0
    lsa_type: str = ""
    link_state_id: str = ""
    advertising_router: str = ""
    lsa_seq_number: str = ""
    checksum: str = ""
    length: int = 0
    network_mask: int = 0
    metric_type: str = ""
    tos: int = 0
    metric: int = 0
    forward_address: str = ""
    external_route_tag: int = 0


@dataclass
class OSPFExternalData:
    router_id: str = ""
    as_external_link_states: Dict[str, ExternalLSA] = field(default_factory=dict)


@dataclass
class NssaExternalLSA:
    lsa_age: int = 0
    options: str = ""
    lsa_flags: int = 0
    lsa_type: str = ""
    link_state_id: str = ""
    advertising_router: str = ""
    lsa_seq_number: str = ""
    checksum: str = ""
    length: int = 0
    network_mask: int = 0
    metric_type: str = ""
    tos: int = 0
    metric: int = 0
    nssa_forward_address: str = ""
    external_route_tag: int = 0


@dataclass
class NssaExternalArea:
    data: Dict[str, NssaExternalLSA] = field(default_factory=dict)


@dataclass
class OSPFNssaExternalData:
    router_id: str = ""
    nssa_external_link_states: Dict[str, NssaExternalArea] = field(default_factory=dict)


@dataclass
class OSPFNssaExternalAll:
    router_id: str = ""
    nssa_external_all_link_states: Dict[str, NssaExternalArea] = field(
        default_factory=dict
    )


# --- full link-state database ---------------------------------------------


@dataclass
class BaseLSA:
    ls_id: str = ""
    advertised_router: str = ""
    lsa_age: int = 0
    sequence_number: str = ""
    checksum: str = ""


@dataclass
class RouterDataLSA:
    base: Optional[BaseLSA] = None
    num_of_router_links: int = 0


@dataclass
class NetworkDataLSA:
    base: Optional[BaseLSA] = None


@dataclass
class SummaryDataLSA:
    base: Optional[BaseLSA] = None
    summary_address: str = ""


@dataclass
class ASBRSummaryDataLSA:
    base: Optional[BaseLSA] = None


@dataclass
class NSSAExternalDataLSA:
    base: Optional[BaseLSA] = None
    metric_type: str = ""
    route: str = ""
    tag: int = 0


@dataclass
class ExternalDataLSA:
    base: Optional[BaseLSA] = None
    metric_type: str = ""
    route: str = ""
    tag: int = 0


@dataclass
class OSPFDatabaseArea:
    router_link_states: List[RouterDataLSA] = field(default_factory=list)
    router_link_states_count: int = 0
    network_link_states: List[NetworkDataLSA] = field(default_factory=list)
    network_link_states_count: int = 0
    summary_link_states: List[SummaryDataLSA] = field(default_factory=list)
    summary_link_states_count: int = 0
    asbr_summary_link_states: List[ASBRSummaryDataLSA] = field(default_factory=list)
    asbr_summary_link_states_count: int = 0
    nssa_external_link_states: List[NSSAExternalDataLSA] = field(default_factory=list)
    nssa_external_link_states_count: int = 0


@dataclass
class OSPFDatabase:
    router_id: str = ""
    areas: Dict[str, OSPFDatabaseArea] = field(default_factory=dict)
    as_external_link_states: List[ExternalDataLSA] = field(default_factory=list)
    as_external_count: int = 0


@dataclass
class ASExternalLinkState:
    lsa_age: int = 0
    options: str = ""
    lsa_flags: int = 0
    lsa_type: str = ""
    link_state_id: str = ""
    advertising_router: str = ""
    lsa_seq_number: str = ""
    checksum: str = ""
    length: int = 0
    network_mask: int = 0
    metric_type: str = ""
    tos: int = 0
    metric: int = 0
    forward_address: str = ""
    external_route_tag: int = 0


@dataclass
class OSPFExternalAll:
    router_id: str = ""
    as_external_link_states: List[ASExternalLinkState] = field(default_factory=list)


# --- neighbors ------------------------------------------------------------


@dataclass
class Neighbor:
    priority: int = 0
    state: str = ""
    nbr_priority: int = 0
    nbr_state: str = ""
    converged: str = ""
    role: str = ""
    up_time_in_msec: int = 0
    dead_time_msecs: int = 0
    router_dead_interval_timer_due_msec: int = 0
    up_time: str = ""
    dead_time: str = ""
    address: str = ""
    iface_address: str = ""
    iface_name: str = ""
    retransmit_counter: int = 0
    link_state_retransmission_list_counter: int = 0
    request_counter: int = 0
    link_state_request_list_counter: int = 0
    db_summary_counter: int = 0
    database_summary_list_counter: int = 0


@dataclass
class NeighborList:
    neighbors: List[Neighbor] = field(default_factory=list)


@dataclass
class OSPFNeighbors:
    neighbors: Dict[str, NeighborList] = field(default_factory=dict)


# --- interfaces -----------------------------------------------------------


@dataclass
class IpAddress:
    address: str = ""
    secondary: bool = False
    unnumbered: bool = False


@dataclass
class EvpnMh:
    ethernet_segment_id: str = ""
    esi: str = ""
    df_preference: int = 0
    df_algorithm: str = ""
    df_status: str = ""
    multi_homing_mode: str = ""
    active_mode: bool = False
    bypass_mode: bool = False
    local_bias: bool = False
    fast_failover: bool = False
    up_time: str = ""
    bgp_status: str = ""
    protocol_status: str = ""
    protocol_down: bool = False
    mac_count: int = 0
    local_ifindex: int = 0
    network_count: int = 0
    join_count: int = 0
    leave_count: int = 0


@dataclass
class SingleInterface:
    administrative_status: str = ""
    operational_status: str = ""
    link_detection: bool = False
    link_ups: int = 0
    link_downs: int = 0
    last_link_up: str = ""
    last_link_down: str = ""
    vrf_name: str = ""
    mpls_enabled: bool = False
    link_down: bool = False
    link_down_v6: bool = False
    mc_forwarding_v4: bool = False
    mc_forwarding_v6: bool = False
    pseudo_interface: bool = False
    index: int = 0
    metric: int = 0
    mtu: int = 0
    speed: int = 0
    flags: str = ""
    type: str = ""
    hardware_address: str = ""
    interface_type: str = ""
    interface_slave_type: str = ""
    lacp_bypass: bool = False
    protodown: str = ""
    parent_ifindex: int = 0
    ip_addresses: List[IpAddress] = field(default_factory=list)
    evpn_mh: Optional[EvpnMh] = None


@dataclass
class InterfaceList:
    interfaces: Dict[str, SingleInterface] = field(default_factory=dict)


# --- routing table --------------------------------------------------------


@dataclass
class Nexthop:
    flags: int = 0
    fib: bool = False
    directly_connected: bool = False
    duplicate: bool = False
    ip: str = ""
    afi: str = ""
    interface_index: int = 0
    interface_name: str = ""
    active: bool = False
    weight: int = 0


@dataclass
class Route:
    prefix: str = ""
    prefix_len: int = 0
    protocol: str = ""
    vrf_id: int = 0
    vrf_name: str = ""
    selected: bool = False
    dest_selected: bool = False
    distance: int = 0
    metric: int = 0
    installed: bool = False
    table: int = 0
    internal_status: int = 0
    internal_flags: int = 0
    internal_next_hop_num: int = 0
    internal_next_hop_active_num: int = 0
    nexthop_group_id: int = 0
    installed_nexthop_group_id: int = 0
    uptime: str = ""
    nexthops: List[Nexthop] = field(default_factory=list)


@dataclass
class RouteEntry:
    routes: List[Route] = field(default_factory=list)


@dataclass
class RoutingInformationBase:
    routes: Dict[str, RouteEntry] = field(default_factory=dict)


@dataclass
class RouteSummary:
    fib: int = 0
    rib: int = 0
    fib_off_loaded: int = 0
    fib_trapped: int = 0
    type: str = ""


@dataclass
class RibFibSummaryRoutes:
    route_summaries: List[RouteSummary] = field(default_factory=list)
    routes_total: int = 0
    routes_total_fib: int = 0


# --- host and aggregate ---------------------------------------------------


@dataclass
class SystemMetrics:
    cpu_amount: int = 0
    cpu_usage: float = 0.0
    memory_usage: float = 0.0


@dataclass
class FRRRouterData:
    router_name: str = ""
    ospf_router_id: str = ""


@dataclass
class FullFRRData:
    """Everything one collection cycle gathers, each part present and empty."""

    ospf_database: OSPFDatabase = field(default_factory=OSPFDatabase)
    general_ospf_information: GeneralOspfInformation = field(
        default_factory=GeneralOspfInformation
    )
    ospf_router_data: OSPFRouterData = field(default_factory=OSPFRouterData)
    ospf_router_data_all: OSPFRouterData = field(default_factory=OSPFRouterData)
    ospf_network_data: OSPFNetworkData = field(default_factory=OSPFNetworkData)
    ospf_network_data_all: OSPFNetworkData = field(default_factory=OSPFNetworkData)
    ospf_summary_data: OSPFSummaryData = field(default_factory=OSPFSummaryData)
    ospf_summary_data_all: OSPFSummaryData = field(default_factory=OSPFSummaryData)
    ospf_asbr_summary_data: OSPFAsbrSummaryData = field(
        default_factory=OSPFAsbrSummaryData
    )
    ospf_external_data: OSPFExternalData = field(default_factory=OSPFExternalData)
    ospf_nssa_external_data: OSPFNssaExternalData = field(
        default_factory=OSPFNssaExternalData
    )
    ospf_external_all: OSPFExternalAll = field(default_factory=OSPFExternalAll)
    ospf_nssa_external_all: OSPFNssaExternalAll = field(
        default_factory=OSPFNssaExternalAll
    )
    ospf_neighbors: OSPFNeighbors = field(default_factory=OSPFNeighbors)
    interfaces: InterfaceList = field(default_factory=InterfaceList)
    routing_information_base: RoutingInformationBase = field(
        default_factory=RoutingInformationBase
    )
    rib_fib_summary_routes: RibFibSummaryRoutes = field(
        default_factory=RibFibSummaryRoutes
    )
    static_frr_configuration: StaticFRRConfiguration = field(
        default_factory=StaticFRRConfiguration
    )
    system_metrics: SystemMetrics = field(default_factory=SystemMetrics)
    frr_router_data: FRRRouterData = field(default_factory=FRRRouterData)