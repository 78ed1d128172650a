"""Parser for the running configuration that FRR prints with ``show running-config``.

Only the statements the monitoring code cares about are read: metadata,
interfaces with their addresses and OSPF settings, static routes, the
``router ospf`` block, access lists and route maps. Everything else is
ignored. Lines that are recognised but malformed are logged and skipped.
"""

from __future__ import annotations

import ipaddress
import logging
import re
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from .models import (
    AccessList,
    AccessListItem,
    Area,
    Interface,
    InterfaceIPPrefix,
    IPPrefix,
    OSPFConfig,
    Redistribution,
    RouteMap,
    StaticFRRConfiguration,
    StaticRoute,
)

log = logging.getLogger(__name__)

_DIGITS = re.compile(r"[0-9]+")
_SIGNED_INT = re.compile(r"[+-]?[0-9]+")
_INT64_MAX = 2**63 - 1


def _parse_cidr(text: str) -> Optional[Tuple[str, int]]:
    """Split ``address/length`` into the address as written and the length.

    Returns ``None`` when the text is not a valid CIDR notation.
    """
    address, sep, length = text.partition("/")
    if not sep or "%" in address or not _DIGITS.fullmatch(length):
        return None
    try:
        ip = ipaddress.ip_address(address)
    except ValueError:
        return None
    prefix_length = int(length)
    if prefix_length > ip.max_prefixlen:
        return None
    return str(ip), prefix_length


def _parse_sequence(text: str) -> int:
    """Read an access-list sequence number; anything unreadable gives 0."""
    if not _SIGNED_INT.fullmatch(text):
        return 0
    value = int(text)
    if abs(value) > _INT64_MAX:
        return 0
    return value & 0xFFFFFFFF


# --- top-level statements -------------------------------------------------


def _parse_metadata_line(config: StaticFRRConfiguration, line: str) -> bool:
    parts = line.split()
    if line.startswith("hostname "):
        config.hostname = parts[1]
    elif line.startswith("frr version "):
        config.frr_version = parts[2]
    elif line == "no ipv6 forwarding":
        config.ipv6_forwarding = False
    elif line == "no ipv4 forwarding":
        config.ipv4_forwarding = False
    elif line == "service advanced-vty":
        config.service_advanced_vty = True
    else:
        return False
    return True


def _parse_interface_line(line: str) -> Optional[Interface]:
    if not line.startswith("interface "):
        return None
    return Interface(name=line.split()[1])


def _parse_interface_address(interface: Interface, line: str, parts: List[str]) -> None:
    if "peer" in line:
        cidr = _parse_cidr(parts[4]) if len(parts) > 4 else None
        if cidr is None:
            log.warning("bad CIDR in %r", line)
            return
        peer_address, peer_length = cidr
        interface.interface_ip_prefixes.append(
            InterfaceIPPrefix(
                ip_prefix=IPPrefix(ip_address=parts[2], prefix_length=32),
                passive=False,
                has_peer=True,
                peer_ip_prefix=IPPrefix(
                    ip_address=peer_address, prefix_length=peer_length
                ),
            )
        )
        return
    cidr = _parse_cidr(parts[2]) if len(parts) > 2 else None
    if cidr is None:
        log.warning("bad CIDR in %r", line)
        return
    address, length = cidr
    interface.interface_ip_prefixes.append(
        InterfaceIPPrefix(
            ip_prefix=IPPrefix(ip_address=address, prefix_length=length),
            passive=False,
            has_peer=False,
        )
    )


def _parse_interface_sub_line(interface: Interface, line: str) -> bool:
    parts = line.split()
    if line.startswith("ip address "):
        _parse_interface_address(interface, line, parts)
        return True
    if line.startswith("ip ospf area "):
        area = parts[3]
        if len(parts) > 4:
            wanted = parts[4].casefold()
            targets = [
                prefix
                for prefix in interface.interface_ip_prefixes
                if prefix.ip_prefix is not None
                and prefix.ip_prefix.ip_address.casefold() == wanted
            ]
        else:
            targets = interface.interface_ip_prefixes
        for prefix in targets:
            prefix.ospf = True
            prefix.ospf_area = area
        interface.area = area
        return True
    if line.startswith("ip ospf passive"):
        for prefix in interface.interface_ip_prefixes:
            if len(parts) == 3 or (
                prefix.ip_prefix is not None
                and prefix.ip_prefix.ip_address == parts[3]
            ):
                prefix.passive = True
        return True
    return line == "exit"


def _parse_static_route_line(config: StaticFRRConfiguration, line: str) -> bool:
    if not line.startswith("ip route "):
        return False
    parts = line.split()
    cidr = _parse_cidr(parts[2])
    if cidr is None or len(parts) < 4:
        log.warning("bad static route %r", line)
        return True
    address, length = cidr
    config.static_routes.append(
        StaticRoute(
            ip_prefix=IPPrefix(ip_address=address, prefix_length=length),
            next_hop=parts[3],
        )
    )
    return True


def _parse_access_list_line(config: StaticFRRConfiguration, line: str) -> bool:
    if not line.startswith("access-list "):
        return False
    parts = line.split()
    if len(parts) < 6:
        log.warning("short access-list line: %r", line)
        return True
    name, sequence, action, target = parts[1], parts[3], parts[4], parts[5]
    item = AccessListItem(sequence=_parse_sequence(sequence), access_control=action)
    if target == "any":
        item.match_any = True
    else:
        cidr = _parse_cidr(target)
        if cidr is None:
            log.warning("bad CIDR %r in ACL %r", target, line)
        else:
            address, length = cidr
            item.ip_prefix = IPPrefix(ip_address=address, prefix_length=length)
    config.access_list.setdefault(name, AccessList()).access_list_items.append(item)
    return True


def _parse_route_map_line(config: StaticFRRConfiguration, line: str) -> bool:
    if not line.startswith("route-map "):
        return False
    parts = line.split()
    if len(parts) < 4:
        log.warning("short route-map line: %r", line)
        return True
    name, action, sequence = parts[1], parts[2], parts[3]
    config.route_map[name] = RouteMap(permit=action == "permit", sequence=sequence)
    return True


def _parse_route_map_match_line(config: StaticFRRConfiguration, line: str) -> bool:
    if not line.startswith("match ip address "):
        return False
    access_list_name = line.split()[3]
    for route_map in config.route_map.values():
        if not route_map.access_list:
            route_map.match = "ip address"
            route_map.access_list = access_list_name
            break
    return True


# --- router ospf block ----------------------------------------------------


def _parse_redistribution(parts: List[str]) -> Redistribution:
    values = {"redistribute": "", "metric-type": "", "route-map": ""}
    for keyword, following in zip(parts, parts[1:]):
        if keyword in values:
            values[keyword] = following
    return Redistribution(
        type=values["redistribute"],
        metric=values["metric-type"],
        route_map=values["route-map"],
    )


def _parse_router_ospf(lines: Iterator[str], config: StaticFRRConfiguration) -> None:
    """Consume the lines of a ``router ospf`` block up to its ``exit``."""
    for raw in lines:
        line = raw.strip()
        if line == "exit":
            break
        parts = line.split()
        if line.startswith("ospf router-id "):
            config.ospf_config = config.ospf_config or OSPFConfig()
            config.ospf_config.router_id = parts[2]
        elif line.startswith("redistribute "):
            config.ospf_config = config.ospf_config or OSPFConfig()
            config.ospf_config.redistribution.append(_parse_redistribution(parts))
        elif line.startswith("area "):
            config.ospf_config = config.ospf_config or OSPFConfig()
            area = Area(name=parts[1])
            if len(parts) > 2:
                area.type = parts[2]
            for keyword, following in zip(parts, parts[1:]):
                if keyword == "virtual-link":
                    area.type = "transit (virtual-link)"
                    config.ospf_config.virtual_link_neighbor = following
                    break
            config.ospf_config.area.append(area)


# --- entry points ---------------------------------------------------------


def parse_static_frr_config_lines(lines: Iterable[str]) -> StaticFRRConfiguration:
    """Parse running-configuration text given as an iterable of lines."""
    config = StaticFRRConfiguration()
    current: Optional[Interface] = None
    stream = iter(lines)

    for raw in stream:
        line = raw.strip()
        if not line or line.startswith("!"):
            continue
        if _parse_metadata_line(config, line):
            continue
        new_interface = _parse_interface_line(line)
        if new_interface is not None:
            if current is not None:
                config.interfaces.append(current)
            current = new_interface
            continue
        if current is not None and _parse_interface_sub_line(current, line):
            continue
        if _parse_static_route_line(config, line):
            continue
        if line.startswith("router ospf"):
            _parse_router_ospf(stream, config)
            continue
        if _parse_access_list_line(config, line):
            continue
        if _parse_route_map_line(config, line):
            continue
        _parse_route_map_match_line(config, line)

    if current is not None:
        config.interfaces.append(current)
    return config


def parse_static_frr_config(path: Union[str, Path]) -> StaticFRRConfiguration:
    """Parse the running-configuration file at ``path``.

    Raises :class:`OSError` when the file cannot be opened.
    """
    with open(path, encoding="utf-8", errors="replace") as handle:
        return parse_static_frr_config_lines(handle)