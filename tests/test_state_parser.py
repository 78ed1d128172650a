import json

import pytest

from frrmad.models import ParseError
from frrmad.state_parser import (
    parse_general_ospf_information,
    parse_interface_status,
    parse_rib,
    parse_rib_fib_summary,
)


def test_interface_status_basic():
    data = """{
        "eth0": {
            "administrativeStatus": "up",
            "operationalStatus": "up",
            "index": 1
        }
    }"""
    result = parse_interface_status(data)
    iface = result.interfaces["eth0"]
    assert iface.administrative_status == "up"
    assert iface.operational_status == "up"
    assert iface.index == 1


def test_interface_status_addresses_and_evpn():
    data = json.dumps(
        {
            "eth1": {
                "ipAddresses": [
                    {"address": "10.0.0.1/24", "secondary": False},
                    {"address": "10.0.1.1/24", "secondary": True},
                    "bogus",
                ],
                "evpnMh": {"esi": "00:00", "dfPreference": 32767, "activeMode": True},
                "mtu": 1500,
            },
            "skipped": "not an object",
        }
    )
    result = parse_interface_status(data)
    assert list(result.interfaces) == ["eth1"]
    iface = result.interfaces["eth1"]
    assert [ip.address for ip in iface.ip_addresses] == ["10.0.0.1/24", "10.0.1.1/24"]
    assert iface.ip_addresses[1].secondary is True
    assert iface.evpn_mh.esi == "00:00"
    assert iface.evpn_mh.df_preference == 32767
    assert iface.evpn_mh.active_mode is True
    assert iface.mtu == 1500


def test_interface_without_evpn_has_none():
    result = parse_interface_status('{"lo": {"mtu": 65536}}')
    assert result.interfaces["lo"].evpn_mh is None


def test_interface_status_invalid_json():
    with pytest.raises(ParseError):
        parse_interface_status("{invalid}")


def test_rib_basic():
    data = """{
        "10.0.0.0/24": [
            {"prefix": "10.0.0.0", "prefixLen": 24, "protocol": "ospf"}
        ]
    }"""
    result = parse_rib(data)
    routes = result.routes["10.0.0.0/24"].routes
    assert len(routes) == 1
    assert routes[0].prefix == "10.0.0.0"
    assert routes[0].prefix_len == 24
    assert routes[0].protocol == "ospf"


def test_rib_nexthops_and_skips():
    data = json.dumps(
        {
            "0.0.0.0/0": [
                {
                    "prefix": "0.0.0.0",
                    "selected": True,
                    "nexthops": [
                        {"ip": "10.0.0.254", "interfaceName": "eth0", "fib": True},
                        42,
                    ],
                }
            ],
            "ignored": {"prefix": "x"},
        }
    )
    result = parse_rib(data)
    assert list(result.routes) == ["0.0.0.0/0"]
    route = result.routes["0.0.0.0/0"].routes[0]
    assert route.selected is True
    assert len(route.nexthops) == 1
    assert route.nexthops[0].ip == "10.0.0.254"
    assert route.nexthops[0].interface_name == "eth0"
    assert route.nexthops[0].fib is True


def test_rib_numbers_only_from_json_numbers():
    result = parse_rib('{"p": [{"prefixLen": "24", "distance": 110.7}]}')
    route = result.routes["p"].routes[0]
    assert route.prefix_len == 0
    assert route.distance == 110


def test_rib_null_input_is_empty():
    assert parse_rib("null").routes == {}


def test_general_ospf_information():
    data = json.dumps(
        {
            "routerId": "65.0.1.1",
            "holdtimeMultplier": 2,
            "lsaAsOpaqueChecksum": 4660,
            "abrType": "Alternative Cisco",
            "rfc2328Conform": True,
            "spfLastExecutedMsecs": 12345.9,
            "areas": {
                "0.0.0.0": {"backbone": True, "lsaNumber": 9, "authentication": "none"},
                "bad": 5,
            },
        }
    )
    result = parse_general_ospf_information(data)
    assert result.router_id == "65.0.1.1"
    assert result.holdtime_multiplier == 2
    assert result.lsa_asopaque_checksum == 4660
    assert result.abr_type == "Alternative Cisco"
    assert result.rfc2328_conform is True
    assert result.spf_last_executed_msecs == 12345
    assert list(result.areas) == ["0.0.0.0"]
    area = result.areas["0.0.0.0"]
    assert area.backbone is True
    assert area.lsa_number == 9
    assert area.authentication == "none"


def test_general_wrong_types_take_zero_values():
    result = parse_general_ospf_information('{"routerId": 5, "tosRoutesOnly": "yes"}')
    assert result.router_id == ""
    assert result.tos_routes_only is False


def test_rib_fib_summary():
    data = json.dumps(
        {
            "routes": [
                {"fib": 3, "rib": 4, "type": "ospf"},
                {"fib": 2, "rib": 2, "type": "connected", "fibTrapped": 1},
            ],
            "routesTotal": 6,
            "routesTotalFib": 5,
        }
    )
    result = parse_rib_fib_summary(data)
    assert [s.type for s in result.route_summaries] == ["ospf", "connected"]
    assert result.route_summaries[0].rib == 4
    assert result.route_summaries[1].fib_trapped == 1
    assert result.routes_total == 6
    assert result.routes_total_fib == 5


def test_rib_fib_summary_invalid_json():
    with pytest.raises(ParseError):
        parse_rib_fib_summary("not json")