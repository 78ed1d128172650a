# frrmad

Collect and parse state from a running FRRouting (FRR) router: OSPF
link-state databases, neighbours, interfaces, the routing table, the running
configuration and a few host metrics. Every kind of data comes back as plain
Python dataclasses defined in `frrmad.models`.

## Installation

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Modules

| Module | Contents |
| --- | --- |
| `frrmad.models` | The dataclasses, `ParseError`, and the converters `to_int`, `to_str`, `to_bool` |
| `frrmad.lsa_parser` | Parsers for the per-type `show ip ospf data ... json` listings |
| `frrmad.database_parser` | `parse_full_ospf_database`, `parse_ospf_external_all`, `parse_ospf_neighbors` |
| `frrmad.state_parser` | `parse_general_ospf_information`, `parse_interface_status`, `parse_rib`, `parse_rib_fib_summary` |
| `frrmad.config_parser` | `parse_static_frr_config`, `parse_static_frr_config_lines` |
| `frrmad.frrsockets` | `FRRCommandExecutor`, `new_connection`, `execute_cmd` |
| `frrmad.fetcher` | One `fetch_*` function per command, plus host metrics |
| `frrmad.collector` | `Collector`, `init_aggregator`, `start_aggregator` |

## Talking to the FRR daemons

`FRRCommandExecutor` sends commands to the `ospfd.vty` and `zebra.vty` Unix
sockets in an FRR runtime directory and returns the raw reply as bytes. The
session enters `enable` mode first, as `vtysh` does. The whole exchange must
finish within the timeout (in seconds), otherwise `TimeoutError` is raised; a
connection closed early raises `ConnectionError`.

```python
from frrmad.frrsockets import new_connection

executor = new_connection("/var/run/frr", 2.0)
raw = executor.exec_ospf_cmd("show ip ospf neighbor json")
routes = executor.exec_zebra_cmd("show ip route json")
```

## Parsing command output

The parsers take the JSON text or bytes that FRR prints and return typed
objects. Malformed JSON raises `frrmad.models.ParseError`. The LSA and
database parsers are strict about field types (numbers written as strings,
such as `"lsaAge": "3600"`, are accepted); the parsers in `state_parser` are
lenient and give a field its zero value when its JSON type is wrong.

```python
from frrmad.lsa_parser import parse_ospf_router_lsa
from frrmad.database_parser import parse_ospf_neighbors
from frrmad.state_parser import parse_rib

routers = parse_ospf_router_lsa(raw_router_json)
print(routers.router_id)
for area_id, area in routers.router_states.items():
    for lsa_id, lsa in area.lsa_entries.items():
        print(area_id, lsa_id, lsa.lsa_age, lsa.advertising_router)

neighbors = parse_ospf_neighbors(raw_neighbor_json)
for iface, entry in neighbors.neighbors.items():
    for neighbor in entry.neighbors:
        print(iface, neighbor.address, neighbor.state)

rib = parse_rib(raw_route_json)
for prefix, entry in rib.routes.items():
    print(prefix, [route.protocol for route in entry.routes])
```

## Parsing the running configuration

The output of `show running-config` can be parsed from a file or from any
iterable of lines. Metadata (hostname, FRR version), interfaces with their
addresses and OSPF area/passive settings, static routes, the `router ospf`
block (router id, redistribution, areas, virtual links), access lists and
route maps are read; other statements are ignored, and recognised but
malformed lines are logged and skipped. A file that cannot be opened raises
`OSError`.

```python
from frrmad.config_parser import parse_static_frr_config, parse_static_frr_config_lines

config = parse_static_frr_config("/etc/frr/frr.conf")
print(config.hostname, [iface.name for iface in config.interfaces])

config = parse_static_frr_config_lines(["hostname r1", "interface eth0", " ip address 10.0.0.1/24"])
```

## Fetching and collecting

`frrmad.fetcher` pairs each command with its parser, for example
`fetch_ospf_neighbors(executor)` or `fetch_rib(executor)`.
`fetch_static_frr_config()` runs `vtysh -c "show running-config"`, writes the
dump to `/tmp/frr-config.conf` and parses it, so `vtysh` must be on the
`PATH`. `collect_system_metrics()` returns the CPU count, the CPU load over
one second as a fraction (via `psutil`) and the memory use as a percentage
read from `/proc/meminfo`; a metric that cannot be read stays at zero.

A `Collector` runs every fetch in one pass and stores the results in its
`full_frr_data` (a `FullFRRData`), updating each part in place. A failing
fetch is logged and leaves its part unchanged, except the static
configuration, whose failure is raised from `collect()`.

```python
import logging
from frrmad.collector import init_aggregator, start_aggregator

collector = init_aggregator("/etc/frr/frr.conf", "/var/run/frr",
                            logging.getLogger("frrmad"))
collector.collect()                      # one cycle now

thread = start_aggregator(collector, 5.0)  # then every five seconds
...
thread.stop()
```

`start_aggregator` runs the first cycle one interval after it starts, in a
daemon thread; an exception raised by `collect()` ends that thread.
`Collector.read_config()` returns the text of the configuration file given
to it.

## What this package does not do

It is a library only: it installs no command-line program and has no daemon
mode. It collects and parses router state but does not analyse it for
anomalies, export it as metrics, or serve it to other programs over a socket.