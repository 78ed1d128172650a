"""Collection and parsing of FRRouting OSPF, interface, routing and configuration data."""

__version__ = "0.1.0"