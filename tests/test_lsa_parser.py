import json

import pytest

from frrmad.lsa_parser import (
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
from frrmad.models import ParseError


def _dump(obj):
    return json.dumps(obj).encode()


# --- cases carried over from the source's tests ---------------------------


def test_router_lsa_basic():
    data = """{
        "routerId": "1.1.1.1",
        "Router Link States": {
            "0.0.0.0": {
                "1.1.1.1": {
                    "lsaAge": "3600",
                    "lsaType": "Router",
                    "linkStateId": "1.1.1.1",
                    "advertisingRouter": "1.1.1.1"
                }
            }
        }
    }"""
    result = parse_ospf_router_lsa(data.encode())
    assert result.router_id == "1.1.1.1"
    lsa = result.router_states["0.0.0.0"].lsa_entries["1.1.1.1"]
    assert lsa.lsa_age == 3600
    assert lsa.lsa_type == "Router"
    assert lsa.link_state_id == "1.1.1.1"
    assert lsa.advertising_router == "1.1.1.1"


def test_router_lsa_empty_input():
    result = parse_ospf_router_lsa(b"{}")
    assert result.router_id == ""
    assert result.router_states == {}


def test_router_lsa_invalid_json():
    with pytest.raises(ParseError):
        parse_ospf_router_lsa(b"{invalid}")


def test_network_lsa_basic():
    data = {
        "routerId": "1.1.1.1",
        "Net Link States": {
            "0.0.0.0": {
                "2.2.2.2": {
                    "lsaAge": "1800",
                    "lsaType": "Network",
                    "linkStateId": "2.2.2.2",
                    "advertisingRouter": "1.1.1.1",
                }
            }
        },
    }
    result = parse_ospf_network_lsa(_dump(data))
    assert result.router_id == "1.1.1.1"
    lsa = result.net_states["0.0.0.0"].lsa_entries["2.2.2.2"]
    assert lsa.lsa_age == 1800
    assert lsa.lsa_type == "Network"
    assert lsa.link_state_id == "2.2.2.2"
    assert lsa.advertising_router == "1.1.1.1"


def test_summary_lsa_basic():
    data = {
        "routerId": "1.1.1.1",
        "Summary Link States": {
            "0.0.0.0": {
                "3.3.3.3": {
                    "lsaAge": "1200",
                    "lsaType": "Summary",
                    "linkStateId": "3.3.3.3",
                    "advertisingRouter": "1.1.1.1",
                }
            }
        },
    }
    result = parse_ospf_summary_lsa(_dump(data))
    assert result.router_id == "1.1.1.1"
    lsa = result.summary_states["0.0.0.0"].lsa_entries["3.3.3.3"]
    assert lsa.lsa_age == 1200
    assert lsa.lsa_type == "Summary"
    assert lsa.link_state_id == "3.3.3.3"
    assert lsa.advertising_router == "1.1.1.1"


def test_asbr_summary_lsa_basic():
    data = {
        "routerId": "1.1.1.1",
        "ASBR-Summary Link States": {
            "0.0.0.0": {
                "4.4.4.4": {
                    "lsaAge": "1500",
                    "lsaType": "ASBR-Summary",
                    "linkStateId": "4.4.4.4",
                    "advertisingRouter": "1.1.1.1",
                }
            }
        },
    }
    result = parse_ospf_asbr_summary_lsa(_dump(data))
    assert result.router_id == "1.1.1.1"
    lsa = result.asbr_summary_states["0.0.0.0"].lsa_entries["4.4.4.4"]
    assert lsa.lsa_age == 1500
    assert lsa.lsa_type == "ASBR-Summary"
    assert lsa.link_state_id == "4.4.4.4"
    assert lsa.advertising_router == "1.1.1.1"


def test_external_lsa_basic():
    data = {
        "routerId": "1.1.1.1",
        "AS External Link States": {
            "5.5.5.5": {
                "lsaAge": "2000",
                "lsaType": "AS-External",
                "linkStateId": "5.5.5.5",
                "advertisingRouter": "1.1.1.1",
            }
        },
    }
    result = parse_ospf_external_lsa(_dump(data))
    assert result.router_id == "1.1.1.1"
    lsa = result.as_external_link_states["5.5.5.5"]
    assert lsa.lsa_age == 2000
    assert lsa.lsa_type == "AS-External"
    assert lsa.link_state_id == "5.5.5.5"
    assert lsa.advertising_router == "1.1.1.1"


NSSA_SELF = {
    "routerId": "1.1.1.1",
    "NSSA-external Link States": {
        "0.0.0.1": {
            "6.6.6.6": {
                "lsaAge": "2500",
                "lsaType": "NSSA-External",
                "linkStateId": "6.6.6.6",
                "advertisingRouter": "1.1.1.1",
            }
        }
    },
}


@pytest.mark.parametrize("case", ["basic", "all-variant input"])
def test_nssa_external_lsa_basic(case):
    result = parse_ospf_nssa_external_lsa(_dump(NSSA_SELF))
    assert result.router_id == "1.1.1.1"
    lsa = result.nssa_external_link_states["0.0.0.1"].data["6.6.6.6"]
    assert lsa.lsa_age == 2500
    assert lsa.lsa_type == "NSSA-External"
    assert lsa.link_state_id == "6.6.6.6"
    assert lsa.advertising_router == "1.1.1.1"


# --- further behaviour ----------------------------------------------------


def test_router_lsa_with_router_links():
    data = {
        "routerId": "1.1.1.1",
        "Router Link States": {
            "0.0.0.0": {
                "1.1.1.1": {
                    "asbr": True,
                    "numOfLinks": 1,
                    "routerLinks": {
                        "link0": {
                            "linkType": "a Transit Network",
                            "designatedRouterAddress": "10.0.0.2",
                            "tos0Metric": 10,
                        }
                    },
                }
            }
        },
    }
    lsa = parse_ospf_router_lsa(_dump(data)).router_states["0.0.0.0"].lsa_entries["1.1.1.1"]
    assert lsa.asbr is True
    assert lsa.num_of_links == 1
    link = lsa.router_links["link0"]
    assert link.link_type == "a Transit Network"
    assert link.designated_router_address == "10.0.0.2"
    assert link.tos0_metric == 10


def test_router_lsa_bad_area_structure():
    with pytest.raises(ParseError):
        parse_ospf_router_lsa(_dump({"Router Link States": {"0.0.0.0": [1, 2]}}))


def test_invalid_field_value_raises():
    data = {"AS External Link States": {"5.5.5.5": {"lsaAge": "abc"}}}
    with pytest.raises(ParseError):
        parse_ospf_external_lsa(_dump(data))


def test_wrong_string_type_raises():
    data = {"Net Link States": {"0.0.0.0": {"2.2.2.2": {"lsaType": 5}}}}
    with pytest.raises(ParseError):
        parse_ospf_network_lsa(_dump(data))


def test_network_lsa_attached_routers():
    data = {
        "Net Link States": {
            "0.0.0.0": {
                "10.0.0.1": {
                    "networkMask": 24,
                    "attchedRouters": {
                        "1.1.1.1": {"attachedRouterId": "1.1.1.1"},
                        "2.2.2.2": {"attachedRouterId": "2.2.2.2"},
                        "broken": {"other": "x"},
                    },
                }
            }
        }
    }
    lsa = parse_ospf_network_lsa(_dump(data)).net_states["0.0.0.0"].lsa_entries["10.0.0.1"]
    assert lsa.network_mask == 24
    assert lsa.attached_routers == {"1.1.1.1": "1.1.1.1", "2.2.2.2": "2.2.2.2"}


def test_summary_lsa_includes_net_states():
    data = {
        "routerId": "9.9.9.9",
        "Net Link States": {"0.0.0.0": {"2.2.2.2": {"lsaAge": 1}}},
        "Summary Link States": {"0.0.0.0": {"3.3.3.3": {"tos0Metric": 20}}},
    }
    result = parse_ospf_summary_lsa(_dump(data))
    assert result.net_states["0.0.0.0"].lsa_entries["2.2.2.2"].lsa_age == 1
    assert result.summary_states["0.0.0.0"].lsa_entries["3.3.3.3"].tos0_metric == 20


def test_external_lsa_fields():
    data = {
        "AS External Link STATES": {},
        "AS External Link States": {
            "192.168.1.0": {
                "networkMask": 24,
                "metricType": "E2",
                "metric": "20",
                "forwardAddress": "0.0.0.0",
                "externalRouteTag": 0,
            }
        },
    }
    lsa = parse_ospf_external_lsa(_dump(data)).as_external_link_states["192.168.1.0"]
    assert lsa.network_mask == 24
    assert lsa.metric_type == "E2"
    assert lsa.metric == 20
    assert lsa.forward_address == "0.0.0.0"


def test_nssa_external_skips_non_objects():
    data = {
        "NSSA-external Link States": {
            "0.0.0.1": {"6.6.6.6": {"nssaForwardAddress": "10.0.0.1"}, "bad": 3},
            "0.0.0.2": "junk",
        }
    }
    result = parse_ospf_nssa_external_lsa(_dump(data))
    assert result.router_id == ""
    assert list(result.nssa_external_link_states) == ["0.0.0.1"]
    area = result.nssa_external_link_states["0.0.0.1"]
    assert list(area.data) == ["6.6.6.6"]
    assert area.data["6.6.6.6"].nssa_forward_address == "10.0.0.1"


def test_router_lsa_all_keyed_by_advertising_router():
    data = {
        "routerId": "1.1.1.1",
        "routerLinkStates": {
            "1.1.1.1": {
                "0.0.0.0": [
                    {"lsaAge": 10, "linkStateId": "2.2.2.2", "advertisingRouter": "2.2.2.2"},
                    {"lsaAge": 20, "advertisingRouter": "3.3.3.3"},
                ]
            }
        },
    }
    result = parse_ospf_router_lsa_all(_dump(data))
    assert result.router_id == "1.1.1.1"
    entries = result.router_states["0.0.0.0"].lsa_entries
    assert set(entries) == {"2.2.2.2", "3.3.3.3"}
    assert entries["3.3.3.3"].lsa_age == 20


def test_router_lsa_all_areas_of_one_router_share_entries():
    data = {
        "routerLinkStates": {
            "1.1.1.1": {
                "0.0.0.0": [{"advertisingRouter": "2.2.2.2"}],
                "0.0.0.1": [{"advertisingRouter": "3.3.3.3"}],
            }
        }
    }
    states = parse_ospf_router_lsa_all(_dump(data)).router_states
    assert set(states["0.0.0.0"].lsa_entries) == {"2.2.2.2", "3.3.3.3"}
    assert set(states["0.0.0.1"].lsa_entries) == {"2.2.2.2", "3.3.3.3"}


def test_router_lsa_all_missing_advertising_router():
    data = {"routerLinkStates": {"1.1.1.1": {"0.0.0.0": [{"lsaAge": 1}]}}}
    with pytest.raises(ParseError):
        parse_ospf_router_lsa_all(_dump(data))


def test_network_lsa_all():
    data = {
        "routerId": "1.1.1.1",
        "networkLinkStates": {
            "1.1.1.1": {
                "0.0.0.1": [
                    {
                        "linkStateId": "10.0.0.1",
                        "lsaAge": 5,
                        "networkMask": 24,
                        "attchedRouters": {"a": {"attachedRouterId": "1.1.1.1"}},
                    }
                ]
            }
        },
    }
    result = parse_ospf_network_lsa_all(_dump(data))
    lsa = result.net_states["0.0.0.1"].lsa_entries["10.0.0.1"]
    assert lsa.lsa_age == 5
    assert lsa.network_mask == 24
    assert lsa.attached_routers == {"a": "1.1.1.1"}


def test_network_lsa_all_rejects_non_list_area():
    data = {"networkLinkStates": {"1.1.1.1": {"0.0.0.1": {"x": 1}}}}
    with pytest.raises(ParseError):
        parse_ospf_network_lsa_all(_dump(data))


def test_summary_lsa_all():
    data = {
        "routerId": "1.1.1.1",
        "summaryLinkStates": {
            "1.1.1.1": {"0.0.0.0": [{"linkStateId": "10.1.0.0", "networkMask": 16}]}
        },
    }
    result = parse_ospf_summary_lsa_all(_dump(data))
    assert result.net_states == {}
    lsa = result.summary_states["0.0.0.0"].lsa_entries["10.1.0.0"]
    assert lsa.network_mask == 16
    assert lsa.link_state_id == "10.1.0.0"


def test_summary_lsa_all_files_under_last_area():
    data = {
        "summaryLinkStates": {
            "1.1.1.1": {
                "0.0.0.0": [{"linkStateId": "10.1.0.0"}],
                "0.0.0.2": [{"linkStateId": "10.2.0.0"}],
            }
        }
    }
    states = parse_ospf_summary_lsa_all(_dump(data)).summary_states
    assert list(states) == ["0.0.0.2"]
    assert set(states["0.0.0.2"].lsa_entries) == {"10.1.0.0", "10.2.0.0"}


def test_summary_lsa_all_rejects_attached_routers():
    data = {
        "summaryLinkStates": {
            "1.1.1.1": {"0.0.0.0": [{"linkStateId": "10.1.0.0", "attchedRouters": {}}]}
        }
    }
    with pytest.raises(ParseError):
        parse_ospf_summary_lsa_all(_dump(data))


def test_nssa_external_all():
    data = {
        "routerId": "1.1.1.1",
        "nssaExternalLinkStates": {
            "1.1.1.1": {
                "0.0.0.1": [
                    {"linkStateId": "6.6.6.6", "lsaAge": "2500", "nssaForwardAddress": "10.0.0.1"}
                ]
            },
            "junk": 5,
        },
    }
    result = parse_ospf_nssa_external_all(_dump(data))
    assert result.router_id == "1.1.1.1"
    assert list(result.nssa_external_all_link_states) == ["0.0.0.1"]
    lsa = result.nssa_external_all_link_states["0.0.0.1"].data["6.6.6.6"]
    assert lsa.lsa_age == 2500
    assert lsa.nssa_forward_address == "10.0.0.1"


def test_nssa_external_all_missing_link_state_id():
    data = {"nssaExternalLinkStates": {"1.1.1.1": {"0.0.0.1": [{"lsaAge": 1}]}}}
    with pytest.raises(ParseError):
        parse_ospf_nssa_external_all(_dump(data))


def test_top_level_array_rejected():
    with pytest.raises(ParseError):
        parse_ospf_asbr_summary_lsa(b"[1, 2]")


def test_null_document_gives_empty_result():
    result = parse_ospf_network_lsa_all(b"null")
    assert result.router_id == ""
    assert result.net_states == {}


def test_accepts_text_input():
    result = parse_ospf_router_lsa('{"routerId": "7.7.7.7"}')
    assert result.router_id == "7.7.7.7"