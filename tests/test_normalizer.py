import pytest
from lxml import etree

from pyncedit.exceptions import InvalidArgumentError, InvalidPathError
from pyncedit.identifier import Identifier
from pyncedit.instance_path import InstancePath, PathArgument
from pyncedit.transaction import LogicalDatastore

from conftest import NS

OTHER_NS = "urn:example:other"


def q(name, namespace=NS):
    return f"{{{namespace}}}{name}"


def test_path_string_is_parsed(normalizer):
    path = normalizer.to_wire_path("/ex:system/ntp")
    assert path == InstancePath([PathArgument(Identifier(NS, "system")), PathArgument(Identifier(NS, "ntp"))])


def test_instance_path_is_used_as_is(normalizer):
    path = InstancePath([PathArgument(Identifier(NS, "system"))])
    assert normalizer.to_wire_path(path) is path


def test_unsupported_path_type(normalizer):
    with pytest.raises(InvalidPathError, match="Unsupported path type int"):
        normalizer.to_wire_path(42)


def test_none_data(normalizer):
    assert normalizer.to_wire_data("/ex:system", None) is None


def test_element_data_is_used_as_is(normalizer):
    data = etree.Element("wrapper")
    assert normalizer.to_wire_data("/ex:system", data) is data


def test_xml_fragment(normalizer):
    data = normalizer.to_wire_data("/ex:system", f'<a xmlns="{NS}">1</a><b xmlns="{NS}"/>')
    assert [child.tag for child in data] == [q("a"), q("b")]


def test_malformed_xml_fragment(normalizer):
    with pytest.raises(InvalidArgumentError, match="Cannot parse XML"):
        normalizer.to_wire_data("/ex:system", "<a>")


def test_dict_data(normalizer):
    data = normalizer.to_wire_data("/ex:system", {
        "hostname": "pe1",
        "enabled": True,
        "ntp": {"server": ["192.0.2.1", "192.0.2.2"]},
        "location": None,
        f"{{{OTHER_NS}}}extension": 7,
    })

    assert [(child.tag, child.text) for child in data] == [
        (q("hostname"), "pe1"),
        (q("enabled"), "true"),
        (q("ntp"), None),
        (q("location"), None),
        (q("extension", OTHER_NS), "7"),
    ]
    assert [(child.tag, child.text) for child in data[2]] == [
        (q("server"), "192.0.2.1"),
        (q("server"), "192.0.2.2"),
    ]


def test_dict_data_with_invalid_name(normalizer):
    with pytest.raises(InvalidArgumentError, match="Invalid identifier"):
        normalizer.to_wire_data("/ex:system", {"1st": "x"})


def test_unsupported_data_type(normalizer):
    with pytest.raises(InvalidArgumentError, match="Unsupported data type set"):
        normalizer.to_wire_data("/ex:system", {"a"})


def test_dict_data_with_prefixed_names(normalizer):
    data = normalizer.to_wire_data("/ex:system", {"ex:hostname": "pe1", "ex:ntp": {"server": "192.0.2.1"}})

    assert [child.tag for child in data] == [q("hostname"), q("ntp")]
    assert data[1][0].tag == q("server")


def test_dict_data_with_unknown_prefix(normalizer):
    with pytest.raises(InvalidPathError, match="Unknown module 'other'"):
        normalizer.to_wire_data("/ex:system", {"other:hostname": "pe1"})


def test_dict_data_with_invalid_clark_name(normalizer):
    with pytest.raises(InvalidArgumentError, match="Invalid identifier"):
        normalizer.to_wire_data("/ex:system", {f"{{{NS}}}ex:hostname": "pe1"})


def test_put_with_unknown_prefix_is_rejected_without_remote_call(make_transaction, channel):
    tx = make_transaction()

    with pytest.raises(InvalidArgumentError):
        tx.put(LogicalDatastore.configuration, "/ex:system", {"other:hostname": "pe1"})

    assert channel.calls == []
