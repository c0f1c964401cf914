import types
from unittest import mock

import pytest

from pyncedit import management
from pyncedit.constants import CANDIDATE, EDIT_CONFIG, ERROR_OPTION
from pyncedit.edit_config import TargetDatastore
from pyncedit.management import LogicalDatastore, RemoteDeviceId, connect

from conftest import NS, NS_MAP

RPC_REPLY_OK = """<rpc-reply xmlns="urn:ietf:params:xml:ns:netconf:base:1.0" message-id="1"><ok/></rpc-reply>"""


@pytest.fixture
def nc():
    nc = mock.MagicMock()
    nc.connected = True
    nc.server_capabilities = {":candidate", ":rollback-on-error"}
    nc.dispatch.return_value = types.SimpleNamespace(xml=RPC_REPLY_OK, ok=True, errors=[])
    return nc


@pytest.fixture
def connect_ssh(nc):
    with mock.patch.object(management.manager, "connect_ssh", return_value=nc) as connect_ssh:
        yield connect_ssh


def test_connect_passes_session_parameters(connect_ssh):
    connection = connect(host="192.0.2.1", username="admin", password="secret", timeout=60,
                         hostkey_verify=False)

    connect_ssh.assert_called_once_with(host="192.0.2.1", port=830, username="admin",
                                        password="secret", manager_params={"timeout": 60},
                                        hostkey_verify=False)
    assert connection.device_id == RemoteDeviceId("192.0.2.1", 830)
    assert str(connection.device_id) == "192.0.2.1:830"
    connection.disconnect()


def test_connect_failure_raises_runtime_error():
    with mock.patch.object(management.manager, "connect_ssh", side_effect=OSError("refused")):
        with pytest.raises(RuntimeError, match="Cannot connect to 192.0.2.1:830 - refused"):
            connect(host="192.0.2.1", username="admin")


def test_capabilities_select_target(connect_ssh, nc):
    nc.server_capabilities = set()
    connection = connect(host="192.0.2.1", username="admin")

    tx = connection.new_write_transaction()

    assert connection.candidate_supported is False
    assert connection.rollback_on_error_supported is False
    assert tx.target is TargetDatastore.running
    assert tx.rollback_on_error is False
    connection.disconnect()


def test_transaction_over_connection(connect_ssh, nc):
    connection = connect(host="192.0.2.1", username="admin", ns_map=NS_MAP)
    tx = connection.new_write_transaction()

    tx.merge(LogicalDatastore.configuration, '/ex:system/user[name="fred"]', {"type": "admin"})
    tx.submit().result(timeout=5)

    (edit, ), _ = nc.dispatch.call_args_list[0]
    (commit, ), _ = nc.dispatch.call_args_list[1]
    assert edit.tag == EDIT_CONFIG
    assert edit[0][0].tag == CANDIDATE
    assert edit[1].tag == ERROR_OPTION
    assert edit.find(f".//{{{NS}}}type").text == "admin"
    assert commit.tag.endswith("}commit")
    assert tx.identifier.startswith("192.0.2.1:830/tx-")
    connection.disconnect()


def test_disconnect_closes_session(connect_ssh, nc):
    connection = connect(host="192.0.2.1", username="admin")
    connection.disconnect()
    nc.close_session.assert_called_once_with()


def test_disconnect_of_closed_session(connect_ssh, nc):
    connection = connect(host="192.0.2.1", username="admin")
    nc.connected = False
    connection.disconnect()
    nc.close_session.assert_not_called()


def test_ns_map_is_read_only(connect_ssh):
    connection = connect(host="192.0.2.1", username="admin", ns_map=NS_MAP)
    assert dict(connection.ns_map) == NS_MAP
    with pytest.raises(TypeError):
        connection.ns_map["other"] = "urn:other"
    connection.disconnect()
