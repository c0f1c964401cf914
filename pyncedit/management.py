# Copyright 2021-2024 Nokia

import logging
import types
from typing import NamedTuple

from ncclient import manager

from .constants import CANDIDATE_CAPABILITY, ROLLBACK_ON_ERROR_CAPABILITY
from .errors import *
from .errors import make_exception
from .normalizer import XmlDataNormalizer
from .rpc import NcclientRpcChannel
from .transaction import LogicalDatastore, WriteTransaction

__all__ = ("connect", "Connection", "RemoteDeviceId", "LogicalDatastore", )

__doc__ = """This module contains the entry point for writing configuration to a
NETCONF device through write transactions.
"""

_log = logging.getLogger(__name__)


def connect(*, host, port=830, username, password=None, timeout=300, hostkey_verify=True,
            ns_map=None, logger=None):
    """Create a :class:`.Connection` object.

    :param host: Hostname, Fully Qualified Domain Name (FQDN) or IP address of the device.
    :type host: str
    :param port: TCP port on the device to connect to. Default 830.
    :type port: int, optional
    :param username: User name.
    :type username: str
    :param password: User password.  If the password is not provided the systems SSH key
                     is used.
    :type password: str, optional
    :param timeout: Timeout of the transport protocol, in seconds. Default 300.
    :type timeout: int, optional
    :param hostkey_verify: Enables hostkey verification using the SSH known_hosts file. Default True.
    :type hostkey_verify: bool, optional
    :param ns_map: Mapping of YANG module name to XML namespace used to resolve
                   json-instance-paths.
    :type ns_map: dict, optional
    :param logger: Logger used by the connection and its transactions.
    :type logger: logging.Logger, optional
    :return: Connection object for the device.
    :rtype: :py:class:`Connection`
    :raises RuntimeError: Error occurred during creation of connection

    .. warning::

       ``hostkey_verify`` should be set to ``True`` in a live network environment.

    .. code-block:: python
       :caption: Example
       :name: pyncedit-management-connect-example-usage

       from pyncedit.management import connect, LogicalDatastore

       connection_object = connect(host="192.168.1.1",
                                   username="myusername",
                                   password="mypassword",
                                   ns_map={"example-system": "urn:example:system"})
       tx = connection_object.new_write_transaction()
       tx.merge(LogicalDatastore.configuration,
                '/example-system:system/user[name="fred"]',
                {"type": "admin"})
       tx.submit().result()
    """
    return Connection(host=host, port=port, username=username, password=password,
                      manager_params={'timeout': timeout}, hostkey_verify=hostkey_verify,
                      ns_map=ns_map, logger=logger)


class RemoteDeviceId(NamedTuple):
    host: str
    port: int

    def __str__(self):
        return f"{self.host}:{self.port}"


class Connection:
    """An object representing a NETCONF session to a device.

    .. warning::
        You **should not** create this class directly. Please use :func:`~pyncedit.management.connect`
        instead.

    :ivar device_id: host and port of the device
    :vartype device_id: .RemoteDeviceId
    """

    def __init__(self, *args, host, port, ns_map=None, logger=None, **kwargs):
        self.device_id = RemoteDeviceId(host, port)
        self._log = logger or _log
        try:
            self._nc = manager.connect_ssh(*args, host=host, port=port, **kwargs)
        except Exception as e:
            raise make_exception(pyncedit_err_could_not_create_conn, host=host, port=port, reason=e) from None

        self._ns_map = types.MappingProxyType(dict(ns_map or {}))
        self._channel = NcclientRpcChannel(self._nc)
        self.candidate_supported = CANDIDATE_CAPABILITY in self._nc.server_capabilities
        self.rollback_on_error_supported = ROLLBACK_ON_ERROR_CAPABILITY in self._nc.server_capabilities
        self._log.debug("%s: Connected, candidate: %s, rollback-on-error: %s", self.device_id,
                        self.candidate_supported, self.rollback_on_error_supported)

    @property
    def ns_map(self):
        return self._ns_map

    def new_write_transaction(self, normalizer=None):
        """Create a :py:class:`pyncedit.transaction.WriteTransaction` on this connection.

        :param normalizer: Normalizer of paths and data.  Default is a
                           :py:class:`pyncedit.normalizer.XmlDataNormalizer`
                           using the ``ns_map`` of the connection.
        """
        return WriteTransaction(self.device_id, self._channel,
                                normalizer or XmlDataNormalizer(self._ns_map),
                                candidate_supported=self.candidate_supported,
                                rollback_on_error_supported=self.rollback_on_error_supported,
                                logger=self._log)

    def disconnect(self):
        """Disconnect the current transport session. Requests that are already
        queued are sent before the session is closed.
        """
        self._channel.close()
        if self._nc.connected:
            self._nc.close_session()
