# Copyright 2021-2024 Nokia

from abc import ABC, abstractmethod
from typing import Mapping, Optional

from lxml import etree
from ncclient.xml_ import to_ele

from .edit_structure import to_wire_string
from .errors import *
from .errors import make_exception
from .identifier import Identifier
from .instance_path import InstancePath

__all__ = ("DataNormalizer", "XmlDataNormalizer", )


class DataNormalizer(ABC):
    """Converts user supplied paths and data into their wire representation."""

    @abstractmethod
    def to_wire_path(self, path) -> InstancePath:
        pass

    @abstractmethod
    def to_wire_data(self, path, data):
        """Return an element whose children are the content of the element at
        ``path``, or ``None`` when there is no data."""
        pass


class XmlDataNormalizer(DataNormalizer):
    """Normalizer without schema knowledge.

    Paths are :py:class:`InstancePath` objects or json-instance-path strings.
    Data is ``None``, an lxml element, an XML fragment string or a ``dict``.
    Names in a ``dict`` are placed in the namespace of the last element of the
    path unless given as ``{namespace}name``.
    """

    def __init__(self, ns_map: Optional[Mapping[str, str]] = None):
        self._ns_map = dict(ns_map or {})

    def to_wire_path(self, path) -> InstancePath:
        if isinstance(path, InstancePath):
            return path
        if isinstance(path, str):
            return InstancePath.from_string(path, self._ns_map)
        raise make_exception(pyncedit_err_path_unsupported_type, type=type(path).__name__)

    def to_wire_data(self, path, data):
        if data is None:
            return None
        if etree.iselement(data):
            return data
        if isinstance(data, str):
            try:
                return to_ele(f"<dummy-root>{data}</dummy-root>")
            except etree.XMLSyntaxError as e:
                raise make_exception(pyncedit_err_xml_decode, path=path, reason=e) from None
        if isinstance(data, dict):
            namespace = self.to_wire_path(path).last.name.namespace
            root = etree.Element("dummy-root")
            self._dict_to_xml(root, data, namespace, path)
            return root
        raise make_exception(pyncedit_err_unsupported_data_type, type=type(data).__name__, path=path)

    def _dict_to_xml(self, parent, data, namespace, path):
        for key, value in data.items():
            identifier = self._key_identifier(key, namespace, path)
            identifier.check_valid()
            values = value if isinstance(value, (list, tuple)) else [value]
            for v in values:
                element = etree.SubElement(parent, identifier.clark)
                if isinstance(v, dict):
                    self._dict_to_xml(element, v, identifier.namespace, path)
                elif v is not None:
                    element.text = to_wire_string(v)

    def _key_identifier(self, key, namespace, path):
        """Name of a ``dict`` key given as ``name``, ``prefix:name`` or ``{namespace}name``."""
        if key.startswith("{"):
            try:
                return Identifier.from_clark(key)
            except ValueError:
                raise make_exception(pyncedit_err_invalid_identifier, identifier=key) from None
        prefix, colon, name = key.rpartition(":")
        if not colon:
            return Identifier(namespace, key)
        if prefix not in self._ns_map:
            raise make_exception(pyncedit_err_path_unknown_module, module=prefix, path=path)
        return Identifier(self._ns_map[prefix], name)
