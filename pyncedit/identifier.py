# Copyright 2021 Nokia

import re

from lxml import etree

from .errors import *
from .errors import make_exception


class Identifier:
    """Class to hold namespace-name pair for single XML element"""
    __slots__ = "_name", "_namespace"

    def __init__(self, namespace, name: str):
        assert ':' not in name
        self._name = name
        self._namespace = namespace or None

    @staticmethod
    def builtin(name: str):
        return Identifier(None, name)

    def is_builtin(self):
        return self._namespace is None

    @staticmethod
    def from_clark(tag):
        """Create identifier from lxml tag in ``{namespace}name`` notation."""
        qname = etree.QName(tag)
        return Identifier(qname.namespace, qname.localname)

    def __hash__(self):
        return hash((self.namespace, self.name))

    def __str__(self):
        return self.clark

    def __repr__(self):
        if self.is_builtin():
            return f"""Identifier.builtin({self.name!r})"""
        return f"""Identifier({self.namespace!r}, {self.name!r})"""

    def __eq__(self, other):
        if type(other) is Identifier:
            return self._name == other._name and self._namespace == other._namespace
        elif type(other) == str:
            return self.clark == other
        return False

    def __ne__(self, other):
        return not(self == other)

    _IDENTIFIER_RE = re.compile(r'[a-zA-Z_][a-zA-Z0-9_\-.]*')
    def is_valid(self) -> bool:
        return bool(Identifier._IDENTIFIER_RE.fullmatch(self._name))

    def check_valid(self):
        if not self.is_valid():
            raise make_exception(pyncedit_err_invalid_identifier, identifier=self._name)
        return self

    @property
    def namespace(self):
        return self._namespace

    @property
    def name(self):
        return self._name

    @property
    def clark(self):
        return f"{{{self.namespace}}}{self.name}" if self.namespace else self.name
