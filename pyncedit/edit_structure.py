# Copyright 2021-2024 Nokia

import copy
from enum import Enum, auto
from typing import Mapping, Optional

from lxml import etree

from .constants import CONFIG, OPERATION
from .errors import *
from .errors import make_exception
from .identifier import Identifier
from .instance_path import InstancePath, PathArgument

__all__ = ("ModifyAction", "build_edit_structure", "to_wire_string", )

__doc__ = """Conversion of a path and an optional data overlay into the content of an
``edit-config`` request.
"""


class ModifyAction(Enum):
    """Value of the NETCONF ``operation`` attribute and of ``default-operation``."""
    merge   = auto()
    replace = auto()
    delete  = auto()
    none    = auto()
    create  = auto()
    remove  = auto()

    @property
    def wire(self) -> str:
        return self.name.lower()


def to_wire_string(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _add_predicates(element, predicates: Mapping[Identifier, object]):
    for key, value in predicates.items():
        etree.SubElement(element, key.clark).text = to_wire_string(value)


def _deepest_edit_element(arg: PathArgument, operation: Optional[ModifyAction], data):
    element = etree.Element(arg.name.clark)
    predicates = arg.predicates
    _add_predicates(element, predicates)
    if operation is not None:
        element.set(OPERATION, operation.wire)
    if data is not None:
        for child in data:
            if not isinstance(child.tag, str):
                # comments and processing instructions
                continue
            if Identifier.from_clark(child.tag) in predicates:
                continue
            element.append(copy.deepcopy(child))
    return element


def build_edit_structure(path: InstancePath, operation: Optional[ModifyAction] = None, data=None):
    """Create the ``config`` element of an ``edit-config`` request for a single edit.

    The element addressed by the last argument of ``path`` carries the
    ``operation`` attribute and the top-level children of ``data``.  Each
    ancestor carries only its key leaves and the element built for the level
    below it.  The tree is built from the deepest element upwards.

    :param path: Path to the edited element.
    :param operation: Operation attribute of the edited element, omitted when ``None``.
    :param data: Element whose children are the new content of the edited element,
                 omitted when ``None``.  It is not modified.
    :returns: ``config`` element in the NETCONF base namespace.
    :raises InvalidPathError: ``path`` is empty.
    """
    if path is None or len(path) == 0:
        raise make_exception(pyncedit_err_empty_path)

    reversed_path = iter(reversed(path))
    previous = _deepest_edit_element(next(reversed_path), operation, data)

    for arg in reversed_path:
        element = etree.Element(arg.name.clark)
        _add_predicates(element, arg.predicates)
        element.append(previous)
        previous = element

    config = etree.Element(CONFIG)
    config.append(previous)
    return config
