# Copyright 2021-2024 Nokia

from enum import Enum, auto
from typing import Optional

from lxml import etree

from .constants import (CANDIDATE, COMMIT, DEFAULT_OPERATION, DISCARD_CHANGES,
                        EDIT_CONFIG, ERROR_OPTION, ROLLBACK_ON_ERROR, RUNNING,
                        TARGET)
from .edit_structure import ModifyAction

__all__ = ("TargetDatastore", "target_node", "build_edit_config_request",
           "commit_request", "discard_changes_request", )


class TargetDatastore(Enum):
    candidate = auto()
    running   = auto()

    @staticmethod
    def from_capability(candidate_supported: bool):
        return TargetDatastore.candidate if candidate_supported else TargetDatastore.running


def target_node(target: TargetDatastore):
    """Empty ``candidate`` or ``running`` element."""
    if target is TargetDatastore.candidate:
        return etree.Element(CANDIDATE)
    return etree.Element(RUNNING)


def build_edit_config_request(edit_tree, default_operation: Optional[ModifyAction],
                              target: TargetDatastore, rollback_on_error: bool):
    """Wrap an edit structure into an ``edit-config`` request.

    The children are, in this order: ``target``, ``default-operation`` (only when
    ``default_operation`` is given), ``error-option`` (only when
    ``rollback_on_error``) and ``edit_tree``.
    """
    request = etree.Element(EDIT_CONFIG)
    etree.SubElement(request, TARGET).append(target_node(target))
    if default_operation is not None:
        etree.SubElement(request, DEFAULT_OPERATION).text = default_operation.wire
    if rollback_on_error:
        etree.SubElement(request, ERROR_OPTION).text = ROLLBACK_ON_ERROR
    request.append(edit_tree)
    return request


def commit_request():
    return etree.Element(COMMIT)


def discard_changes_request():
    return etree.Element(DISCARD_CHANGES)
