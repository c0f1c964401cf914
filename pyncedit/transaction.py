# Copyright 2021-2024 Nokia

import concurrent.futures
import itertools
import logging
from enum import Enum, auto

from lxml import etree

from .constants import COMMIT, DISCARD_CHANGES, EDIT_CONFIG
from .edit_config import (TargetDatastore, build_edit_config_request,
                          commit_request, discard_changes_request, target_node)
from .edit_structure import ModifyAction, build_edit_structure
from .errors import *
from .errors import make_exception
from .rpc import RpcResult, transform, translate_result

__all__ = ("LogicalDatastore", "TransactionState", "TransactionStatus", "WriteTransaction", )

__doc__ = """Write-only transaction against the configuration of a remote NETCONF device.
"""

_log = logging.getLogger(__name__)


class LogicalDatastore(Enum):
    configuration = auto()
    operational   = auto()


class TransactionState(Enum):
    open             = auto()
    commit_requested = auto()
    committed        = auto()
    failed           = auto()
    cancelled        = auto()


TransactionStatus = TransactionState


class WriteTransaction:
    """A single write transaction on a remote device.

    Every edit is sent as one ``edit-config`` request and the call returns only
    once the device replied, so edits reach the device in the order in which
    they were made.  :py:meth:`commit` and :py:meth:`submit` do not wait.

    The target datastore is ``candidate`` when the device supports it and
    ``running`` otherwise.  When the device supports ``rollback-on-error`` every
    ``edit-config`` asks for it.

    .. warning::
        A transaction is not thread safe.  Calls on one transaction must not
        overlap.

    :param device_id: Identification of the device used in messages and in
                      :py:attr:`identifier`.
    :param channel: :py:class:`pyncedit.rpc.RpcChannel` used to send requests.
    :param normalizer: :py:class:`pyncedit.normalizer.DataNormalizer` converting
                       paths and data.
    :param candidate_supported: Device supports the ``:candidate`` capability.
    :param rollback_on_error_supported: Device supports the ``:rollback-on-error`` capability.
    :param logger: Logger to use instead of the module logger.
    """
    _counter = itertools.count(1)

    def __init__(self, device_id, channel, normalizer, *, candidate_supported,
                 rollback_on_error_supported, logger=None):
        self._device_id = device_id
        self._channel = channel
        self._normalizer = normalizer
        self._target = TargetDatastore.from_capability(candidate_supported)
        self._rollback_on_error = bool(rollback_on_error_supported)
        self._log = logger or _log
        self._state = TransactionState.open
        self._identifier = f"{device_id}/tx-{next(WriteTransaction._counter)}"

    @property
    def identifier(self):
        return self._identifier

    @property
    def state(self) -> TransactionState:
        return self._state

    @property
    def target(self) -> TargetDatastore:
        return self._target

    @property
    def rollback_on_error(self) -> bool:
        return self._rollback_on_error

    @staticmethod
    def get_target_node(candidate_supported: bool):
        return target_node(TargetDatastore.from_capability(candidate_supported))

    def is_committed(self) -> bool:
        """``True`` once a commit was requested, whatever its outcome."""
        return self._state in (TransactionState.commit_requested,
                               TransactionState.committed,
                               TransactionState.failed)

    def put(self, store, path, data):
        """Replace the data at ``path`` with ``data``.

        When the device rejects the edit the changes made so far are discarded
        from the candidate datastore, earlier edits of this transaction
        included.  The transaction stays open; edits made afterwards are the
        only ones a later commit applies.

        :raises InvalidArgumentError: ``store`` is not the configuration datastore.
        :raises TransactionClosedError: The transaction is no longer open.
        :raises RpcFailureError: The device rejected the edit.
        :raises TransportFailureError: The edit could not be exchanged with the device.
        """
        self._check_store(store, "put")
        self._check_open("put")
        wire_path = self._normalizer.to_wire_path(path)
        wire_data = self._normalizer.to_wire_data(path, data)
        self._send_edit("put", path, build_edit_structure(wire_path, ModifyAction.replace, wire_data),
                        ModifyAction.none)

    def merge(self, store, path, data):
        """Merge ``data`` into the data at ``path``.  Raises as :py:meth:`put`."""
        self._check_store(store, "merge")
        self._check_open("merge")
        wire_path = self._normalizer.to_wire_path(path)
        wire_data = self._normalizer.to_wire_data(path, data)
        self._send_edit("merge", path, build_edit_structure(wire_path, None, wire_data), None)

    def delete(self, store, path):
        """Delete the data at ``path``.  Raises as :py:meth:`put`."""
        self._check_store(store, "delete")
        self._check_open("delete")
        wire_path = self._normalizer.to_wire_path(path)
        self._send_edit("delete", path, build_edit_structure(wire_path, ModifyAction.delete, None),
                        ModifyAction.none)

    def commit(self) -> concurrent.futures.Future:
        """Request the commit of the transaction.

        :returns: Future of :py:class:`pyncedit.rpc.RpcResult`, successful with
                  :py:attr:`TransactionStatus.committed` or failed with the
                  errors reported by the device.  The future raises
                  :py:class:`TransportFailureError` when the commit could not be
                  exchanged with the device.
        :raises TransactionClosedError: The transaction is no longer open.
        """
        self._check_open("commit")
        self._state = TransactionState.commit_requested
        self._log.debug("%s: Committing transaction %s", self._device_id, self._identifier)
        try:
            future = self._channel.invoke(COMMIT, commit_request())
        except Exception as e:
            future = concurrent.futures.Future()
            future.set_exception(e)
        return transform(future, self._commit_done, self._commit_error)

    def submit(self) -> concurrent.futures.Future:
        """Commit the transaction.

        :returns: Future completed with ``None`` once committed.  Any failure is
                  raised from the future as :py:class:`CommitFailedError`.
                  This includes a transaction that is no longer open.
        """
        try:
            committed = self.commit()
        except TransactionClosedError as e:
            committed = concurrent.futures.Future()
            committed.set_exception(e)
        return transform(committed, self._submit_done, self._submit_error)

    def cancel(self) -> bool:
        """Cancel the transaction, discarding the changes made so far.

        :returns: ``False`` when a commit was already requested or the changes
                  could not be discarded, ``True`` otherwise.
        """
        if self.is_committed():
            return False
        discarded = self._discard_changes()
        if discarded:
            self._state = TransactionState.cancelled
        return discarded

    def _check_store(self, store, operation):
        if store is not LogicalDatastore.configuration:
            raise make_exception(pyncedit_err_invalid_datastore, operation=operation, store=store)

    def _check_open(self, operation):
        if self._state is not TransactionState.open:
            raise make_exception(pyncedit_err_transaction_closed, operation=operation,
                                 transaction=self._identifier, state=self._state.name)

    def _send_edit(self, operation, path, structure, default_operation):
        request = build_edit_config_request(structure, default_operation, self._target, self._rollback_on_error)
        if self._log.isEnabledFor(logging.DEBUG):
            self._log.debug("%s: EDIT-CONFIG request for %s\n%s", self._device_id, path,
                            etree.tostring(request, pretty_print=True).decode("utf-8"))
        try:
            rpc_result = self._channel.invoke(EDIT_CONFIG, request).result()
        except concurrent.futures.CancelledError as e:
            raise make_exception(pyncedit_err_edit_interrupted, device=self._device_id,
                                 operation=operation, path=path) from e
        except Exception as e:
            self._log.warning("%s: Error during %s of %s, discarding changes",
                              self._device_id, operation, path, exc_info=True)
            self._discard_changes()
            raise make_exception(pyncedit_err_edit_transport, device=self._device_id,
                                 operation=operation, path=path, reason=e) from e

        result = translate_result(rpc_result)
        if not result.successful:
            self._log.warning("%s: Error during %s of %s, discarding changes, errors: %s",
                              self._device_id, operation, path, result.errors)
            self._discard_changes()
            raise make_exception(pyncedit_err_edit_failed, device=self._device_id,
                                 operation=operation, path=path,
                                 exc_kwargs={"path": path, "errors": result.errors})

    def _discard_changes(self):
        if self._target is not TargetDatastore.candidate:
            self._log.warning("%s: Changes in the running datastore cannot be discarded", self._device_id)
            return False
        try:
            result = translate_result(self._channel.invoke(DISCARD_CHANGES, discard_changes_request()).result())
        except Exception:
            self._log.warning("%s: Discard of changes failed", self._device_id, exc_info=True)
            return False
        if not result.successful:
            self._log.warning("%s: Discard of changes rejected, errors: %s", self._device_id, result.errors)
        return result.successful

    def _commit_done(self, rpc_result: RpcResult) -> RpcResult:
        result = translate_result(rpc_result, lambda output: TransactionStatus.committed)
        if result.successful:
            self._state = TransactionState.committed
            self._log.debug("%s: Transaction %s committed", self._device_id, self._identifier)
        else:
            self._state = TransactionState.failed
            self._log.warning("%s: Commit of transaction %s failed, errors: %s",
                              self._device_id, self._identifier, result.errors)
        return result

    def _commit_error(self, exc):
        self._state = TransactionState.failed
        self._log.warning("%s: Commit of transaction %s could not be sent", self._device_id,
                          self._identifier, exc_info=exc)
        failure = make_exception(pyncedit_err_commit_transport, device=self._device_id,
                                 transaction=self._identifier, reason=exc)
        failure.__cause__ = exc
        return failure

    def _submit_done(self, result: RpcResult):
        if not result.successful:
            raise make_exception(pyncedit_err_commit_failed, device=self._device_id,
                                 transaction=self._identifier,
                                 exc_kwargs={"errors": result.errors})
        return None

    def _submit_error(self, exc):
        return make_exception(pyncedit_err_submit_failed, transaction=self._identifier,
                              exc_kwargs={"transaction_id": self._identifier, "cause": exc})
