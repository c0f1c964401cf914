# Copyright 2021-2024 Nokia

import concurrent.futures
from abc import ABC, abstractmethod
from typing import Any, NamedTuple, Optional, Tuple

from ncclient.operations.rpc import RPCError as nc_RPCError
from ncclient.xml_ import to_ele

__all__ = ("RemoteError", "RpcResult", "translate_result", "transform",
           "RpcChannel", "NcclientRpcChannel", )

__doc__ = """Boundary to the remote device: results of remote calls, the errors they
carry and the channel that sends requests.
"""


class RemoteError(NamedTuple):
    """Single ``rpc-error`` reported by the remote device."""
    kind: Optional[str]
    tag: Optional[str]
    message: Optional[str]
    application_tag: Optional[str]
    info: Optional[str]
    cause: Optional[BaseException]
    severity: Optional[str] = None
    path: Optional[str] = None

    @staticmethod
    def from_rpc_error(error: nc_RPCError):
        return RemoteError(
            kind            = error.type,
            tag             = error.tag,
            message         = error.message,
            application_tag = error.app_tag,
            info            = error.info,
            cause           = error,
            severity        = error.severity,
            path            = error.path,
        )


class RpcResult(NamedTuple):
    successful: bool
    result: Any
    errors: Tuple[RemoteError, ...] = ()

    @staticmethod
    def success(value=None):
        return RpcResult(True, value, ())

    @staticmethod
    def failed(errors=()):
        return RpcResult(False, None, tuple(errors))


def translate_result(result: RpcResult, extract=None) -> RpcResult:
    """Map the result of a remote call to the result of an operation.

    On success the payload, or ``extract(payload)``, becomes the value.  On
    failure every error is copied field for field and in the original order,
    whether or not the device reported any.
    """
    if result.successful:
        return RpcResult.success(extract(result.result) if extract else result.result)
    return RpcResult.failed(RemoteError._make(error) for error in result.errors)


def transform(future: concurrent.futures.Future, fn, on_error=None) -> concurrent.futures.Future:
    """Return a future completed with ``fn(result)`` once ``future`` completes.

    An exception raised by ``future`` or by ``fn`` is set on the returned future,
    replaced by ``on_error(exception)`` when ``on_error`` is given.  Nothing here
    blocks: ``fn`` runs in the thread that completes ``future``.
    """
    target = concurrent.futures.Future()

    def _done(source):
        if source.cancelled():
            target.cancel()
            return
        try:
            value = fn(source.result())
        except Exception as e:
            target.set_exception(on_error(e) if on_error else e)
        else:
            target.set_result(value)

    future.add_done_callback(_done)
    return target


class RpcChannel(ABC):
    """Sends a request to the remote device and returns a future of its :py:class:`RpcResult`."""

    @abstractmethod
    def invoke(self, operation: str, input_tree) -> concurrent.futures.Future:
        pass


class NcclientRpcChannel(RpcChannel):
    """:py:class:`RpcChannel` over an ncclient NETCONF session.

    Requests are sent one at a time, in the order in which they were invoked.
    A reply carrying ``rpc-error`` elements, raised or not depending on the
    manager's raise mode, completes the future with an unsuccessful
    :py:class:`RpcResult`; any other failure, for example a dropped session,
    is raised from the future.
    """

    def __init__(self, nc, executor=None):
        self._nc = nc
        self._owns_executor = executor is None
        self._executor = executor or concurrent.futures.ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="pyncedit-rpc")

    def invoke(self, operation: str, input_tree) -> concurrent.futures.Future:
        return self._executor.submit(self._invoke, operation, input_tree)

    def _invoke(self, operation, input_tree):
        try:
            reply = self._nc.dispatch(input_tree)
        except nc_RPCError as e:
            return RpcResult.failed(RemoteError.from_rpc_error(err) for err in (e.errlist or [e]))
        if not reply.ok:
            return RpcResult.failed(RemoteError.from_rpc_error(err) for err in reply.errors)
        return RpcResult.success(to_ele(reply.xml))

    def close(self):
        if self._owns_executor:
            self._executor.shutdown(wait=True)
