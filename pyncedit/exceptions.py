# Copyright 2021-2024 Nokia

__all__ = (
    "InvalidArgumentError", "InvalidPathError", "TransactionClosedError",
    "RpcFailureError", "TransportFailureError", "CommitFailedError",
)

__doc__ = """This module contains exceptions for error handling within pyncedit.
"""


class InvalidArgumentError(Exception):
    """Exception raised before any request is sent to the remote device when:

    * an operation is attempted on a datastore other than the configuration datastore
    * a path is empty
    * data passed to a write operation cannot be converted to XML
    """
    pass


class InvalidPathError(InvalidArgumentError):
    """Exception raised when a path provided by the user:

    * is empty
    * fails to parse
    * references a module that is not in the namespace map
    """
    pass


class TransactionClosedError(InvalidArgumentError):
    """Exception raised when a write operation or a commit is attempted on a
    transaction that has already been committed, has failed or was cancelled.
    """
    pass


class RpcFailureError(Exception):
    """Exception raised when the remote device rejected an ``edit-config`` or
    ``commit`` request.

    :ivar path: Path of the edit that failed, ``None`` for a commit.
    :ivar errors: The ``rpc-error`` records exactly as reported by the device.
    :vartype errors: tuple of :py:class:`pyncedit.rpc.RemoteError`
    """
    def __init__(self, message, *, path=None, errors=()):
        super().__init__(message)
        self.path = path
        self.errors = tuple(errors)


class TransportFailureError(Exception):
    """Exception raised when the request could not be exchanged with the remote
    device, for example the session dropped or the wait for the reply was
    cancelled.  The underlying exception is available as ``__cause__``.
    """
    pass


class CommitFailedError(Exception):
    """The only exception raised through the future returned by
    :py:meth:`pyncedit.transaction.WriteTransaction.submit`.

    :ivar transaction_id: Identifier of the transaction that failed.
    :ivar cause: :py:class:`RpcFailureError` carrying the remote errors or the
                 exception that interrupted the commit.
    """
    def __init__(self, message, *, transaction_id, cause):
        super().__init__(message)
        self.transaction_id = transaction_id
        self.cause = cause
        self.__cause__ = cause
