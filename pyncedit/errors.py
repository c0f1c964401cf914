# Copyright 2021-2024 Nokia

from .exceptions import *

pyncedit_err_could_not_create_conn = (RuntimeError, "Cannot connect to {host}:{port} - {reason}")
pyncedit_err_invalid_datastore = (InvalidArgumentError, "Can {operation} only configuration, not {store}")
pyncedit_err_empty_path = (InvalidPathError, "Instance path must contain at least one element")
pyncedit_err_path_must_be_absolute = (InvalidPathError, "Path must start with '/' - {path!r}")
pyncedit_err_path_unexpected_token = (InvalidPathError, "Unexpected {token!r} at position {position} in path {path!r}")
pyncedit_err_path_unexpected_end = (InvalidPathError, "Unexpected end of path {path!r}")
pyncedit_err_path_missing_module = (InvalidPathError, "First element of path {path!r} must be qualified by a module")
pyncedit_err_path_unknown_module = (InvalidPathError, "Unknown module {module!r} in path {path!r}")
pyncedit_err_path_unsupported_type = (InvalidPathError, "Unsupported path type {type}")
pyncedit_err_invalid_identifier = (InvalidArgumentError, "Invalid identifier {identifier!r}")
pyncedit_err_unsupported_data_type = (InvalidArgumentError, "Unsupported data type {type} for {path}")
pyncedit_err_xml_decode = (InvalidArgumentError, "Cannot parse XML data for {path} - {reason}")
pyncedit_err_transaction_closed = (TransactionClosedError, "Cannot {operation} transaction {transaction} in state {state}")
pyncedit_err_edit_failed = (RpcFailureError, "{device}: {operation} of {path} failed")
pyncedit_err_edit_interrupted = (TransportFailureError, "{device}: Interrupted while waiting for response to {operation} of {path}")
pyncedit_err_edit_transport = (TransportFailureError, "{device}: {operation} of {path} could not be sent - {reason}")
pyncedit_err_commit_failed = (RpcFailureError, "{device}: Commit of transaction {transaction} failed")
pyncedit_err_commit_transport = (TransportFailureError, "{device}: Commit of transaction {transaction} could not be sent - {reason}")
pyncedit_err_submit_failed = (CommitFailedError, "Submit of transaction {transaction} failed")


def make_exception(arg, *, exc_kwargs=None, **kwarg):
    """Create an exception from an entry of the message catalogue.

    Keyword arguments fill the message template; ``exc_kwargs`` are passed on to
    the exception constructor.
    """
    return arg[0](arg[1].format(**kwarg), **(exc_kwargs or {}))
