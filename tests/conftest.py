import concurrent.futures

import pytest

from pyncedit.constants import COMMIT, DISCARD_CHANGES, EDIT_CONFIG
from pyncedit.normalizer import XmlDataNormalizer
from pyncedit.rpc import RpcChannel, RpcResult
from pyncedit.transaction import WriteTransaction

NS = "urn:example:system"
NS_MAP = {"ex": NS}


class FakeChannel(RpcChannel):
    """Channel answering from a script of replies per operation.

    A reply is an RpcResult, an exception to raise from the future, or a
    Future returned as is.  Operations without a scripted reply succeed.
    """

    def __init__(self):
        self.calls = []
        self.replies = {EDIT_CONFIG: [], COMMIT: [], DISCARD_CHANGES: []}

    def reply(self, operation, *replies):
        self.replies[operation].extend(replies)

    def invoke(self, operation, input_tree):
        self.calls.append((operation, input_tree))
        pending = self.replies[operation]
        reply = pending.pop(0) if pending else RpcResult.success(None)
        if isinstance(reply, concurrent.futures.Future):
            return reply
        future = concurrent.futures.Future()
        if isinstance(reply, BaseException):
            future.set_exception(reply)
        else:
            future.set_result(reply)
        return future

    def operations(self):
        return [operation for operation, _ in self.calls]


@pytest.fixture
def channel():
    return FakeChannel()


@pytest.fixture
def normalizer():
    return XmlDataNormalizer(NS_MAP)


@pytest.fixture
def make_transaction(channel, normalizer):
    def _make(candidate_supported=True, rollback_on_error_supported=True, logger=None):
        return WriteTransaction("device-1", channel, normalizer,
                                candidate_supported=candidate_supported,
                                rollback_on_error_supported=rollback_on_error_supported,
                                logger=logger)
    return _make
