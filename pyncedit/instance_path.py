# Copyright 2021-2024 Nokia

import re
import types
from typing import Iterable, Mapping, Optional

from .errors import *
from .errors import make_exception
from .identifier import Identifier

__all__ = ("PathArgument", "ListEntry", "InstancePath", )

__doc__ = """Representation of a path into the configuration tree as an ordered
sequence of path arguments, from the root to the addressed element.
"""


class PathArgument:
    """Single element of an :py:class:`InstancePath` addressing a container or a leaf."""
    __slots__ = "_name",

    def __init__(self, name: Identifier):
        self._name = name

    @property
    def name(self) -> Identifier:
        return self._name

    @property
    def predicates(self) -> Mapping[Identifier, object]:
        return types.MappingProxyType({})

    def is_list_entry(self) -> bool:
        return False

    def __hash__(self):
        return hash(self._name)

    def __eq__(self, other):
        return type(other) is type(self) and self._name == other._name

    def __repr__(self):
        return f"{self.__class__.__name__}({self._name!r})"

    def __str__(self):
        return str(self._name)


class ListEntry(PathArgument):
    """Path argument addressing one entry of a list by its key values (predicates).

    The order of the keys is preserved and is the order in which key leaves
    are written to the request.
    """
    __slots__ = "_keys",

    def __init__(self, name: Identifier, keys: Mapping[Identifier, object]):
        super().__init__(name)
        self._keys = types.MappingProxyType(dict(keys))

    @property
    def predicates(self) -> Mapping[Identifier, object]:
        return self._keys

    def is_list_entry(self) -> bool:
        return True

    def __hash__(self):
        return hash((self._name, tuple(self._keys.items())))

    def __eq__(self, other):
        return (type(other) is ListEntry and self._name == other._name
                and tuple(self._keys.items()) == tuple(other._keys.items()))

    def __repr__(self):
        return f"{self.__class__.__name__}({self._name!r}, {dict(self._keys)!r})"

    def __str__(self):
        return str(self._name) + "".join(f"[{k}={_quote(v)}]" for k, v in self._keys.items())


def _quote(value):
    value = str(value)
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


class InstancePath:
    """Non-empty, immutable sequence of :py:class:`PathArgument` ordered from the root."""
    __slots__ = "_path",

    def __init__(self, arguments: Iterable[PathArgument]):
        self._path = tuple(arguments)
        if not self._path:
            raise make_exception(pyncedit_err_empty_path)

    @staticmethod
    def from_string(text: str, ns_map: Optional[Mapping[str, str]] = None):
        """Parse a json-instance-path such as ``/mod:system/user[name="fred"]/type``.

        :param text: Path to parse.
        :param ns_map: Mapping of YANG module name to XML namespace.
        :raises InvalidPathError: The path cannot be parsed.
        """
        return InstancePath(_PathParser(text, ns_map or {}).parse())

    @property
    def arguments(self):
        return self._path

    @property
    def last(self) -> PathArgument:
        return self._path[-1]

    @property
    def parent(self):
        """Path without the last argument, ``None`` for a single argument path."""
        return InstancePath(self._path[:-1]) if len(self._path) > 1 else None

    def to_string(self, ns_map: Mapping[str, str]) -> str:
        """Render the path as json-instance-path using module names from ``ns_map``."""
        rev_ns_map = {v: k for k, v in ns_map.items()}
        result = ""
        namespace = None
        for arg in self._path:
            result += "/" + _json_name(arg.name, namespace, rev_ns_map)
            namespace = arg.name.namespace
            for k, v in arg.predicates.items():
                result += f"[{_json_name(k, namespace, rev_ns_map)}={_quote(v)}]"
        return result

    def __len__(self):
        return len(self._path)

    def __iter__(self):
        return iter(self._path)

    def __getitem__(self, index):
        return self._path[index]

    def __reversed__(self):
        return reversed(self._path)

    def __hash__(self):
        return hash(self._path)

    def __eq__(self, other):
        return isinstance(other, InstancePath) and self._path == other._path

    def __repr__(self):
        return f"InstancePath({list(self._path)!r})"

    def __str__(self):
        return "".join("/" + str(arg) for arg in self._path)


def _json_name(identifier, parent_namespace, rev_ns_map):
    if identifier.namespace is None or identifier.namespace == parent_namespace:
        return identifier.name
    return f"{rev_ns_map.get(identifier.namespace, identifier.namespace)}:{identifier.name}"


WSP_RE = "[ \t\r\n]+"
SEPARATOR_RE = "[/]"
NODE_IDENTIFIER_RE = "(?:[a-zA-Z_][a-zA-Z0-9_\\-.]*[:])?[a-zA-Z_][a-zA-Z0-9_\\-.]*"
PREDICATE_BEGIN_RE = "\\["
PREDICATE_END_RE = "\\]"
EQUALS_RE = "="
QUOTED_STR_RE = """\
(?:["](?:[^\\\\"]|(?:[\\\\].))*["])\
|(?:['](?:[^'])*['])\
"""
UNQUOTED_STR_RE = """[^ \t\r\n\\]"'](?:[^\\]]*[^ \t\r\n\\]])?"""


def _state_regex(*kinds):
    alternatives = [f"(?P<WSP>{WSP_RE})"]
    alternatives.extend(f"(?P<{kind}>{globals()[kind + '_RE']})" for kind in kinds)
    alternatives.append("(?P<REST>.)")
    return re.compile("(?:" + "|".join(alternatives) + ")", re.DOTALL)


#     /mod:a / b [ name = "x" ] [port=80] /c
#     |    |   | | |    | |   | |         |
#     |    |   | | |    | |   | |         EXPECT_NODE_STATE
#     |    |   | | |    | |   | AFTER_NODE_STATE
#     |    |   | | |    | |   AFTER_NODE_STATE
#     |    |   | | |    | EXPECT_PREDICATE_END_STATE
#     |    |   | | |    EXPECT_VALUE_STATE
#     |    |   | | EXPECT_EQUALS_STATE
#     |    |   | EXPECT_KEY_STATE
#     |    |   AFTER_NODE_STATE
#     |    EXPECT_NODE_STATE
#     INIT_STATE

INIT_STATE                  = 0
EXPECT_NODE_STATE           = 1
AFTER_NODE_STATE            = 2
EXPECT_KEY_STATE            = 3
EXPECT_EQUALS_STATE         = 4
EXPECT_VALUE_STATE          = 5
EXPECT_PREDICATE_END_STATE  = 6

STATE_TO_REGEX = (
    _state_regex("SEPARATOR"),
    _state_regex("NODE_IDENTIFIER"),
    _state_regex("SEPARATOR", "PREDICATE_BEGIN"),
    _state_regex("NODE_IDENTIFIER"),
    _state_regex("EQUALS"),
    _state_regex("QUOTED_STR", "UNQUOTED_STR"),
    _state_regex("PREDICATE_END"),
)

_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)


class _PathParser:
    def __init__(self, text, ns_map):
        self._text = text
        self._ns_map = ns_map
        self._pos = 0
        self._state = INIT_STATE
        self._namespace = None
        self._name = None
        self._keys = None
        self._key = None
        self._arguments = []
        self._state_handlers = (
            self._init,
            self._node,
            self._after_node,
            self._key_name,
            self._equals,
            self._value,
            self._predicate_end,
        )

    def parse(self):
        if not self._text.strip(" \t\r\n/"):
            raise make_exception(pyncedit_err_empty_path)
        while True:
            token = self._next_token()
            if token is None:
                break
            self._state_handlers[self._state](*token)
        if self._state != AFTER_NODE_STATE:
            raise make_exception(pyncedit_err_path_unexpected_end, path=self._text)
        self._flush()
        return self._arguments

    def _next_token(self):
        regex = STATE_TO_REGEX[self._state]
        while self._pos < len(self._text):
            m = regex.match(self._text, self._pos)
            self._pos = m.end()
            if m.lastgroup == "WSP":
                continue
            if m.lastgroup == "REST":
                if self._state == INIT_STATE:
                    raise make_exception(pyncedit_err_path_must_be_absolute, path=self._text)
                raise make_exception(pyncedit_err_path_unexpected_token,
                                     token=m.group(), position=m.start(), path=self._text)
            return m.lastgroup, m.group()
        return None

    def _resolve(self, value):
        if ":" not in value:
            if self._namespace is None:
                raise make_exception(pyncedit_err_path_missing_module, path=self._text)
            return Identifier(self._namespace, value)
        module, name = value.split(":")
        if module not in self._ns_map:
            raise make_exception(pyncedit_err_path_unknown_module, module=module, path=self._text)
        return Identifier(self._ns_map[module], name)

    def _flush(self):
        if self._keys:
            self._arguments.append(ListEntry(self._name, self._keys))
        else:
            self._arguments.append(PathArgument(self._name))

    def _init(self, kind, value):
        self._state = EXPECT_NODE_STATE

    def _node(self, kind, value):
        self._name = self._resolve(value)
        self._namespace = self._name.namespace
        self._keys = {}
        self._state = AFTER_NODE_STATE

    def _after_node(self, kind, value):
        if kind == "SEPARATOR":
            self._flush()
            self._state = EXPECT_NODE_STATE
        else:
            self._state = EXPECT_KEY_STATE

    def _key_name(self, kind, value):
        self._key = self._resolve(value)
        self._state = EXPECT_EQUALS_STATE

    def _equals(self, kind, value):
        self._state = EXPECT_VALUE_STATE

    def _value(self, kind, value):
        if kind == "QUOTED_STR":
            if value[0] == '"':
                value = _ESCAPE_RE.sub(r"\1", value[1:-1])
            else:
                value = value[1:-1]
        self._keys[self._key] = value
        self._state = EXPECT_PREDICATE_END_STATE

    def _predicate_end(self, kind, value):
        self._state = AFTER_NODE_STATE
