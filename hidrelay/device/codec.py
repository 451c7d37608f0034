"""
Request/response payloads for the executor's JSON-RPC dialect.

The procedure set is fixed by the firmware, so each ``Method`` carries its
own parameter signature. Parameters are typed at build time: numeric values
go on the wire as bare JSON numbers and strings as quoted text, which keeps
two fields that happen to share a textual value from ever affecting each
other.
"""

from __future__ import annotations
import json
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Tuple, Union

from .config import dcfg


class ProtocolError(ValueError):
    """Raised when a response is not valid JSON or lacks a boolean result."""

    pass


class ParamKind(Enum):
    STRING = "string"
    NUMERIC = "numeric"


_N = ParamKind.NUMERIC
_S = ParamKind.STRING


class Method(Enum):
    """Remote procedures registered by the executor firmware."""

    PRESS = ("press", (("key", _N),))
    RELEASE = ("release", (("key", _N),))
    RELEASE_ALL = ("releaseAll", ())
    WRITE = ("write", (("key", _N),))
    PRINT = ("print", (("message", _S),))
    CLICK = ("click", (("button", _N),))
    HOLD = ("hold", (("button", _N),))
    UNHOLD = ("unhold", (("button", _N),))
    MOVE_MOUSE = ("moveMouse", (("a_x", _N), ("a_y", _N), ("b_x", _N), ("b_y", _N)))
    CALIBRATE = ("calibrate", (("x", _N), ("y", _N), ("factor", _N)))

    def __init__(self, wire_name: str, signature: Tuple[Tuple[str, ParamKind], ...]):
        self.wire_name = wire_name
        self.signature = signature

    @classmethod
    def from_wire(cls, name: str) -> "Method":
        for method in cls:
            if method.wire_name == name:
                return method
        raise ValueError(f"unknown remote procedure {name!r}")


@dataclass(frozen=True)
class Param:
    name: str
    value: Union[str, int, float]
    kind: ParamKind


@dataclass(frozen=True)
class RpcRequest:
    method: Method
    params: Tuple[Param, ...] = ()

    def encode(self) -> str:
        return encode(self.method, self.params)


def build_request(method: Method, **values: Any) -> RpcRequest:
    """Bind keyword values to the method's signature, in signature order."""
    expected = [name for name, _ in method.signature]
    unknown = set(values) - set(expected)
    missing = [name for name in expected if name not in values]
    if unknown or missing:
        raise ValueError(
            f"{method.wire_name} takes {expected}; "
            f"missing={missing} unknown={sorted(unknown)}"
        )
    params = tuple(
        Param(name, values[name], kind) for name, kind in method.signature
    )
    return RpcRequest(method, params)


def _typed_value(param: Param) -> Union[str, int, float]:
    if param.kind is ParamKind.NUMERIC:
        if isinstance(param.value, bool) or not isinstance(param.value, numbers.Real):
            raise TypeError(
                f"numeric parameter {param.name!r} got {type(param.value).__name__}"
            )
        if isinstance(param.value, numbers.Integral):
            return int(param.value)
        return float(param.value)
    return str(param.value)


def encode(method: Union[Method, str], ordered_params: Iterable[Param] = ()) -> str:
    """Serialize a request as ``{"method": ..., "params": {...}}``."""
    name = method.wire_name if isinstance(method, Method) else str(method)
    params: Dict[str, Union[str, int, float]] = {}
    for param in ordered_params:
        params[param.name] = _typed_value(param)
    return json.dumps({"method": name, "params": params}, ensure_ascii=False)


def encode_request(request: RpcRequest) -> bytes:
    return request.encode().encode(dcfg.ENCODING)


_TRUE_WORDS = {"true", "1"}
_FALSE_WORDS = {"false", "0"}


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    raise ProtocolError(f"result {value!r} is not a boolean")


def decode(text: Union[str, bytes]) -> bool:
    """Parse a response and return its ``result`` field as a bool."""
    if isinstance(text, (bytes, bytearray)):
        try:
            text = bytes(text).decode(dcfg.ENCODING)
        except UnicodeDecodeError as exc:
            raise ProtocolError(f"response is not {dcfg.ENCODING}: {exc}") from exc
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ProtocolError(f"response is not valid JSON: {text!r}") from exc
    if not isinstance(payload, dict):
        raise ProtocolError(f"response is not a JSON object: {text!r}")
    if "result" not in payload:
        raise ProtocolError(f"response has no 'result' field: {text!r}")
    return _coerce_bool(payload["result"])
