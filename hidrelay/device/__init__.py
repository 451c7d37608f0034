from .transport import SerialTransport, DeviceUnavailable, TransportError
from .codec import (
    Method,
    ParamKind,
    Param,
    RpcRequest,
    ProtocolError,
    build_request,
    encode,
    decode,
)
from .client import RemoteDeviceClient

__all__ = [
    "SerialTransport",
    "DeviceUnavailable",
    "TransportError",
    "Method",
    "ParamKind",
    "Param",
    "RpcRequest",
    "ProtocolError",
    "build_request",
    "encode",
    "decode",
    "RemoteDeviceClient",
]
