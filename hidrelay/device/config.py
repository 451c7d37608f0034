from __future__ import annotations


class dcfg:
    """Serial link settings for the remote executor."""

    # The JSON-RPC server on the board listens at this rate; it is not negotiable.
    BAUD_RATE = 115200

    # None = block forever on reads; the executor has no keepalive.
    READ_TIMEOUT_S = None
    WRITE_TIMEOUT_S = None

    # Byte that terminates a response frame.
    FRAME_END = b"}"

    # Encoding used for request payloads and responses.
    ENCODING = "utf-8"
