"""Helpers that build typed-bytes payloads for tests."""

from __future__ import annotations

import struct


def tb_string(text: str) -> bytes:
    raw_text = text.encode("utf-8")
    return b"\x07" + struct.pack(">i", len(raw_text)) + raw_text


def tb_bytes(payload: bytes) -> bytes:
    return b"\x00" + struct.pack(">i", len(payload)) + payload


def tb_int(value: int) -> bytes:
    return b"\x03" + struct.pack(">i", value)


def tb_long(value: int) -> bytes:
    return b"\x04" + struct.pack(">q", value)


def tb_float(value: float) -> bytes:
    return b"\x05" + struct.pack(">f", value)


def tb_double(value: float) -> bytes:
    return b"\x06" + struct.pack(">d", value)


def tb_bool(value: bool) -> bytes:
    return b"\x02" + (b"\x01" if value else b"\x00")


def tb_byte(value: int) -> bytes:
    return b"\x01" + struct.pack(">b", value)


def tb_map(*pairs: tuple[bytes, bytes]) -> bytes:
    body = b"".join(key + value for key, value in pairs)
    return b"\x0a" + struct.pack(">i", len(pairs)) + body


def tb_vector(*items: bytes) -> bytes:
    return b"\x08" + struct.pack(">i", len(items)) + b"".join(items)


def tb_list(*items: bytes) -> bytes:
    return b"\x09" + b"".join(items) + b"\xff"
