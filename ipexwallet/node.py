"""Node interface and payment-id handling in transaction extra data."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

TAG_PADDING = 0x00
TAG_PUBKEY = 0x01
TAG_NONCE = 0x02
TAG_MERGE_MINING = 0x03

NONCE_PAYMENT_ID = 0x00

_PADDING_MAX_COUNT = 255
_NONCE_MAX_COUNT = 255
_KEY_SIZE = 32
_HASH_SIZE = 32


class PaymentIdError(ValueError):
    """A payment id is not a 64-character hex string."""


def _read_varint(data: bytes, pos: int) -> tuple[int, int]:
    value = 0
    shift = 0
    while True:
        if pos >= len(data):
            raise ValueError("Can't parse extra")
        byte = data[pos]
        pos += 1
        value |= (byte & 0x7F) << shift
        if not byte & 0x80:
            return value, pos
        shift += 7
        if shift > 63:
            raise ValueError("Can't parse extra")


def _take(data: bytes, pos: int, size: int) -> tuple[bytes, int]:
    end = pos + size
    if end > len(data):
        raise ValueError("Can't parse extra")
    return data[pos:end], end


def parse_transaction_extra(extra: bytes) -> list[tuple[int, Any]]:
    """Split extra data into ``(tag, value)`` fields.

    Padding yields its size, a public key or nonce its bytes, a merge-mining
    tag a ``(depth, merkle_root)`` pair. Raises ValueError on malformed data.
    """
    extra = bytes(extra)
    fields: list[tuple[int, Any]] = []
    pos = 0
    while pos < len(extra):
        tag = extra[pos]
        pos += 1
        if tag == TAG_PADDING:
            rest = extra[pos:]
            size = 1 + len(rest)
            if size > _PADDING_MAX_COUNT or any(rest):
                raise ValueError("Can't parse extra")
            fields.append((TAG_PADDING, size))
            pos = len(extra)
        elif tag == TAG_PUBKEY:
            key, pos = _take(extra, pos, _KEY_SIZE)
            fields.append((TAG_PUBKEY, key))
        elif tag == TAG_NONCE:
            size, pos = _take(extra, pos, 1)
            nonce, pos = _take(extra, pos, size[0])
            fields.append((TAG_NONCE, nonce))
        elif tag == TAG_MERGE_MINING:
            size, pos = _read_varint(extra, pos)
            body, pos = _take(extra, pos, size)
            depth, inner = _read_varint(body, 0)
            root, inner = _take(body, inner, _HASH_SIZE)
            if inner != len(body):
                raise ValueError("Can't parse extra")
            fields.append((TAG_MERGE_MINING, (depth, root)))
        else:
            raise ValueError("Can't parse extra")
    return fields


def _parse_payment_id(text: str) -> bytes | None:
    if len(text) != 2 * _HASH_SIZE:
        return None
    try:
        return bytes.fromhex(text)
    except ValueError:
        return None


def convert_payment_id(payment_id: str) -> bytes:
    """Build the extra data carrying a payment id; empty input gives empty data."""
    if not payment_id:
        return b""
    raw = _parse_payment_id(payment_id)
    if raw is None:
        raise PaymentIdError(
            f'Payment id has invalid format: "{payment_id}", expected 64-character string'
        )
    nonce = bytes([NONCE_PAYMENT_ID]) + raw
    if len(nonce) > _NONCE_MAX_COUNT:
        raise PaymentIdError(
            "Something went wrong with payment_id. Please check its format: "
            f'"{payment_id}", expected 64-character string'
        )
    return bytes([TAG_NONCE, len(nonce)]) + nonce


def extract_payment_id(extra: bytes) -> str:
    """Return the payment id found in extra data as upper-case hex, or ''."""
    fields = parse_transaction_extra(extra)
    nonce = next((value for tag, value in fields if tag == TAG_NONCE), None)
    if nonce is None:
        return ""
    if len(nonce) != _HASH_SIZE + 1 or nonce[0] != NONCE_PAYMENT_ID:
        return ""
    return nonce[1:].hex().upper()


class NodeCallback(ABC):
    """Receives updates about a node's state."""

    @abstractmethod
    def peer_count_updated(self, node: Node, count: int) -> None:
        """The number of connected peers changed."""

    @abstractmethod
    def local_blockchain_updated(self, node: Node, height: int) -> None:
        """The local blockchain grew to ``height``."""

    @abstractmethod
    def last_known_block_height_updated(self, node: Node, height: int) -> None:
        """The network's known height changed."""


class Node(ABC):
    """A connection to the currency's network."""

    @abstractmethod
    def init(self, callback: Callable[[Exception | None], Any]) -> None:
        """Start the node; ``callback`` receives None or the failure."""

    @abstractmethod
    def deinit(self) -> None:
        """Stop the node."""

    def convert_payment_id(self, payment_id: str) -> bytes:
        """Build extra data carrying ``payment_id``."""
        return convert_payment_id(payment_id)

    def extract_payment_id(self, extra: bytes) -> str:
        """Read the payment id from extra data."""
        return extract_payment_id(extra)

    @abstractmethod
    def last_known_block_height(self) -> int:
        """Height of the network's newest block."""

    @abstractmethod
    def last_local_block_height(self) -> int:
        """Height of the newest locally stored block."""

    @abstractmethod
    def last_local_block_timestamp(self) -> int:
        """Unix time of the newest locally stored block."""

    @abstractmethod
    def peer_count(self) -> int:
        """Number of connected peers."""