import pytest

from ipexwallet.node import (
    TAG_MERGE_MINING,
    TAG_NONCE,
    TAG_PADDING,
    TAG_PUBKEY,
    Node,
    NodeCallback,
    PaymentIdError,
    convert_payment_id,
    extract_payment_id,
    parse_transaction_extra,
)

PAYMENT_ID = "ab" * 32


def test_convert_layout():
    extra = convert_payment_id(PAYMENT_ID)
    assert extra[:3] == bytes([TAG_NONCE, 33, 0])
    assert extra[3:] == bytes.fromhex(PAYMENT_ID)


def test_convert_empty():
    assert convert_payment_id("") == b""


@pytest.mark.parametrize("value", ["ab", "zz" * 32, "ab" * 33])
def test_convert_invalid(value):
    with pytest.raises(PaymentIdError):
        convert_payment_id(value)


def test_round_trip_is_upper_hex():
    mixed = "0123456789abcdefABCDEF" * 2 + "00112233445566778899"
    assert extract_payment_id(convert_payment_id(mixed)) == mixed.upper()


def test_extract_without_nonce():
    extra = bytes([TAG_PUBKEY]) + bytes(32)
    assert extract_payment_id(extra) == ""


def test_extract_nonce_not_payment_id():
    extra = bytes([TAG_NONCE, 3, 1, 2, 3])
    assert extract_payment_id(extra) == ""


def test_extract_invalid_extra_raises():
    with pytest.raises(ValueError):
        extract_payment_id(bytes([0x7F]))


def test_parse_fields():
    key = bytes(range(32))
    extra = bytes([TAG_PUBKEY]) + key + convert_payment_id(PAYMENT_ID) + bytes(4)
    fields = parse_transaction_extra(extra)
    assert [tag for tag, _ in fields] == [TAG_PUBKEY, TAG_NONCE, TAG_PADDING]
    assert fields[0][1] == key
    assert fields[1][1][1:] == bytes.fromhex(PAYMENT_ID)
    assert fields[2][1] == 4


def test_parse_merge_mining():
    root = bytes(range(32))
    body = bytes([5]) + root
    extra = bytes([TAG_MERGE_MINING, len(body)]) + body
    assert parse_transaction_extra(extra) == [(TAG_MERGE_MINING, (5, root))]


@pytest.mark.parametrize(
    "extra",
    [
        bytes([TAG_PUBKEY]) + bytes(10),
        bytes([TAG_NONCE, 5, 1]),
        bytes([TAG_PADDING, 0, 1]),
        bytes([TAG_NONCE]),
    ],
)
def test_parse_malformed(extra):
    with pytest.raises(ValueError):
        parse_transaction_extra(extra)


class _Recorder(NodeCallback):
    def __init__(self):
        self.events = []

    def peer_count_updated(self, node, count):
        self.events.append(("peers", count))

    def local_blockchain_updated(self, node, height):
        self.events.append(("local", height))

    def last_known_block_height_updated(self, node, height):
        self.events.append(("known", height))


class _FakeNode(Node):
    def __init__(self, callback):
        self.callback = callback
        self.started = False

    def init(self, callback):
        self.started = True
        self.callback.peer_count_updated(self, 3)
        callback(None)

    def deinit(self):
        self.started = False

    def last_known_block_height(self):
        return 10

    def last_local_block_height(self):
        return 9

    def last_local_block_timestamp(self):
        return 1000

    def peer_count(self):
        return 3


def test_node_is_abstract():
    with pytest.raises(TypeError):
        Node()


def test_callback_is_abstract():
    with pytest.raises(TypeError):
        NodeCallback()


def test_node_lifecycle_and_callbacks():
    recorder = _Recorder()
    node = _FakeNode(recorder)
    results = []
    node.init(results.append)
    assert results == [None]
    assert recorder.events == [("peers", 3)]
    assert node.started
    extra = node.convert_payment_id(PAYMENT_ID)
    assert extract_payment_id(extra) == PAYMENT_ID.upper()
    node.deinit()
    assert not node.started


def test_node_payment_id_methods_delegate():
    node = _FakeNode(_Recorder())
    extra = node.convert_payment_id(PAYMENT_ID)
    assert extra == convert_payment_id(PAYMENT_ID)
    assert node.extract_payment_id(extra) == PAYMENT_ID.upper()