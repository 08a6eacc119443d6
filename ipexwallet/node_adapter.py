"""Chooses and drives the wallet's node: a local RPC daemon or an in-process one."""

from __future__ import annotations

import queue
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from ipexwallet.node import Node, NodeCallback, PaymentIdError
from ipexwallet.settings import Settings


@dataclass(frozen=True)
class CoreConfig:
    """Configuration of the blockchain core."""

    data_dir: str


@dataclass(frozen=True)
class NetNodeConfig:
    """Configuration of the peer-to-peer node."""

    p2p_bind_ip: str
    p2p_bind_port: int
    p2p_external_port: int
    allow_local_ip: bool
    hide_my_port: bool
    data_dir: str
    testnet: bool
    peers: list[str] = field(default_factory=list)
    priority_nodes: list[str] = field(default_factory=list)
    exclusive_nodes: list[str] = field(default_factory=list)
    seed_nodes: list[str] = field(default_factory=list)


class NodeEvent(str, Enum):
    """Notifications a :class:`NodeAdapter` sends to its listeners."""

    PEER_COUNT_UPDATED = "peer_count_updated"
    LOCAL_BLOCKCHAIN_UPDATED = "local_blockchain_updated"
    LAST_KNOWN_BLOCK_HEIGHT_UPDATED = "last_known_block_height_updated"
    NODE_INIT_COMPLETED = "node_init_completed"


def make_core_config(settings: Settings) -> CoreConfig:
    """Core configuration for the given settings."""
    return CoreConfig(data_dir=str(settings.data_dir.absolute()))


def make_net_node_config(settings: Settings) -> NetNodeConfig:
    """Peer-to-peer configuration for the given settings."""
    return NetNodeConfig(
        p2p_bind_ip=settings.p2p_bind_ip,
        p2p_bind_port=settings.p2p_bind_port,
        p2p_external_port=settings.p2p_external_port,
        allow_local_ip=settings.allow_local_ip,
        hide_my_port=settings.hide_my_port,
        data_dir=str(settings.data_dir.absolute()),
        testnet=settings.is_testnet,
        peers=settings.peers,
        priority_nodes=settings.priority_nodes,
        exclusive_nodes=settings.exclusive_nodes,
        seed_nodes=settings.seed_nodes,
    )


RpcNodeFactory = Callable[[NodeCallback], Node]
InProcessNodeFactory = Callable[[NodeCallback, CoreConfig, NetNodeConfig], Node]

_OK = "ok"
_FAILED = "failed"


class NodeAdapter(NodeCallback):
    """Tries a local RPC node first and falls back to running a node in-process.

    ``rpc_node_factory(callback)`` builds a node talking to the local daemon;
    ``inprocess_node_factory(callback, core_config, net_node_config)`` builds one
    whose ``init`` blocks until the node is stopped.
    """

    def __init__(
        self,
        rpc_node_factory: RpcNodeFactory,
        inprocess_node_factory: InProcessNodeFactory,
        rpc_timeout: float = 3.0,
    ) -> None:
        self._rpc_node_factory = rpc_node_factory
        self._inprocess_node_factory = inprocess_node_factory
        self._rpc_timeout = rpc_timeout
        self._node: Node | None = None
        self._thread: threading.Thread | None = None
        self._rpc_alive = threading.Event()
        self._listeners: dict[NodeEvent, list[Callable[..., Any]]] = {e: [] for e in NodeEvent}

    def connect(self, event: NodeEvent | str, callback: Callable[..., Any]) -> None:
        """Call ``callback`` on every ``event``; unknown events raise ValueError."""
        self._listeners[NodeEvent(event)].append(callback)

    def _emit(self, event: NodeEvent, *args: Any) -> None:
        for callback in list(self._listeners[event]):
            callback(*args)

    def _require_node(self) -> Node:
        if self._node is None:
            raise RuntimeError("node is not initialized")
        return self._node

    def init(self, settings: Settings) -> bool:
        """Start a node; True once one is running."""
        if self._node is not None:
            raise RuntimeError("node is already initialized")
        self._rpc_alive.clear()
        node = self._rpc_node_factory(self)
        self._node = node
        node.init(lambda error: None)
        if self._rpc_alive.wait(self._rpc_timeout):
            self._emit(NodeEvent.NODE_INIT_COMPLETED)
            return True

        self._node = None
        return self._init_in_process_node(settings)

    def _init_in_process_node(self, settings: Settings) -> bool:
        results: queue.Queue[str] = queue.Queue()
        core_config = make_core_config(settings)
        net_node_config = make_net_node_config(settings)

        def run() -> None:
            reported = False

            def on_init(error: Exception | None) -> None:
                nonlocal reported
                reported = True
                if error is not None:
                    results.put(_FAILED)
                    return
                self._emit(NodeEvent.NODE_INIT_COMPLETED)
                results.put(_OK)

            try:
                node = self._inprocess_node_factory(self, core_config, net_node_config)
                self._node = node
                node.init(on_init)
            except Exception:
                if not reported:
                    reported = True
                    results.put(_FAILED)
                return
            finally:
                self._node = None
            if not reported:
                results.put(_FAILED)

        self._thread = threading.Thread(target=run, name="inprocess-node", daemon=True)
        self._thread.start()
        if results.get() != _OK:
            return False

        self._emit(NodeEvent.LOCAL_BLOCKCHAIN_UPDATED, self.last_local_block_height())
        self._emit(NodeEvent.LAST_KNOWN_BLOCK_HEIGHT_UPDATED, self.last_known_block_height())
        return True

    def deinit(self) -> None:
        """Stop the node, waiting for an in-process node to shut down."""
        node = self._node
        if node is None:
            return
        thread = self._thread
        if thread is not None and thread.is_alive():
            node.deinit()
            thread.join()
            self._thread = None
        self._node = None

    def peer_count(self) -> int:
        return self._require_node().peer_count()

    def convert_payment_id(self, payment_id: str) -> bytes:
        """Extra data carrying ``payment_id``; empty when the id is malformed."""
        node = self._require_node()
        try:
            return node.convert_payment_id(payment_id)
        except PaymentIdError:
            return b""

    def extract_payment_id(self, extra: bytes) -> str:
        return self._require_node().extract_payment_id(extra)

    def last_known_block_height(self) -> int:
        return self._require_node().last_known_block_height()

    def last_local_block_height(self) -> int:
        return self._require_node().last_local_block_height()

    def last_local_block_timestamp(self) -> datetime:
        timestamp = self._require_node().last_local_block_timestamp()
        return datetime.fromtimestamp(timestamp, tz=timezone.utc)

    def peer_count_updated(self, node: Node, count: int) -> None:
        self._rpc_alive.set()
        self._emit(NodeEvent.PEER_COUNT_UPDATED, count)

    def local_blockchain_updated(self, node: Node, height: int) -> None:
        self._rpc_alive.set()
        self._emit(NodeEvent.LOCAL_BLOCKCHAIN_UPDATED, height)

    def last_known_block_height_updated(self, node: Node, height: int) -> None:
        self._emit(NodeEvent.LAST_KNOWN_BLOCK_HEIGHT_UPDATED, height)