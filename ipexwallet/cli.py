"""Command-line options of the wallet."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from os import PathLike

_DESCRIPTION = "Bytecoin wallet"
_MAX_PORT = 0xFFFF


@dataclass
class CommandLineOptions:
    """Options given to the wallet on its command line."""

    data_dir: str
    p2p_bind_port: int
    help: bool = False
    version: bool = False
    testnet: bool = False
    minimized: bool = False
    allow_local_ip: bool = False
    hide_my_port: bool = False
    p2p_bind_ip: str = "0.0.0.0"
    p2p_external_port: int = 0
    peers: list[str] = field(default_factory=list)
    priority_nodes: list[str] = field(default_factory=list)
    exclusive_nodes: list[str] = field(default_factory=list)
    seed_nodes: list[str] = field(default_factory=list)
    positional: list[str] = field(default_factory=list)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise ValueError(message)


def _to_port(text: str) -> int:
    """Read a port number; anything that is not one becomes 0."""
    text = text.strip()
    if not text.isdigit():
        return 0
    value = int(text)
    return value if value <= _MAX_PORT else 0


class CommandLineParser:
    """Parses the wallet's command line into :class:`CommandLineOptions`."""

    def __init__(self, default_data_dir: str | PathLike[str], default_p2p_port: int) -> None:
        self._default_data_dir = str(default_data_dir)
        self._default_p2p_port = int(default_p2p_port)
        parser = _ArgumentParser(
            prog="ipexwallet",
            description=_DESCRIPTION,
            add_help=False,
            allow_abbrev=False,
        )
        parser.add_argument("-h", "--help", action="store_true", help="Displays this help.")
        parser.add_argument(
            "-v", "--version", action="store_true", help="Displays version information."
        )
        parser.add_argument(
            "--testnet",
            action="store_true",
            help="Used to deploy test nets. Checkpoints and hardcoded seeds are ignored, "
            "network id is changed. Use it with --data-dir flag. "
            "The wallet must be launched with --testnet flag",
        )
        parser.add_argument(
            "--p2p-bind-ip",
            metavar="ip",
            default="0.0.0.0",
            help="Interface for p2p network protocol",
        )
        parser.add_argument(
            "--p2p-bind-port",
            metavar="port",
            default=str(self._default_p2p_port),
            help="Port for p2p network protocol",
        )
        parser.add_argument(
            "--p2p-external-port",
            metavar="port",
            default="0",
            help="External port for p2p network protocol (if port forwarding used with NAT)",
        )
        parser.add_argument(
            "--allow-local-ip",
            action="store_true",
            help="Allow local ip add to peer list, mostly in debug purposes",
        )
        parser.add_argument(
            "--add-peer",
            metavar="peer",
            action="append",
            default=[],
            help="Manually add peer to local peerlist",
        )
        parser.add_argument(
            "--add-priority-node",
            metavar="node",
            action="append",
            default=[],
            help="Specify list of peers to connect to and attempt to keep the connection open",
        )
        parser.add_argument(
            "--add-exclusive-node",
            metavar="node",
            action="append",
            default=[],
            help="Specify list of peers to connect to only. If this option is given the "
            "options add-priority-node and seed-node are ignored",
        )
        parser.add_argument(
            "--seed-node",
            metavar="node",
            action="append",
            default=[],
            help="Connect to a node to retrieve peer addresses, and disconnect",
        )
        parser.add_argument(
            "--hide-my-port",
            action="store_true",
            help="Do not announce yourself as peerlist candidate",
        )
        parser.add_argument(
            "--data-dir",
            metavar="directory",
            default=self._default_data_dir,
            help="Specify data directory",
        )
        parser.add_argument(
            "--minimized", action="store_true", help="Run application in minimized mode"
        )
        parser.add_argument("positional", nargs="*", help=argparse.SUPPRESS)
        self._parser = parser

    def parse(self, argv: list[str]) -> CommandLineOptions:
        """Parse the arguments (without the program name).

        Raises ValueError when an option is unknown or lacks its value.
        """
        ns = self._parser.parse_args(list(argv))
        return CommandLineOptions(
            data_dir=ns.data_dir,
            p2p_bind_port=_to_port(ns.p2p_bind_port),
            help=ns.help,
            version=ns.version,
            testnet=ns.testnet,
            minimized=ns.minimized,
            allow_local_ip=ns.allow_local_ip,
            hide_my_port=ns.hide_my_port,
            p2p_bind_ip=ns.p2p_bind_ip,
            p2p_external_port=_to_port(ns.p2p_external_port),
            peers=list(ns.add_peer),
            priority_nodes=list(ns.add_priority_node),
            exclusive_nodes=list(ns.add_exclusive_node),
            seed_nodes=list(ns.seed_node),
            positional=list(ns.positional),
        )

    def help_text(self) -> str:
        """Return the usage and option descriptions."""
        return self._parser.format_help()