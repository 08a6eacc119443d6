"""Wallet settings: command-line options plus a JSON file in the data directory."""

from __future__ import annotations

import json
import os
import sys
from os import PathLike
from pathlib import Path
from typing import Any

from ipexwallet.cli import CommandLineOptions

_WALLET_SUFFIX = ".wallet"
_KEYS_SUFFIX = ".keys"
_ADDRESS_BOOK_SUFFIX = ".addressbook"


def _replace_last(text: str, old: str, new: str) -> str:
    index = text.rfind(old)
    if index == -1:
        return text
    return text[:index] + new + text[index + len(old) :]


def _default_config_dir() -> str:
    configured = os.environ.get("XDG_CONFIG_HOME")
    if configured:
        return configured
    return str(Path.home() / ".config")


class Settings:
    """Everything the wallet needs to know about where it runs and how."""

    def __init__(
        self,
        options: CommandLineOptions,
        app_name: str,
        display_name: str = "IPExDark",
        version: str = "",
    ) -> None:
        self._options = options
        self.app_name = app_name
        self.display_name = display_name
        self.version = version
        self._values: dict[str, Any] = {}
        self._address_book_file = ""

    # Options taken from the command line.

    @property
    def is_testnet(self) -> bool:
        return self._options.testnet

    @property
    def allow_local_ip(self) -> bool:
        return self._options.allow_local_ip

    @property
    def hide_my_port(self) -> bool:
        return self._options.hide_my_port

    @property
    def p2p_bind_ip(self) -> str:
        return self._options.p2p_bind_ip

    @property
    def p2p_bind_port(self) -> int:
        return self._options.p2p_bind_port

    @property
    def p2p_external_port(self) -> int:
        return self._options.p2p_external_port

    @property
    def peers(self) -> list[str]:
        return list(self._options.peers)

    @property
    def priority_nodes(self) -> list[str]:
        return list(self._options.priority_nodes)

    @property
    def exclusive_nodes(self) -> list[str]:
        return list(self._options.exclusive_nodes)

    @property
    def seed_nodes(self) -> list[str]:
        return list(self._options.seed_nodes)

    @property
    def data_dir(self) -> Path:
        return Path(self._options.data_dir)

    # Values kept in the settings file.

    def _data_file(self, suffix: str) -> Path:
        return self.data_dir.absolute() / f"{self.app_name}{suffix}"

    @property
    def config_file(self) -> Path:
        return self._data_file(".cfg")

    @property
    def wallet_file(self) -> str:
        if "walletFile" in self._values:
            value = self._values["walletFile"]
            return value if isinstance(value, str) else ""
        return str(self._data_file(_WALLET_SUFFIX))

    @property
    def address_book_file(self) -> str:
        return self._address_book_file

    @property
    def encrypted(self) -> bool:
        value = self._values.get("encrypted", False)
        return value if isinstance(value, bool) else False

    def load(self) -> None:
        """Read the settings file if there is one and work out the address book path."""
        try:
            raw = self.config_file.read_bytes()
        except OSError:
            self._address_book_file = str(self._data_file(_ADDRESS_BOOK_SUFFIX))
            return

        try:
            parsed = json.loads(raw)
        except (ValueError, UnicodeDecodeError):
            parsed = {}
        self._values = parsed if isinstance(parsed, dict) else {}

        if "walletFile" not in self._values:
            self._address_book_file = str(self._data_file(_ADDRESS_BOOK_SUFFIX))
        else:
            self._address_book_file = _replace_last(
                self.wallet_file, _WALLET_SUFFIX, _ADDRESS_BOOK_SUFFIX
            )

    def set_wallet_file(self, path: str | PathLike[str]) -> None:
        """Remember the wallet file, adding ``.wallet`` unless it names a wallet or keys file."""
        path = str(path)
        if path.endswith(_WALLET_SUFFIX) or path.endswith(_KEYS_SUFFIX):
            self._values["walletFile"] = path
        else:
            self._values["walletFile"] = path + _WALLET_SUFFIX
        self._save()
        self._address_book_file = _replace_last(
            self.wallet_file, _WALLET_SUFFIX, _ADDRESS_BOOK_SUFFIX
        )

    def set_encrypted(self, encrypted: bool) -> None:
        """Record whether the wallet is encrypted; the file is written only on change."""
        if self.encrypted != encrypted:
            self._values["encrypted"] = bool(encrypted)
            self._save()

    def _save(self) -> None:
        try:
            with open(self.config_file, "w", encoding="utf-8") as handle:
                json.dump(self._values, handle, indent=4)
                handle.write("\n")
        except OSError:
            pass

    # Start on login, through an XDG autostart entry.

    def _autostart_file(self, config_dir: str | PathLike[str] | None) -> Path | None:
        base = _default_config_dir() if config_dir is None else str(config_dir)
        if not base:
            return None
        return Path(base) / "autostart" / f"{self.app_name}.desktop"

    def is_start_on_login_enabled(self, config_dir: str | PathLike[str] | None = None) -> bool:
        """True when an autostart entry for the wallet exists."""
        entry = self._autostart_file(config_dir)
        if entry is None or not entry.parent.is_dir():
            return False
        return entry.exists()

    def set_start_on_login_enabled(
        self,
        enable: bool,
        config_dir: str | PathLike[str] | None = None,
        executable: str | None = None,
    ) -> None:
        """Create or remove the autostart entry; failures are silently ignored."""
        entry = self._autostart_file(config_dir)
        if entry is None:
            return
        try:
            entry.parent.mkdir(exist_ok=True)
        except OSError:
            return
        if not entry.parent.is_dir():
            return

        if not enable:
            try:
                entry.unlink(missing_ok=True)
            except OSError:
                pass
            return

        program = executable if executable is not None else os.path.abspath(sys.argv[0])
        content = (
            "[Desktop Entry]\n"
            "Type=Application\n"
            f"Name={self.display_name} Wallet\n"
            f"Exec={program}\n"
            "Terminal=false\n"
            "Hidden=false\n"
        )
        try:
            entry.write_text(content, encoding="utf-8")
        except OSError:
            pass