# ipexwallet

The non-graphical core of a desktop wallet for a CryptoNote currency: the
parts of a wallet that do not depend on a user interface. It uses only the
Python standard library and supports Python 3.10 and later.

## Modules

- **`ipexwallet.cli`** — `CommandLineParser(default_data_dir, default_p2p_port)`
  knows the wallet's options: `-h/--help`, `-v/--version`, `--testnet`,
  `--p2p-bind-ip` (default `0.0.0.0`), `--p2p-bind-port`,
  `--p2p-external-port` (default `0`), `--allow-local-ip`, `--add-peer`,
  `--add-priority-node`, `--add-exclusive-node`, `--seed-node` (each may be
  repeated), `--hide-my-port`, `--data-dir` and `--minimized`.
  `parse(argv)` takes the arguments without the program name and returns a
  `CommandLineOptions` dataclass; an unknown option or a missing value raises
  `ValueError`. Port values that are not numbers in the range 0–65535 become
  `0`. `help_text()` returns the usage text.
- **`ipexwallet.currency`** — `Currency(decimal_places, minimum_fee=0, ...)`.
  `format_amount(amount)` renders atomic units as a decimal string with
  comma thousands separators, dropping trailing zeros of the fraction but
  keeping at least two digits (`ValueError` for a negative amount).
  `parse_amount(text)` reads such a string back; it returns `0` for text it
  cannot read, for more decimal places than the currency has, and for
  values above 2^64 − 1.
- **`ipexwallet.node`** — `convert_payment_id(payment_id)` turns a
  64-character hex payment id into the bytes of a transaction's extra field
  (empty input gives `b""`, a malformed id raises `PaymentIdError`).
  `extract_payment_id(extra)` returns the payment id as upper-case hex, or
  `""` when there is none. `parse_transaction_extra(extra)` splits extra data
  into `(tag, value)` pairs and raises `ValueError` on malformed data.
  `Node` is the abstract interface of a blockchain node and `NodeCallback`
  receives its peer-count and block-height updates.
- **`ipexwallet.node_adapter`** — `NodeAdapter(rpc_node_factory,
  inprocess_node_factory, rpc_timeout=3.0)` first builds an RPC node and
  waits up to `rpc_timeout` seconds for it to report a peer count or a local
  blockchain update; if none arrives it runs an in-process node on a
  background thread instead. `init(settings)` returns `True` once a node is
  running, `deinit()` stops it. Listeners registered with
  `connect(event, callback)` receive the `NodeEvent` notifications
  (`peer_count_updated`, `local_blockchain_updated`,
  `last_known_block_height_updated`, `node_init_completed`).
  `make_core_config(settings)` and `make_net_node_config(settings)` build the
  `CoreConfig` and `NetNodeConfig` handed to the in-process node factory.
- **`ipexwallet.settings`** — `Settings(options, app_name, display_name,
  version)` exposes the command-line options as properties and keeps a JSON
  file `<app_name>.cfg` in the data directory. `load()` reads it;
  `wallet_file`, `address_book_file` and `encrypted` report its values;
  `set_wallet_file(path)` (adds `.wallet` unless the path ends in `.wallet`
  or `.keys`) and `set_encrypted(flag)` write it back.
  `is_start_on_login_enabled(config_dir=None)` and
  `set_start_on_login_enabled(enable, config_dir=None, executable=None)`
  manage an XDG `autostart/<app_name>.desktop` entry.
- **`ipexwallet.logconfig`** — `build_logger_configuration(data_dir, app_name)`
  describes an INFO-level log written to `<app_name>.log` in the data
  directory; `configure_logging(data_dir, app_name)` applies it to the
  `ipexwallet` logger and returns that logger.
- **`ipexwallet.signals`** — `SignalHandler` turns SIGINT and SIGTERM into a
  quit notification: `connect(callback)` registers a callback, `install()`
  installs the handler and returns the replaced handlers, `emit_quit()` runs
  the callbacks.

## Example

```python
from ipexwallet.cli import CommandLineParser
from ipexwallet.currency import Currency
from ipexwallet.node import convert_payment_id, extract_payment_id

parser = CommandLineParser("/tmp/wallet-data", 8080)
options = parser.parse(["--testnet", "--add-peer", "10.0.0.1:8080"])
assert options.testnet and options.peers == ["10.0.0.1:8080"]

currency = Currency(decimal_places=8)
assert currency.parse_amount(currency.format_amount(123456789)) == 123456789

payment_id = "AB" * 32
assert extract_payment_id(convert_payment_id(payment_id)) == payment_id
```

## What it does not do

- There is no command to run and no graphical interface; the package is a
  library.
- It contains no blockchain node: `Node` is abstract, and `NodeAdapter`
  needs factories that build real RPC and in-process nodes.
- It does not open, create or store wallets, keys or address books, does
  not validate addresses and does not send transactions; `Settings` only
  records the paths of the wallet and address book files.