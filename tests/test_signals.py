import signal

from ipexwallet.signals import SignalHandler


def test_emit_quit_runs_callbacks_in_order():
    handler = SignalHandler()
    calls = []
    handler.connect(lambda: calls.append("first"))
    handler.connect(lambda: calls.append("second"))
    handler.emit_quit()
    assert calls == ["first", "second"]


def test_emit_without_callbacks_is_harmless():
    handler = SignalHandler()
    calls = []
    handler.emit_quit()
    handler.connect(lambda: calls.append(1))
    handler.emit_quit()
    assert calls == [1]


def test_install_routes_signal_to_callbacks():
    handler = SignalHandler(signals=(signal.SIGINT,))
    calls = []
    handler.connect(lambda: calls.append(True))
    previous = handler.install()
    try:
        assert signal.SIGINT in previous
        signal.raise_signal(signal.SIGINT)
        assert calls == [True]
    finally:
        for sig, old in previous.items():
            signal.signal(sig, old)


def test_install_returns_previous_handlers():
    handler = SignalHandler(signals=(signal.SIGINT,))
    before = signal.getsignal(signal.SIGINT)
    previous = handler.install()
    try:
        assert previous[signal.SIGINT] == before
        assert signal.getsignal(signal.SIGINT) != before
    finally:
        signal.signal(signal.SIGINT, before)