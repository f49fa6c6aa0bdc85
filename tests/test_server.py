import socket
import threading
import time

import pytest

from audiolink.protocol import (
    HEADER_SIZE,
    PacketHeader,
    decode_samples,
    encode_samples,
)
from audiolink.server import main, run_server


def _recv_exact(sock, size):
    data = bytearray()
    while len(data) < size:
        chunk = sock.recv(size - len(data))
        if not chunk:
            raise EOFError("connection closed early")
        data.extend(chunk)
    return bytes(data)


def _free_port():
    with socket.socket() as probe:
        probe.bind(("127.0.0.1", 0))
        return probe.getsockname()[1]


def _connect(port, timeout=5.0):
    deadline = time.monotonic() + timeout
    while True:
        try:
            return socket.create_connection(("127.0.0.1", port), timeout=timeout)
        except ConnectionRefusedError:
            if time.monotonic() > deadline:
                raise
            time.sleep(0.01)


def _watchdog(running, timed_out, seconds=5.0):
    """Clear ``running`` after ``seconds`` so a stuck server cannot hang the test."""

    def guard():
        if not stop.wait(seconds):
            timed_out.set()
            running.clear()

    stop = threading.Event()
    thread = threading.Thread(target=guard, daemon=True)
    thread.start()
    return stop


def test_echoes_packet_back_to_client(capsys):
    port = _free_port()
    running = threading.Event()
    running.set()
    result = {}

    def serve():
        result["processed"] = run_server(running, "127.0.0.1", port)

    thread = threading.Thread(target=serve, daemon=True)
    thread.start()

    samples = [0.5, -0.25, 0.75, -1.0]
    with _connect(port) as client:
        client.sendall(PacketHeader(8000, len(samples)).pack() + encode_samples(samples))
        header = PacketHeader.unpack(_recv_exact(client, HEADER_SIZE))
        echoed = decode_samples(_recv_exact(client, header.payload_size))

    thread.join(5)
    assert not thread.is_alive()
    assert echoed == samples
    assert header == PacketHeader(44100, len(samples))
    assert result["processed"] == 1
    assert "Processed full packet!" in capsys.readouterr().out


def test_client_disconnect_stops_server():
    port = _free_port()
    running = threading.Event()
    running.set()
    timed_out = threading.Event()

    def connect_and_close():
        client = _connect(port)
        client.close()

    client_thread = threading.Thread(target=connect_and_close, daemon=True)
    client_thread.start()

    stop_guard = _watchdog(running, timed_out)
    processed = run_server(running, "127.0.0.1", port)
    stop_guard.set()
    client_thread.join(5)

    assert processed == 0
    assert not timed_out.is_set()
    assert not running.is_set()


def test_returns_immediately_when_not_running():
    running = threading.Event()
    assert run_server(running, "127.0.0.1", _free_port()) == 0


def test_stops_waiting_for_client_when_cleared():
    port = _free_port()
    running = threading.Event()
    running.set()

    timer = threading.Timer(0.05, running.clear)
    timer.start()
    started = time.monotonic()
    processed = run_server(running, "127.0.0.1", port)
    elapsed = time.monotonic() - started
    timer.join()

    assert processed == 0
    assert elapsed < 5.0


@pytest.mark.parametrize("port", ["notaport", "70000", "-1"])
def test_main_rejects_bad_port(port):
    with pytest.raises(SystemExit) as excinfo:
        main(["--port", port])
    assert excinfo.value.code == 2