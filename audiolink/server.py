"""Audio relay server: receives packets from one client and sends them back."""

from __future__ import annotations

import argparse
import signal
import socket
import threading
import time

from .bufferqueue import BufferQueue
from .connection import Connection
from .protocol import Buffer

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 42069
QUEUE_CAPACITY = 5
_BACKLOG = 5
_ACCEPT_TIMEOUT = 0.1
_IDLE_SLEEP = 0.001


def _accept(
    listener: socket.socket, running: threading.Event
) -> tuple[socket.socket, object] | None:
    while running.is_set():
        try:
            return listener.accept()
        except socket.timeout:
            continue
    return None


def run_server(running: threading.Event, host: str, port: int) -> int:
    """Serve one client until ``running`` is cleared or the client goes away.

    Every packet received is queued for sending back to the client. Returns
    the number of packets processed.
    """
    processed = 0
    with socket.create_server((host, port), backlog=_BACKLOG) as listener:
        listener.settimeout(_ACCEPT_TIMEOUT)
        accepted = _accept(listener, running)
        if accepted is None:
            return processed
        client_socket, client_address = accepted

    with client_socket:
        client_socket.settimeout(None)
        receive_queue: BufferQueue[Buffer] = BufferQueue(QUEUE_CAPACITY)
        transmit_queue: BufferQueue[Buffer] = BufferQueue(QUEUE_CAPACITY)
        connection = Connection(
            running, client_socket, client_address, receive_queue, transmit_queue
        )
        client_thread = threading.Thread(target=connection.handle, daemon=True)
        client_thread.start()

        while running.is_set():
            if receive_queue.read_available():
                transmit_queue.push(receive_queue.pop())
                processed += 1
                print("Processed full packet!", flush=True)
            else:
                time.sleep(_IDLE_SLEEP)

        client_thread.join()
    return processed


def _port(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {text!r}") from None
    if not 0 <= value <= 0xFFFF:
        raise argparse.ArgumentTypeError(f"port out of range: {value}")
    return value


def main(argv: list[str] | None = None) -> int:
    """Run the relay server until interrupted."""
    parser = argparse.ArgumentParser(
        prog="audiolink-server",
        description="Relay audio packets back to a connected client.",
    )
    parser.add_argument("--host", default=DEFAULT_HOST, help="address to listen on")
    parser.add_argument("--port", type=_port, default=DEFAULT_PORT, help="port to listen on")
    args = parser.parse_args(argv)

    running = threading.Event()
    running.set()
    previous = signal.signal(signal.SIGINT, lambda _signum, _frame: running.clear())
    try:
        run_server(running, args.host, args.port)
    finally:
        signal.signal(signal.SIGINT, previous)
    return 0