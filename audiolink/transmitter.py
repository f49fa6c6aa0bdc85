"""Client side sender that batches queued samples into packets for the server."""

from __future__ import annotations

import socket
import threading
import time

from .bufferqueue import BufferQueue
from .protocol import PacketHeader, encode_samples

_IDLE_SLEEP = 0.001


class Transmitter:
    """Drains samples from a queue, batches them and sends them to the server.

    Each full batch of ``buffer_size`` samples goes out as one packet. A
    partial batch left over when ``running`` is cleared is not sent.
    """

    def __init__(
        self,
        buffer_queue: BufferQueue[float],
        running: threading.Event,
        sample_rate: int,
        buffer_size: int,
        server_address: str,
        server_port: int,
    ) -> None:
        if buffer_size <= 0:
            raise ValueError(f"buffer_size must be positive, got {buffer_size}")
        if not 0 <= server_port <= 0xFFFF:
            raise ValueError(f"server_port out of range: {server_port}")
        self._queue = buffer_queue
        self._running = running
        self.sample_rate = sample_rate
        self.buffer_size = buffer_size
        self.server_address = server_address
        self.server_port = server_port
        # The header never changes, so it is built once.
        self._header = PacketHeader(sample_rate, buffer_size).pack()

    def run(self) -> int:
        """Connect and transmit until ``running`` is cleared.

        Returns the number of packets sent. Connection and send failures
        raise ``OSError``; the socket is closed either way.
        """
        packets_sent = 0
        batch: list[float] = []
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            sock.connect((self.server_address, self.server_port))
            while self._running.is_set():
                if len(batch) < self.buffer_size and self._queue.read_available():
                    while len(batch) < self.buffer_size and self._queue.read_available():
                        batch.append(self._queue.pop())
                elif len(batch) == self.buffer_size:
                    sock.sendall(self._header + encode_samples(batch))
                    packets_sent += 1
                    batch.clear()
                else:
                    time.sleep(_IDLE_SLEEP)
        return packets_sent