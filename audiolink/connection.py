"""Server side handling of one client connection.

Incoming packets are reassembled into sample buffers and pushed to a receive
queue; buffers taken from a transmit queue are sent back as packets.
"""

from __future__ import annotations

import selectors
import socket
import threading
from typing import Any

from .bufferqueue import BufferQueue
from .protocol import (
    DEFAULT_SAMPLE_RATE,
    HEADER_SIZE,
    Buffer,
    PacketHeader,
    decode_samples,
    encode_samples,
)

_POLL_TIMEOUT = 0.1


class Connection:
    """Non-blocking packet exchange with a single connected client.

    ``connection_alive`` is cleared when the connection fails or the peer
    closes it; ``handle`` returns once it is cleared.
    """

    def __init__(
        self,
        connection_alive: threading.Event,
        client_socket: socket.socket,
        client_address: Any,
        receive_queue: BufferQueue[Buffer],
        transmit_queue: BufferQueue[Buffer],
    ) -> None:
        self._alive = connection_alive
        self._socket = client_socket
        self.client_address = client_address
        self._receive_queue = receive_queue
        self._transmit_queue = transmit_queue

        self.receive_header: PacketHeader | None = None
        self._receive_buffer = bytearray(HEADER_SIZE)
        self._received = 0
        self._header_received = False

        self._outgoing = memoryview(b"")
        self._send_new_packet = True

    @property
    def sending(self) -> bool:
        """Whether a packet is partly sent."""
        return not self._send_new_packet

    def handle(self) -> None:
        """Service the socket until the connection is no longer alive."""
        with selectors.DefaultSelector() as selector:
            selector.register(self._socket, selectors.EVENT_READ)
            while self._alive.is_set():
                events = selectors.EVENT_READ
                if self.sending or self._transmit_queue.read_available():
                    events |= selectors.EVENT_WRITE
                selector.modify(self._socket, events)
                try:
                    ready = selector.select(_POLL_TIMEOUT)
                except InterruptedError:
                    continue
                except OSError:
                    self._alive.clear()
                    return
                for _key, mask in ready:
                    if mask & selectors.EVENT_READ:
                        self.handle_receive()
                    if mask & selectors.EVENT_WRITE:
                        self.handle_send()

    def handle_receive(self) -> None:
        """Read what is available of the current header or payload."""
        view = memoryview(self._receive_buffer)[self._received:]
        try:
            count = self._socket.recv_into(view)
        except (BlockingIOError, InterruptedError):
            return
        except OSError:
            self._alive.clear()
            return
        finally:
            view.release()
        if count == 0:
            self._alive.clear()
            return

        self._received += count
        if self._received < len(self._receive_buffer):
            return

        if not self._header_received:
            header = PacketHeader.unpack(bytes(self._receive_buffer))
            self.receive_header = header
            self._header_received = True
            self._receive_buffer = bytearray(header.payload_size)
            self._received = 0
            if header.payload_size == 0:
                self._finish_packet()
        else:
            self._finish_packet()

    def _finish_packet(self) -> None:
        self._receive_queue.push(decode_samples(bytes(self._receive_buffer)))
        self._header_received = False
        self._receive_buffer = bytearray(HEADER_SIZE)
        self._received = 0

    def handle_send(self) -> None:
        """Start a new packet if one is queued, then send as much as the socket takes."""
        if self._send_new_packet:
            if not self._transmit_queue.read_available():
                return
            samples = self._transmit_queue.pop()
            header = PacketHeader(DEFAULT_SAMPLE_RATE, len(samples))
            self._outgoing = memoryview(header.pack() + encode_samples(samples))
            self._send_new_packet = False

        try:
            sent = self._socket.send(self._outgoing)
        except (BlockingIOError, InterruptedError):
            return
        except OSError:
            self._alive.clear()
            return
        self._outgoing = self._outgoing[sent:]
        if not self._outgoing:
            self._send_new_packet = True