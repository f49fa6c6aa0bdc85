# audiolink

audiolink moves mono audio between a client and a server over TCP. Audio
travels in packets. Each packet is a fixed header followed by 32-bit float
samples. The package holds the wire format, a bounded sample queue, the
callbacks that move samples between a sound stream and a queue, a sender
that batches samples into packets, and a server that sends every packet it
receives back to the client.

## Wire format

Every packet starts with an 8-byte header. It holds two unsigned 32-bit
integers in network byte order:

| field         | meaning                               |
|---------------|---------------------------------------|
| `sample_rate` | sample rate in Hz (for example 44100) |
| `num_frames`  | number of float samples that follow   |

After the header come `num_frames` raw float32 samples, in the host's byte
order.

## Installing

```
pip install .
```

Install the `test` extra to run the test suite with pytest:

```
pip install .[test]
pytest
```

## Running the server

```
audiolink-server [--host HOST] [--port PORT]
```

By default the server listens on all interfaces (`0.0.0.0`) on port 42069.
It accepts a single client. Each complete packet it receives goes into a
queue of five buffers and is then sent back to the same client with a
sample rate of 44100 in its header. The server prints
`Processed full packet!` for every packet it handles. It stops on Ctrl+C or
when the client closes the connection.

## Library use

### `audiolink.protocol`

- `PacketHeader(sample_rate, num_frames)` is a frozen dataclass. Both fields
  must be ints that fit in an unsigned 32-bit integer. Otherwise it raises
  `TypeError` or `ValueError`.
  - `pack()` gives the 8 header bytes.
  - `PacketHeader.unpack(data)` parses exactly 8 bytes.
  - `payload_size` is the number of sample bytes that follow the header.
- `encode_samples(samples)` turns floats into raw float32 bytes.
- `decode_samples(data)` turns raw float32 bytes back into a list of floats.
  It raises `ValueError` if the length is not a multiple of the sample size.
- `HEADER_SIZE`, `SAMPLE_SIZE`, `DEFAULT_SAMPLE_RATE` (44100) and the
  `Buffer` alias (`list[float]`).

### `audiolink.bufferqueue`

`BufferQueue(capacity)` is a bounded, thread-safe FIFO for one producer and
one consumer.

- `push(item)` returns `False` and drops the item when the queue is full.
- `pop()` and `front()` raise `IndexError` when the queue is empty.
- `read_available()`, `write_available()`, `capacity` and `len()` report how
  full the queue is.

### `audiolink.audio`

- `record_callback(queue, samples, frame_count)` pushes `frame_count`
  samples into the queue. If `samples` is `None`, it pushes silence instead.
  It raises `ValueError` if fewer samples are supplied than `frame_count`. It
  returns how many samples were queued; samples that do not fit are dropped.
- `playback_callback(queue, frame_count)` returns a list of `frame_count`
  samples taken from the queue. When the queue runs dry, it pads the list
  with silence (`0.0`).

### `audiolink.transmitter`

`Transmitter(buffer_queue, running, sample_rate, buffer_size, server_address, server_port)`
is the sending side.

- `run()` connects to the server and drains samples from the queue.
- Every full batch of `buffer_size` samples goes out as one packet.
- It keeps running until the `threading.Event` `running` is cleared.
- It returns the number of packets sent.
- Connection and send failures raise `OSError`.
- A partial batch that is still pending when the loop stops is not sent.

### `audiolink.connection`

`Connection(connection_alive, client_socket, client_address, receive_queue, transmit_queue)`
is the server side of one client.

- `handle()` polls the socket until `connection_alive` is cleared.
- `handle_receive()` reassembles incoming packets and pushes each one, as a
  list of floats, to `receive_queue`. The last header received is kept in
  `receive_header`.
- `handle_send()` takes buffers from `transmit_queue` and sends them as
  packets, continuing any partial send. The `sending` property is true while
  a packet is partly sent.
- Socket errors and the peer closing the connection clear
  `connection_alive`.

### `audiolink.server`

- `run_server(running, host, port)` serves one client until `running` is
  cleared or the client goes away, and returns the number of packets
  processed.
- `main(argv=None)` is the entry point behind `audiolink-server`.

### Example: sending samples

```python
import threading
from audiolink.bufferqueue import BufferQueue
from audiolink.transmitter import Transmitter

queue = BufferQueue(1024)
running = threading.Event()
running.set()
transmitter = Transmitter(queue, running, 44100, 512, "127.0.0.1", 42069)
thread = threading.Thread(target=transmitter.run)
thread.start()
# push float samples into `queue` ...
running.clear()
thread.join()
```

## What it does not do

audiolink does not open sound devices. It does not capture from a
microphone or play through speakers. `record_callback` and
`playback_callback` only move samples between a queue and data that you
hand them. Connecting them to an audio stream is left to the caller.

There is no client command. Only the server has one. Sending is done from
Python with `Transmitter`. Nothing in the package receives the packets the
server sends back on the client side.