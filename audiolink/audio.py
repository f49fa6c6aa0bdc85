"""Audio stream callbacks that move samples between a sound device and queues.

``record_callback`` is invoked each time the input device fills a buffer;
``playback_callback`` each time the output device needs one.
"""

from __future__ import annotations

from collections.abc import Iterable
from itertools import islice, repeat

from .bufferqueue import BufferQueue

SILENCE = 0.0


def _check_frame_count(frame_count: int) -> None:
    if frame_count < 0:
        raise ValueError(f"frame_count must not be negative, got {frame_count}")


def record_callback(
    queue: BufferQueue[float], samples: Iterable[float] | None, frame_count: int
) -> int:
    """Push ``frame_count`` recorded samples into ``queue``.

    When the device delivered no input, silence is pushed instead. Samples
    that do not fit are dropped. Returns how many samples were queued.
    """
    _check_frame_count(frame_count)
    if samples is None:
        frames = list(repeat(SILENCE, frame_count))
    else:
        frames = list(islice(samples, frame_count))
        if len(frames) < frame_count:
            raise ValueError(
                f"expected {frame_count} input samples, got {len(frames)}"
            )
    return sum(queue.push(sample) for sample in frames)


def playback_callback(queue: BufferQueue[float], frame_count: int) -> list[float]:
    """Return ``frame_count`` samples for output, padding with silence when the queue runs dry."""
    _check_frame_count(frame_count)
    output = []
    for _ in range(frame_count):
        output.append(queue.pop() if queue.read_available() else SILENCE)
    return output