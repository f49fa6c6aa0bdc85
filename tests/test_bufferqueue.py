import threading

import pytest

from audiolink.bufferqueue import BufferQueue


@pytest.mark.parametrize("capacity", [0, -1])
def test_rejects_non_positive_capacity(capacity):
    with pytest.raises(ValueError):
        BufferQueue(capacity)


def test_fifo_order():
    queue = BufferQueue(4)
    for item in (1, 2, 3):
        assert queue.push(item) is True
    assert [queue.pop(), queue.pop(), queue.pop()] == [1, 2, 3]


def test_push_when_full_drops_item():
    queue = BufferQueue(2)
    assert queue.push("a") is True
    assert queue.push("b") is True
    assert queue.push("c") is False
    assert queue.read_available() == 2
    assert queue.pop() == "a"
    assert queue.pop() == "b"


def test_pop_empty_raises():
    queue = BufferQueue(1)
    with pytest.raises(IndexError):
        queue.pop()


def test_front_empty_raises():
    queue = BufferQueue(1)
    with pytest.raises(IndexError):
        queue.front()


def test_front_does_not_remove():
    queue = BufferQueue(3)
    queue.push(0.5)
    queue.push(0.25)
    assert queue.front() == 0.5
    assert queue.read_available() == 2
    assert queue.pop() == 0.5
    assert queue.front() == 0.25


def test_read_and_write_available_sum_to_capacity():
    queue = BufferQueue(5)
    for count in range(5):
        assert queue.read_available() == count
        assert queue.read_available() + queue.write_available() == queue.capacity
        queue.push(count)
    assert queue.write_available() == 0


def test_len_matches_read_available():
    queue = BufferQueue(3)
    queue.push([0.0])
    queue.push([1.0])
    assert len(queue) == queue.read_available() == 2


def test_holds_buffers_as_items():
    queue = BufferQueue(2)
    buffer = [0.5, -0.5]
    queue.push(buffer)
    assert queue.pop() == [0.5, -0.5]


def test_producer_consumer_threads_preserve_order():
    queue = BufferQueue(8)
    items = list(range(2000))
    received = []

    def produce():
        for item in items:
            while not queue.push(item):
                pass

    def consume():
        while len(received) < len(items):
            if queue.read_available():
                received.append(queue.pop())

    producer = threading.Thread(target=produce, daemon=True)
    consumer = threading.Thread(target=consume, daemon=True)
    producer.start()
    consumer.start()
    producer.join(timeout=10)
    consumer.join(timeout=10)
    assert received == items
    assert queue.read_available() == 0
    assert queue.write_available() == 8