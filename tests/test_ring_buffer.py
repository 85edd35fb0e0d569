import io

import pytest

from cassobee.ring_buffer import RingBuffer


def test_write_then_read_round_trip():
    buf = RingBuffer(16)
    assert buf.write(b"hello") == len(b"hello")
    assert len(buf) == len(b"hello")
    assert buf.read(100) == b"hello"
    assert buf.empty()


def test_write_does_not_overwrite_when_full():
    buf = RingBuffer(4)
    assert buf.write(b"abcdef") == 4
    assert buf.full()
    assert buf.free_space() == 0
    assert buf.write(b"x") == 0
    assert buf.read(4) == b"abcd"


def test_wraparound_preserves_order():
    buf = RingBuffer(8)
    buf.write(b"abcdef")
    assert buf.read(5) == b"abcde"
    payload = b"ghijklm"
    free_before = buf.free_space()
    written = buf.write(payload)
    assert written == min(len(payload), free_before)
    assert buf.read(len(buf)) == b"f" + payload[:written]


def test_partial_read_leaves_rest():
    buf = RingBuffer(10)
    buf.write(b"0123456789")
    assert buf.read(3) == b"012"
    assert len(buf) == 7
    assert buf.read(7) == b"3456789"


def test_read_into_stream():
    buf = RingBuffer(6)
    buf.write(b"abcd")
    buf.read(3)
    buf.write(b"efgh")
    stream = io.BytesIO()
    moved = buf.read_into(stream, 100)
    assert stream.getvalue() == b"defgh"
    assert moved == len(b"defgh")
    assert buf.empty()


def test_reset_clears_content():
    buf = RingBuffer(5)
    buf.write(b"abc")
    buf.reset()
    assert buf.empty()
    assert buf.free_space() == buf.capacity
    assert buf.read(3) == b""


def test_invalid_capacity():
    with pytest.raises(ValueError):
        RingBuffer(0)


def test_text_is_rejected():
    buf = RingBuffer(8)
    with pytest.raises(TypeError):
        buf.write("text")