import io

import pytest

from cassobee.fixed_buffer import FixedBuffer


def test_round_trip():
    buf = FixedBuffer(32)
    assert buf.write(b"payload") == len(b"payload")
    assert buf.read(32) == b"payload"
    assert buf.empty()


def test_write_truncates_at_capacity():
    buf = FixedBuffer(4)
    assert buf.write(b"abcdef") == 4
    assert buf.free_space() == 0
    assert buf.write(b"z") == 0
    assert buf.read(10) == b"abcd"


def test_partial_reads_are_in_order():
    buf = FixedBuffer(10)
    buf.write(b"abcdef")
    assert buf.read(2) == b"ab"
    assert len(buf) == 4
    assert buf.read(4) == b"cdef"


def test_read_into_stream():
    buf = FixedBuffer(10)
    buf.write(b"logline")
    stream = io.BytesIO()
    assert buf.read_into(stream, 100) == len(b"logline")
    assert stream.getvalue() == b"logline"
    assert buf.read_into(stream, 5) == 0


def test_reset_restores_free_space():
    buf = FixedBuffer(8)
    buf.write(b"abc")
    buf.reset()
    assert buf.empty()
    assert buf.free_space() == buf.capacity


def test_invalid_capacity():
    with pytest.raises(ValueError):
        FixedBuffer(-1)