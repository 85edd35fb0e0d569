import threading

import pytest

from cassobee.lr_map import LRMap


def test_emplace_and_lookup():
    m = LRMap()
    m.emplace(0, 1)
    m.emplace(1, 2)
    m.emplace(5, 6)
    assert m.empty() is False
    assert m[1] == 2
    assert m[5] == 6
    assert m.find(0) == 1


def test_emplace_does_not_overwrite():
    m = LRMap()
    m.emplace("a", "first")
    m.emplace("a", "second")
    assert m["a"] == "first"


def test_missing_key():
    m = LRMap()
    assert m.find("nope") is None
    with pytest.raises(KeyError):
        m["nope"]
    assert m.count("nope") == 0
    assert ("nope" in m) is False


def test_contains_and_count():
    m = LRMap()
    m.emplace("k", "v")
    assert "k" in m
    assert m.count("k") == 1


def test_erase_and_clear():
    m = LRMap()
    for key in range(4):
        m.emplace(key, key)
    m.erase(2)
    assert 2 not in m
    assert len(m) == 3
    m.erase(99)
    assert len(m) == 3
    m.clear()
    assert m.empty() is True


def test_concurrent_emplace():
    m = LRMap()
    per_thread = 50

    def work(base):
        for i in range(per_thread):
            m.emplace(base + i, i)

    threads = [threading.Thread(target=work, args=(n * per_thread,)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert len(m) == 4 * per_thread
    assert all(key in m for key in range(4 * per_thread))