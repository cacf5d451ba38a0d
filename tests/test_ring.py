import pytest

from glance.ring import RingBuffer, RingEntry


def test_under_capacity():
    ring = RingBuffer(5)
    ring.push(1, "a", False)
    ring.push(2, "b", True)
    ring.push(3, "c", False)
    assert ring.entries() == [
        RingEntry(1, "a", False),
        RingEntry(2, "b", True),
        RingEntry(3, "c", False),
    ]


def test_exact_capacity():
    ring = RingBuffer(3)
    ring.push(1, "a", False)
    ring.push(2, "b", True)
    ring.push(3, "c", False)
    assert ring.entries() == [
        RingEntry(1, "a", False),
        RingEntry(2, "b", True),
        RingEntry(3, "c", False),
    ]


def test_evict_unmatched():
    ring = RingBuffer(3)
    ring.push(1, "a", False)
    ring.push(2, "b", True)
    ring.push(3, "c", False)
    evicted = ring.push(4, "d", False)
    assert evicted == RingEntry(1, "a", False)
    assert ring.entries() == [
        RingEntry(2, "b", True),
        RingEntry(3, "c", False),
        RingEntry(4, "d", False),
    ]


def test_evict_matched():
    ring = RingBuffer(2)
    ring.push(1, "ERROR", True)
    ring.push(2, "ok", False)
    evicted = ring.push(3, "new", False)
    assert evicted == RingEntry(1, "ERROR", True)
    assert evicted.matched is True


def test_wrap_around_twice():
    ring = RingBuffer(2)
    ring.push(1, "a", True)
    ring.push(2, "b", False)
    ring.push(3, "c", False)
    ring.push(4, "d", True)
    ring.push(5, "e", False)
    assert ring.entries() == [RingEntry(4, "d", True), RingEntry(5, "e", False)]


def test_empty():
    assert RingBuffer(5).entries() == []


def test_size_zero():
    ring = RingBuffer(0)
    assert ring.entries() == []
    assert ring.push(1, "a", True) == RingEntry(1, "a", True)
    assert ring.entries() == []


def test_no_eviction_before_full():
    ring = RingBuffer(3)
    assert ring.push(1, "a", False) is None
    assert ring.push(2, "b", False) is None
    assert ring.push(3, "c", False) is None
    assert ring.push(4, "d", False) == RingEntry(1, "a", False)


def test_length_never_exceeds_capacity():
    ring = RingBuffer(4)
    for num in range(1, 20):
        ring.push(num, str(num), False)
        assert len(ring) == min(num, 4)
    assert [e.num for e in ring.entries()] == [16, 17, 18, 19]


def test_negative_capacity_rejected():
    with pytest.raises(ValueError):
        RingBuffer(-1)