from __future__ import annotations

import threading
import time
from collections import Counter

import pytest

from line_state.runtime.config import StateSettings
from line_state.state import ReadWriteLock, State


def wait_until(predicate, timeout: float = 2.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.001)
    return predicate()


def test_concurrent_notes_from_two_threads() -> None:
    state = State(settings=StateSettings())
    barrier = threading.Barrier(2)

    def add(note: str) -> None:
        barrier.wait()
        state.add_note(note)

    threads = [threading.Thread(target=add, args=(note,)) for note in ("a", "b")]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    notes = state.pop_for_redraw().notes
    assert sorted(notes) == ["a", "b"]


def test_pop_while_writing_loses_and_duplicates_nothing() -> None:
    state = State(settings=StateSettings())
    writers = 4
    per_writer = 500
    done = threading.Event()
    collected: list[str] = []

    def write(prefix: str) -> None:
        for index in range(per_writer):
            state.add_note(f"{prefix}-{index}")

    def render() -> None:
        while not done.is_set():
            collected.extend(state.pop_for_redraw().notes)
        collected.extend(state.pop_for_redraw().notes)

    renderer = threading.Thread(target=render)
    renderer.start()
    threads = [
        threading.Thread(target=write, args=(f"w{n}",)) for n in range(writers)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    done.set()
    renderer.join()

    counts = Counter(collected)
    assert len(counts) == writers * per_writer
    assert set(counts.values()) == {1}
    for n in range(writers):
        own = [note for note in collected if note.startswith(f"w{n}-")]
        assert own == [f"w{n}-{index}" for index in range(per_writer)]


def test_code_and_dot_never_observed_torn() -> None:
    state = State(settings=StateSettings())
    stop = threading.Event()
    torn: list[tuple[str, int]] = []

    def type_line() -> None:
        for length in range(1, 2000):
            state.set_code_and_dot("x" * length, length)
        stop.set()

    def observe() -> None:
        while not stop.is_set():
            code, dot = state.code_and_dot()
            if len(code) != dot:
                torn.append((code, dot))
            before = state.code_before_dot()
            if "x" * len(before) != before:
                torn.append((before, -1))

    observer = threading.Thread(target=observe)
    observer.start()
    type_line()
    observer.join()

    assert torn == []


def test_readers_share_the_lock() -> None:
    lock = ReadWriteLock()
    inside = threading.Barrier(3, timeout=2)

    def reader() -> None:
        with lock.read_locked():
            inside.wait()

    threads = [threading.Thread(target=reader) for _ in range(3)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert lock.readers == 0


def test_waiting_writer_blocks_new_readers() -> None:
    lock = ReadWriteLock()
    order: list[str] = []
    lock.acquire_read()

    def writer() -> None:
        with lock.write_locked():
            order.append("writer")

    def late_reader() -> None:
        with lock.read_locked():
            order.append("reader")

    writer_thread = threading.Thread(target=writer)
    writer_thread.start()
    assert wait_until(lambda: lock._writers_waiting == 1)

    reader_thread = threading.Thread(target=late_reader)
    reader_thread.start()
    time.sleep(0.05)
    assert order == []

    lock.release_read()
    writer_thread.join(timeout=2)
    reader_thread.join(timeout=2)

    assert order == ["writer", "reader"]
    assert not lock.write_held


def test_release_without_acquire_raises() -> None:
    lock = ReadWriteLock()

    with pytest.raises(RuntimeError):
        lock.release_read()
    with pytest.raises(RuntimeError):
        lock.release_write()
