from pathlib import Path

from tasklist.state import codec
from tasklist.state.tasks import TaskStore


def test_save_and_reload_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "tasks.txt"
    store = TaskStore()
    store.add("Write report", 4)
    store.add("Buy milk", 2)
    store.add("Call mom")
    store.mark_complete(2)
    store.delete(1)
    store.undo_delete()

    assert codec.save_store(store, path) == 3

    reloaded = TaskStore()
    report = codec.load_store(reloaded, path)

    assert report.loaded == 3
    assert report.skipped == 0
    assert list(reloaded.list_all()) == list(store.list_all())
    assert reloaded.next_id == 4


def test_file_format(tmp_path: Path) -> None:
    path = tmp_path / "tasks.txt"
    store = TaskStore()
    store.add("first", 3)
    store.add("second", 1)
    store.mark_complete(2)

    codec.save_store(store, path)

    assert path.read_text(encoding="utf-8") == "1|first|3|0\n2|second|1|1\n"


def test_encode_replaces_delimiter() -> None:
    store = TaskStore()
    store.add("a|b", 2)
    assert codec.encode_store(store) == ["1|a b|2|0"]


def test_malformed_lines_are_skipped(tmp_path: Path) -> None:
    path = tmp_path / "tasks.txt"
    path.write_text(
        "\n".join(
            [
                "1|ok|2|0",
                "not a task",
                "2|missing|3",
                "",
                "x|bad id|1|0",
                "3|bad prio|high|0",
                "4|last|5|1",
                "1|duplicate|1|0",
            ]
        )
        + "\n",
        encoding="utf-8",
    )

    store = TaskStore()
    report = codec.load_store(store, path)

    assert report.loaded == 2
    assert report.skipped == 5
    assert [(t.id, t.description) for t in store.list_all()] == [(1, "ok"), (4, "last")]
    assert store.search(4).completed is True
    assert store.next_id == 5


def test_missing_file_loads_nothing(tmp_path: Path) -> None:
    store = TaskStore()
    report = codec.load_store(store, tmp_path / "absent.txt")
    assert (report.loaded, report.skipped) == (0, 0)
    assert len(store) == 0


def test_decode_nonzero_flag_means_completed() -> None:
    task = codec.decode_task("7|desc|2|5")
    assert task is not None
    assert task.completed is True
    assert codec.decode_task("0|zero id|1|0") is None


def test_write_report(tmp_path: Path) -> None:
    path = tmp_path / "out" / "output.txt"
    store = TaskStore()
    store.add("Buy milk", 2)
    store.add("Call mom")
    store.mark_complete(1)

    assert codec.write_report(store, path) == 2
    assert path.read_text(encoding="utf-8").splitlines() == [
        "[✓] 1 - Buy milk (P:2)",
        "[ ] 2 - Call mom (P:1)",
    ]
