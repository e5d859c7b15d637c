from __future__ import annotations

import os

import pytest

from log_facilities.core.io.local import LocalFileStore
from log_facilities.core.log_date import LogDate


@pytest.mark.asyncio
async def test_size_of_missing_file_is_zero(tmp_path) -> None:
    store = LocalFileStore()
    assert await store.size(str(tmp_path / "missing.log")) == 0


@pytest.mark.asyncio
async def test_make_directories(tmp_path) -> None:
    store = LocalFileStore()
    nested = tmp_path / "a" / "b"
    assert await store.make_directories(str(nested))
    assert nested.is_dir()
    # Already existing is fine.
    assert await store.make_directories(str(nested))

    blocker = tmp_path / "file.txt"
    blocker.write_text("x")
    assert not await store.make_directories(str(blocker / "logs"))


@pytest.mark.asyncio
async def test_append_and_positioned_write(tmp_path) -> None:
    store = LocalFileStore()
    path = str(tmp_path / "f.json")

    await store.append(path, "[]")
    await store.write(path, -1, '{"a":1}]')
    await store.write(path, -1, ',{"b":2}]')

    assert (tmp_path / "f.json").read_text(encoding="utf-8") == '[{"a":1},{"b":2}]'
    assert await store.size(path) == len('[{"a":1},{"b":2}]')


@pytest.mark.asyncio
async def test_write_clamps_position_and_creates_file(tmp_path) -> None:
    store = LocalFileStore()
    path = str(tmp_path / "new.txt")

    await store.write(path, 50, "abc")
    await store.write(path, -10, "X")
    assert (tmp_path / "new.txt").read_text(encoding="utf-8") == "Xbc"


@pytest.mark.asyncio
async def test_write_counts_bytes_not_characters(tmp_path) -> None:
    store = LocalFileStore()
    path = str(tmp_path / "u.json")

    await store.append(path, '["é"]')
    await store.write(path, -1, ',"ü"]')
    assert (tmp_path / "u.json").read_text(encoding="utf-8") == '["é","ü"]'


@pytest.mark.asyncio
async def test_ensure_exists_and_delete(tmp_path) -> None:
    store = LocalFileStore()
    path = tmp_path / "deep" / "dir" / "2025-01-01.log"

    await store.ensure_exists(str(path))
    assert path.exists() and path.read_bytes() == b""

    path.write_text("keep")
    await store.ensure_exists(str(path))
    assert path.read_text() == "keep"

    await store.delete(str(path))
    assert not path.exists()
    # Deleting again is not an error.
    await store.delete(str(path))


@pytest.mark.asyncio
async def test_list_files_is_recursive_and_canonical(tmp_path) -> None:
    store = LocalFileStore()
    (tmp_path / "sub").mkdir()
    (tmp_path / "2025-01-01.log").write_text("a")
    (tmp_path / "notes.txt").write_text("b")
    (tmp_path / "sub" / "2025-01-02.json").write_text("[]")

    found = await store.list_files(str(tmp_path / "sub" / ".."))

    assert sorted(found) == sorted(
        os.path.realpath(p)
        for p in (tmp_path / "2025-01-01.log", tmp_path / "notes.txt", tmp_path / "sub" / "2025-01-02.json")
    )
    assert await store.list_files(str(tmp_path / "missing")) == []


@pytest.mark.asyncio
async def test_list_files_after_filters_by_file_name_date(tmp_path) -> None:
    store = LocalFileStore()
    for name in ("2023-08-09.log", "2023-08-10.log", "2023-08-11.log", "2023-09-01.json", "app.log", "2023-8-12.log"):
        (tmp_path / name).write_text("")

    found = await store.list_files_after(str(tmp_path), LogDate(2023, 8, 10))

    assert sorted(os.path.basename(p) for p in found) == ["2023-08-11.log", "2023-09-01.json"]


@pytest.mark.asyncio
async def test_lone_surrogates_are_written_escaped(tmp_path) -> None:
    store = LocalFileStore()
    path = str(tmp_path / "s.log")

    await store.append(path, os.fsdecode(b"a\xffb"))
    await store.write(path, -1, "\udcfe")

    assert (tmp_path / "s.log").read_bytes() == b"a\\udcff\\udcfe"
