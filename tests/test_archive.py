import struct

import pytest

from mousebox.archive import (
    HEADER_SIZE,
    Archive,
    ArchiveError,
    Directory,
    File,
)


def _sample_archive():
    archive = Archive("game")
    root = archive.root()
    root.add_file(File("readme.txt", b"hello world"))
    sprites = Directory.new(archive)
    sprites.name = "sprites"
    root.add_subdirectory(sprites)
    sprites.add_file(File("mouse.png", bytes(range(200))))
    sounds = Directory.new(archive)
    sounds.name = "sounds"
    sprites.add_subdirectory(sounds)
    sounds.add_file(File("squeak.wav", b"\x00\x01" * 50, compressed=True))
    return archive


def test_header_starts_with_magic_and_fixed_dir_offset():
    blob = _sample_archive().to_bytes()
    assert blob[:4] == b"CHSE"
    fields = struct.unpack_from("<9I", blob, 4)
    assert fields[0] == len(blob)
    assert fields[1] == 3
    assert fields[2] == 0x28


def test_header_segment_offsets_are_consistent():
    blob = _sample_archive().to_bytes()
    (total, dirs, dir_off, nodes, node_off, data_size, data_off,
     str_size, str_off) = struct.unpack_from("<9I", blob, 4)
    assert node_off == dir_off + dirs * 8
    assert data_off == node_off + nodes * 16
    assert str_off == data_off + data_size
    assert total == str_off + str_size


def test_round_trip_preserves_tree():
    archive = Archive.from_bytes(_sample_archive().to_bytes())
    root = archive.root()
    assert root.name == "game"
    assert [d.name for d in root.directories] == ["sprites"]
    assert root.get_file("readme.txt").data == b"hello world"
    assert root.get_file("sprites/mouse.png").data == bytes(range(200))
    assert root.get_file("sprites/sounds/squeak.wav").data == b"\x00\x01" * 50


def test_compressed_file_round_trip_keeps_flag():
    archive = Archive.from_bytes(_sample_archive().to_bytes())
    squeak = archive.root().get_file("sprites/sounds/squeak.wav")
    assert squeak.compressed is True
    assert archive.root().get_file("readme.txt").compressed is False


def test_file_node_layout_for_single_file():
    archive = Archive("root")
    archive.root().add_file(File("a", b"xy"))
    blob = archive.to_bytes()
    node_off = struct.unpack_from("<I", blob, 20)[0]
    kind, compressed, file_id, size, offset, name_off = struct.unpack_from(
        "<BBHIII", blob, node_off
    )
    assert (kind, compressed, file_id, size, offset) == (0, 0, 0, 2, 0)
    str_off = struct.unpack_from("<I", blob, 36)[0]
    assert blob[str_off:] == b"root\0a\0"
    assert blob[str_off + name_off:str_off + name_off + 1] == b"a"


def test_subdirectory_node_marks_directory():
    archive = Archive("root")
    sub = Directory.new(archive)
    sub.name = "sub"
    archive.root().add_subdirectory(sub)
    blob = archive.to_bytes()
    node_off = struct.unpack_from("<I", blob, 20)[0]
    kind, flag, file_id, index, count, _ = struct.unpack_from("<BBHIII", blob, node_off)
    assert (kind, flag, file_id, index, count) == (1, 0, 0xFFFF, 1, 0)


def test_names_are_shared_in_name_table():
    archive = Archive("root")
    archive.root().add_file(File("same", b"1"))
    sub = Directory.new(archive)
    sub.name = "dir"
    archive.root().add_subdirectory(sub)
    sub.add_file(File("same", b"2"))
    blob = archive.to_bytes()
    str_off = struct.unpack_from("<I", blob, 36)[0]
    assert blob[str_off:].count(b"same\0") == 1
    loaded = Archive.from_bytes(blob).root()
    assert loaded.get_file("same").data == b"1"
    assert loaded.get_file("dir/same").data == b"2"


def test_subdirectories_get_parent_on_load():
    archive = Archive.from_bytes(_sample_archive().to_bytes())
    sprites = archive.root().get_folder("sprites")
    assert sprites.parent is archive.root()
    assert archive.root().get_folder("sprites/sounds").parent is sprites


def test_get_file_missing_and_empty_paths():
    root = _sample_archive().root()
    assert root.get_file("") is None
    assert root.get_file("nothing.bin") is None
    assert root.get_file("sprites") is None
    assert root.get_file("sprites/missing.png") is None


def test_get_folder_finds_nested_and_rejects_files():
    root = _sample_archive().root()
    assert root.get_folder("sprites/sounds").name == "sounds"
    assert root.get_folder("readme.txt") is None
    assert root.get_folder("") is None


def test_structure_lists_dirs_before_files():
    root = _sample_archive().root()
    assert root.structure() == (
        "game\n"
        "  sprites\n"
        "    sounds\n"
        "      squeak.wav\n"
        "    mouse.png\n"
        "  readme.txt\n"
    )


def test_save_and_load_file(tmp_path):
    path = tmp_path / "out.chse"
    original = _sample_archive()
    original.save(path)
    assert path.read_bytes() == original.to_bytes()
    loaded = Archive.load(path)
    assert loaded.root().get_file("sprites/mouse.png").size == 200


def test_unregistered_subdirectory_is_rejected():
    archive = Archive("root")
    archive.root().add_subdirectory(Directory("loose"))
    with pytest.raises(ArchiveError):
        archive.to_bytes()


def test_bad_magic_is_rejected():
    blob = bytearray(_sample_archive().to_bytes())
    blob[:4] = b"NOPE"
    with pytest.raises(ArchiveError):
        Archive.from_bytes(bytes(blob))


def test_short_data_is_rejected():
    with pytest.raises(ArchiveError):
        Archive.from_bytes(b"CHSE")


def test_truncated_data_is_rejected():
    blob = _sample_archive().to_bytes()
    with pytest.raises(ArchiveError):
        Archive.from_bytes(blob[: HEADER_SIZE + 4])


def test_empty_archive_has_no_root():
    with pytest.raises(ArchiveError):
        Archive().root()


def test_name_with_nul_is_rejected():
    archive = Archive("root")
    archive.root().add_file(File("bad\0name", b""))
    with pytest.raises(ArchiveError):
        archive.to_bytes()


def test_file_copies_data():
    buffer = bytearray(b"abc")
    file = File("f", buffer)
    buffer[0] = ord("z")
    assert file.data == b"abc"
    assert file.size == 3