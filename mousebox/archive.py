"""Reading and writing CHSE archives: a tree of named directories and files."""

from __future__ import annotations

import lzma
import os
import struct
import weakref
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Dict, List, Optional, Tuple, Union

from mousebox import log

MAGIC = b"CHSE"
HEADER_SIZE = 0x28
DIR_NODE_SIZE = 0x08
FILE_NODE_SIZE = 0x10

NODE_FILE = 0
NODE_DIR = 1
NO_FILE_ID = 0xFFFF
MAX_U16 = 0xFFFF

_HEADER = struct.Struct("<4s9I")
_DIR_NODE = struct.Struct("<HHI")
_FILE_NODE = struct.Struct("<BBHIII")
_NODE_PREFIX = struct.Struct("<BBH")

_LZMA_FILTER_PRESET = 9 | lzma.PRESET_EXTREME

PathArg = Union[str, "os.PathLike[str]"]


class ArchiveError(Exception):
    """Raised when an archive cannot be read or written."""


def _parts(path: PathArg) -> Tuple[str, ...]:
    return PurePosixPath(os.fspath(path)).parts


@dataclass(eq=False)
class File:
    """A named blob of bytes, optionally stored compressed."""

    name: str = ""
    data: bytes = b""
    compressed: bool = False

    def __post_init__(self) -> None:
        self.data = bytes(self.data)

    @property
    def size(self) -> int:
        return len(self.data)


class Directory:
    """A named directory holding subdirectories and files in insertion order."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._parent: Optional[weakref.ref[Directory]] = None
        self.directories: List[Directory] = []
        self.files: List[File] = []

    def __repr__(self) -> str:
        return (
            f"Directory({self.name!r}, directories={len(self.directories)}, "
            f"files={len(self.files)})"
        )

    @property
    def parent(self) -> Optional[Directory]:
        return self._parent() if self._parent is not None else None

    def add_subdirectory(self, directory: Directory) -> None:
        directory._parent = weakref.ref(self)
        self.directories.append(directory)

    def add_file(self, file: File) -> None:
        self.files.append(file)

    def get_file(self, path: PathArg) -> Optional[File]:
        """Find a file by a slash-separated path relative to this directory."""
        parts = _parts(path)
        if not parts:
            return None
        head, rest = parts[0], parts[1:]

        if not rest:
            for file in self.files:
                if file.name == head:
                    return file

        found: Optional[File] = None
        for directory in self.directories:
            if directory.name == head:
                found = directory.get_file(PurePosixPath(*rest)) if rest else None
        return found

    def get_folder(self, path: PathArg) -> Optional[Directory]:
        """Find a subdirectory by a slash-separated path relative to this directory."""
        parts = _parts(path)
        if not parts:
            return None
        head, rest = parts[0], parts[1:]

        if not rest:
            for directory in self.directories:
                if directory.name == head:
                    return directory

        found: Optional[Directory] = None
        for directory in self.directories:
            if directory.name == head:
                found = directory.get_folder(PurePosixPath(*rest)) if rest else None
        return found

    def structure(self, level: int = 0) -> str:
        """An indented listing: the name, subdirectories, then files."""
        lines = ["  " * level + self.name + "\n"]
        for directory in self.directories:
            lines.append(directory.structure(level + 1))
        for file in self.files:
            lines.append("  " * (level + 1) + file.name + "\n")
        return "".join(lines)

    @staticmethod
    def new(archive: Archive) -> Directory:
        """Create an unnamed directory registered with an archive."""
        directory = Directory()
        archive.directories.append(directory)
        return directory


class _NameTable:
    def __init__(self) -> None:
        self._offsets: Dict[str, int] = {}
        self._buffer = bytearray()

    def offset(self, name: str) -> int:
        if name in self._offsets:
            return self._offsets[name]
        encoded = name.encode("utf-8")
        if b"\0" in encoded:
            raise ArchiveError(f"name {name!r} contains a NUL character")
        where = len(self._buffer)
        self._offsets[name] = where
        self._buffer += encoded + b"\0"
        return where

    def __bytes__(self) -> bytes:
        return bytes(self._buffer)


def _read_name(table: bytes, offset: int) -> str:
    if offset >= len(table):
        raise ArchiveError(f"name offset {offset} outside the name table")
    end = table.find(b"\0", offset)
    if end < 0:
        end = len(table)
    return table[offset:end].decode("utf-8", errors="replace")


def _compress(data: bytes) -> bytes:
    return lzma.compress(data, format=lzma.FORMAT_ALONE, preset=_LZMA_FILTER_PRESET)


def _decompress(data: bytes) -> bytes:
    try:
        return lzma.decompress(data, format=lzma.FORMAT_ALONE)
    except lzma.LZMAError as exc:
        raise ArchiveError(f"cannot decompress file data: {exc}") from exc


class Archive:
    """All directories of an archive; the first one is the root."""

    def __init__(self, rootname: Optional[str] = None) -> None:
        self.directories: List[Directory] = []
        if rootname is not None:
            self.directories.append(Directory(rootname))

    def root(self) -> Directory:
        if not self.directories:
            raise ArchiveError("archive has no directories")
        return self.directories[0]

    def _index_of(self, directory: Directory) -> int:
        for index, candidate in enumerate(self.directories):
            if candidate is directory:
                return index
        raise ArchiveError(
            f"directory {directory.name!r} is not registered with this archive"
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> Archive:
        """Parse an archive held in memory."""
        data = bytes(data)
        if len(data) < HEADER_SIZE:
            raise ArchiveError("data is too short for an archive header")
        (
            magic,
            _total_size,
            dir_count,
            dir_offset,
            _file_node_count,
            file_offset,
            _file_data_size,
            file_data_offset,
            strings_size,
            strings_offset,
        ) = _HEADER.unpack_from(data, 0)
        if magic != MAGIC:
            raise ArchiveError(f"bad magic {magic!r}")
        if strings_offset + strings_size > len(data):
            raise ArchiveError("name table runs past the end of the data")
        names = data[strings_offset : strings_offset + strings_size]

        archive = cls()
        archive.directories = [Directory() for _ in range(dir_count)]

        try:
            for d, directory in enumerate(archive.directories):
                first, count, name_offset = _DIR_NODE.unpack_from(
                    data, dir_offset + d * DIR_NODE_SIZE
                )
                directory.name = _read_name(names, name_offset)

                for f in range(count):
                    node_at = file_offset + (first + f) * FILE_NODE_SIZE
                    kind, compressed, _file_id, a, b, c = _FILE_NODE.unpack_from(
                        data, node_at
                    )
                    if kind == NODE_DIR:
                        if a >= dir_count:
                            raise ArchiveError(f"subdirectory index {a} out of range")
                        directory.add_subdirectory(archive.directories[a])
                        continue

                    size, offset, name_offset = a, b, c
                    start = file_data_offset + offset
                    if start + size > len(data):
                        raise ArchiveError("file data runs past the end of the data")
                    payload = data[start : start + size]
                    if compressed == 1:
                        payload = _decompress(payload)
                    directory.add_file(
                        File(_read_name(names, name_offset), payload, compressed == 1)
                    )
        except struct.error as exc:
            raise ArchiveError(f"truncated archive: {exc}") from exc

        return archive

    @classmethod
    def load(cls, path: PathArg) -> Archive:
        with open(path, "rb") as handle:
            return cls.from_bytes(handle.read())

    def to_bytes(self) -> bytes:
        """Serialise the archive."""
        dir_segment = bytearray()
        file_segment = bytearray()
        data_segment = bytearray()
        names = _NameTable()

        file_index = 0
        for directory in self.directories:
            entries = len(directory.files) + len(directory.directories)
            if entries > MAX_U16:
                raise ArchiveError(f"directory {directory.name!r} has too many entries")
            dir_segment += _DIR_NODE.pack(file_index, entries, names.offset(directory.name))

            for subdir in directory.directories:
                file_segment += _FILE_NODE.pack(
                    NODE_DIR,
                    0,
                    NO_FILE_ID,
                    self._index_of(subdir),
                    len(subdir.files) + len(subdir.directories),
                    names.offset(subdir.name),
                )
                file_index += 1

            for file in directory.files:
                if file_index > MAX_U16:
                    raise ArchiveError("archive has too many entries")
                payload = file.data
                if file.compressed:
                    payload = _compress(file.data)
                    log.debug(
                        "Compressed File {}, OG size is {} Compressed Size is {}",
                        file.name,
                        len(file.data),
                        len(payload),
                    )
                file_segment += _FILE_NODE.pack(
                    NODE_FILE,
                    1 if file.compressed else 0,
                    file_index,
                    len(payload),
                    len(data_segment),
                    names.offset(file.name),
                )
                data_segment += payload
                file_index += 1

        if file_index > MAX_U16 + 1:
            raise ArchiveError("archive has too many entries")

        name_segment = bytes(names)
        file_node_offset = HEADER_SIZE + len(dir_segment)
        data_offset = file_node_offset + len(file_segment)
        names_offset = data_offset + len(data_segment)
        total = names_offset + len(name_segment)

        header = _HEADER.pack(
            MAGIC,
            total,
            len(self.directories),
            HEADER_SIZE,
            file_index,
            file_node_offset,
            len(data_segment),
            data_offset,
            len(name_segment),
            names_offset,
        )
        return b"".join(
            (header, bytes(dir_segment), bytes(file_segment), bytes(data_segment), name_segment)
        )

    def save(self, path: PathArg) -> None:
        payload = self.to_bytes()
        with open(path, "wb") as handle:
            handle.write(payload)