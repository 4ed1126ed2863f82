"""Command-line tool that packs folders into CHSE archives and extracts them."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import AbstractSet, Iterable, Optional, Sequence, Union

from mousebox.archive import Archive, ArchiveError, Directory, File

ARCHIVE_SUFFIX = ".chse"
PROG = "MouseyBoxArcTools"

PathArg = Union[str, "os.PathLike[str]"]


class _UsageError(Exception):
    """Raised by the argument parser instead of exiting."""


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise _UsageError(message)


def _build_parser() -> _Parser:
    parser = _Parser(prog=PROG)
    parser.add_argument("-i", "--input", required=True, help="File/Directory to operate on")
    parser.add_argument(
        "-c", "--compress-ext", help="File extensions to compress, split with ','"
    )
    parser.add_argument("-x", "--extract", action="store_true", help="Extract input archive")
    parser.add_argument("-p", "--pack", action="store_true", help="Pack input folder")
    return parser


def _extension(path: Path) -> Optional[str]:
    suffix = path.suffix
    return suffix[1:] if suffix else None


def extract_folder(folder: Directory, destination: PathArg) -> Path:
    """Write a directory and everything below it under ``destination``.

    Returns the path of the directory that was created.
    """
    target = Path(destination) / folder.name
    target.mkdir(exist_ok=True)

    for file in folder.files:
        (target / file.name).write_bytes(file.data)

    for subdir in folder.directories:
        extract_folder(subdir, target)

    return target


def pack_folder(
    archive: Archive,
    folder: Directory,
    path: PathArg,
    compress_extensions: AbstractSet[str] = frozenset(),
) -> None:
    """Add the contents of the directory at ``path`` to ``folder``.

    Subdirectories are registered with ``archive``; files whose extension is
    in ``compress_extensions`` are marked for compression.
    """
    for entry in sorted(Path(path).iterdir()):
        if entry.is_dir():
            subdir = Directory.new(archive)
            subdir.name = entry.name
            folder.add_subdirectory(subdir)
            pack_folder(archive, subdir, entry, compress_extensions)
            continue

        file = File(name=entry.name, data=entry.read_bytes())
        if _extension(entry) in compress_extensions:
            print(f'[Compressing file "{entry}"]')
            file.compressed = True
        folder.add_file(file)


def pack_archive(
    path: PathArg, compress_extensions: Iterable[str] = ()
) -> Path:
    """Pack a directory into ``<name>.chse`` in the current directory.

    Returns the path of the written archive.
    """
    source = Path(path).resolve()
    archive = Archive(source.name)
    pack_folder(archive, archive.root(), source, frozenset(compress_extensions))

    output = Path.cwd() / (source.name + ARCHIVE_SUFFIX)
    archive.save(output)
    return output


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
    except _UsageError as exc:
        print(exc, file=sys.stderr)
        parser.print_help(sys.stderr)
        return 1

    path = Path(args.input)

    compress_extensions: set[str] = set()
    if args.compress_ext is not None:
        compress_extensions.update(args.compress_ext.split(","))

    if not path.exists():
        print(f"Couldn't find path {path}", file=sys.stderr)
        return 1

    if args.extract:
        if path.is_dir():
            print(f"{path} is a directory", file=sys.stderr)
            return 1
        try:
            archive = Archive.load(path)
        except (ArchiveError, OSError):
            print(f"Couldn't parse file {path}", file=sys.stderr)
            return 1
        extract_folder(archive.root(), Path.cwd())

    elif args.pack:
        if not path.is_dir():
            print(f"{path} is not a directory", file=sys.stderr)
            return 1
        pack_archive(path, compress_extensions)

    return 0


if __name__ == "__main__":
    sys.exit(main())