# mousebox

Building blocks for small 2D games, plus a command-line tool for the CHSE
archive format that bundles a game's assets into one file. The package uses
only the standard library.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## The archive tool

The package installs a command named `mousebox-arc` (the same tool runs as
`python -m mousebox.cli`).

Pack a directory into an archive:

```
mousebox-arc --input assets --pack
```

This walks `assets` recursively, in sorted order, and writes `assets.chse`
to the current directory. Files whose extension is listed with
`--compress-ext` are stored LZMA-compressed, and a line
`[Compressing file "..."]` is printed for each of them. Extensions are given
without the dot and separated by commas:

```
mousebox-arc --input assets --pack --compress-ext json,txt
```

Extract an archive into the current directory:

```
mousebox-arc --input assets.chse --extract
```

The archive's root directory is recreated under the current directory, with
every subdirectory and file inside it; existing files of the same name are
overwritten.

Options:

| Option                 | Meaning                                    |
|------------------------|--------------------------------------------|
| `-i`, `--input`        | File or directory to operate on (required) |
| `-c`, `--compress-ext` | Extensions to compress, split with `,`     |
| `-x`, `--extract`      | Extract the input archive                  |
| `-p`, `--pack`         | Pack the input directory                   |

If both `--extract` and `--pack` are given, only the extraction runs; if
neither is given, the command does nothing and exits with status 0.

The command exits with status 1 when the arguments are invalid (the message
and the help text go to standard error), when the input does not exist, when
a file is given to `--pack` or a directory to `--extract`, or when the
archive cannot be read or parsed.

## Using archives from Python

```python
from mousebox.archive import Archive, Directory, File

archive = Archive("assets")
textures = Directory.new(archive)
textures.name = "textures"
archive.root().add_subdirectory(textures)
textures.add_file(File("grass.png", b"...", False))
textures.add_file(File("level.json", b'{"w": 16}', True))

archive.save("assets.chse")

loaded = Archive.load("assets.chse")
level = loaded.root().get_file("textures/level.json")
print(level.data)
print(loaded.root().structure(0))
```

Every directory that is written must be registered with the archive, which
`Directory.new(archive)` does; the first registered directory is the root.
`Directory.get_file` and `Directory.get_folder` take slash-separated paths
relative to the directory and return `None` when nothing matches.

`Archive.to_bytes()` and `Archive.from_bytes()` work on in-memory data.
Malformed or truncated input, and archives that cannot be written (too many
entries, names containing NUL), raise `ArchiveError`.

The functions behind the command are importable from `mousebox.cli`:
`pack_archive(path, compress_extensions)`,
`pack_folder(archive, folder, path, compress_extensions)` and
`extract_folder(folder, destination)`.

## Other modules

- `mousebox.log` – levelled logging. `Logger(src, dest, level)` writes lines
  of the form `[src][TAG] message` to `dest` (standard error by default);
  the message is formatted with `str.format` and the extra arguments. With
  `Level.INFO < WARN < ERROR < DEBUG`, a warning, error or debug message is
  written only when the logger's level is at least that kind's level; info
  messages are always written. The `*_from` methods take the source tag per
  call. Module-level `info`, `warn`, `error`, `debug`, `set_level` and
  `set_src` act on a shared logger (`get_logger()`) tagged `MouseyBox` at
  level `DEBUG`.
- `mousebox.geometry` – `Vec2`, `Vec3`, `Vec4`; `Vec2.dist`; and
  `is_colliding` tests between `Line2D`, `Circle2D` and points (a point is on
  a segment within a tolerance of 0.1; a point is inside a circle only
  strictly).
- `mousebox.message` – a `MessageBoard` of `Channel` objects, each holding
  16 flag slots (`set_slot`, `clear_slot`, `get_slot`); slots outside 0–15
  are ignored, and `get_channel` raises `IndexError` for a missing channel.
- `mousebox.tree` – a `Tree` of `TreeNode` objects with ordered children and
  weak parent links.
- `mousebox.entity` – a fixed-size `EntityPool` handing out `Entity` objects.
  `new()` raises `RuntimeError` when the pool is exhausted; `free()` runs the
  entity's `on_free` callback, resets it and raises `ValueError` for an entity
  not in use or not from this pool. Entities in use are kept newest first and
  can be looked up with `get_by_id` and `get_next_tagged`. `update()` copies
  each entity's `x` and `y` onto its renderable's `rect` and then runs its
  `on_update` callback; `for_each` visits entities in use, `for_all` every
  entity.

## What this package does not do

There is no window, rendering, sprite, tile-map, text, audio, input or
main-loop support: an `Entity` holds a renderable only as an object with a
`rect` attribute, and nothing in the package draws it or plays sound. The
archive tool only packs and extracts; it does not list, add to or modify an
existing archive.