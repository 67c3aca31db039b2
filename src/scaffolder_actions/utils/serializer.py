"""Directory content serialization for publish actions.

This module snapshots a workspace directory into memory so it can be pushed to
a remote repository. Every regular file becomes a SerializedFile carrying its
bytes and executable bit; dangling symbolic links are kept as links whose
content is the raw link target.

Key Components:
    DirectorySerializer: Walks a tree under glob patterns, filters the entries
        and reads them with bounded concurrency.
    serialize_directory_contents: Convenience wrapper using a default serializer.
    is_executable: Execute-bit check on a file mode.

Selection:
    Patterns are globs relative to the source directory: ``*.txt`` matches
    top-level files only, ``**/*.txt`` matches at any depth, and a pattern
    naming a directory also selects its contents. Positive patterns are
    combined, ``!`` patterns exclude whatever they match regardless of their
    position, and a leading ``./`` is ignored. The default selection is
    ``["./**", "!.git"]``: everything, including dotfiles, except the git
    metadata directory at the root. With
    ``gitignore=True`` the ``.gitignore`` files of the tree apply to their
    directory and below.

Symbolic links:
    Links are never followed while walking. A link whose target exists is
    left out of the result; its target is captured on its own when it is a
    regular file inside the tree. A link whose target does not exist is kept.
    Only "file not found" counts as a missing target: any other stat error
    (permission denied, link loops, a file used as a directory) is treated as
    an existing target and the link is left out.

Concurrency:
    Symlink targets are checked concurrently without a limit. File contents are
    read with at most ``max_concurrent_reads`` (10 by default) reads in flight.

Example:
    ```python
    from scaffolder_actions.utils.serializer import serialize_directory_contents

    async def snapshot(workspace: str) -> None:
        files = await serialize_directory_contents(workspace, gitignore=True)
        for file in files:
            print(f"{file.path} ({len(file.content)} bytes)")
    ```

Raises:
    PathSafetyError: When an entry would resolve outside of the source directory
    OSError: When an entry cannot be listed or read; the whole pass is aborted
"""

import asyncio
import logging
import os
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

import pathspec

from scaffolder_actions.core.models import SerializedFile

from .paths import resolve_safe_child_path

DEFAULT_GLOB_PATTERNS = ("./**", "!.git")
MAX_CONCURRENT_READS = 10
EXECUTE_BIT_MASK = 0o111


def is_executable(file_mode: int | None) -> bool:
    """Return True if any of the user, group or other execute bits is set."""
    if not file_mode:
        return False
    return file_mode & EXECUTE_BIT_MASK > 0


def _anchor(pattern: str) -> str:
    """Anchor a pattern to the source root unless it starts with ``**``."""
    if pattern.startswith(("/", "**")):
        return pattern
    return f"/{pattern}"


def compile_glob_patterns(patterns: Iterable[str]) -> tuple[pathspec.GitIgnoreSpec, pathspec.GitIgnoreSpec]:
    """Split glob patterns into an include spec and an exclude spec, both relative to the root."""
    include, exclude = [], []
    for pattern in patterns:
        negated = pattern.startswith("!")
        body = pattern[1:] if negated else pattern
        while body.startswith("./"):
            body = body[2:]
        if not body:
            continue
        (exclude if negated else include).append(_anchor(body))
    return (
        pathspec.GitIgnoreSpec.from_lines(include),
        pathspec.GitIgnoreSpec.from_lines(exclude),
    )


@dataclass(frozen=True)
class DirectoryEntry:
    """An entry found while walking the source directory, with its lstat result."""

    path: str
    is_dir: bool
    is_symlink: bool
    stat: os.stat_result

    @property
    def mode(self) -> int:
        return self.stat.st_mode


class DirectorySerializer:
    """Serializes the contents of a directory into SerializedFile records."""

    def __init__(self, max_concurrent_reads: int = MAX_CONCURRENT_READS) -> None:
        if max_concurrent_reads < 1:
            msg = "max_concurrent_reads must be >= 1"
            raise ValueError(msg)
        self.max_concurrent_reads = max_concurrent_reads

    async def serialize(
        self,
        source_path: str | Path,
        *,
        gitignore: bool = False,
        glob_patterns: Sequence[str] | None = None,
    ) -> list[SerializedFile]:
        """
        Serialize every selected file and dangling symlink under ``source_path``.

        Args:
            source_path: Directory to serialize
            gitignore: Apply the .gitignore files found in the tree
            glob_patterns: Selection patterns, defaults to everything except .git

        Returns:
            One SerializedFile per regular file and dangling symlink, in no particular order
        """
        root = Path(source_path)
        patterns = DEFAULT_GLOB_PATTERNS if glob_patterns is None else glob_patterns
        include, exclude = compile_glob_patterns(patterns)

        entries = await asyncio.to_thread(self._scan, root, include, exclude, gitignore)
        logging.info("serializer: found %d entries under %s", len(entries), root)

        valid = await self._filter_entries(root, entries)
        logging.debug("serializer: %d entries left after filtering", len(valid))

        files = await self._materialize(root, valid)
        logging.info("serializer: serialized %d files from %s", len(files), root)
        return files

    def _scan(
        self,
        root: Path,
        include: pathspec.GitIgnoreSpec,
        exclude: pathspec.GitIgnoreSpec,
        gitignore: bool,
    ) -> list[DirectoryEntry]:
        """Walk ``root`` without following links and collect the selected entries."""
        entries: list[DirectoryEntry] = []

        def walk(directory: Path, rel_dir: str, ignores: list[tuple[str, pathspec.GitIgnoreSpec]]) -> None:
            if gitignore:
                ignores = ignores + self._load_gitignore(directory, rel_dir)

            with os.scandir(directory) as it:
                dirents = sorted(it, key=lambda d: d.name)

            for dirent in dirents:
                rel = f"{rel_dir}/{dirent.name}" if rel_dir else dirent.name
                is_dir = dirent.is_dir(follow_symlinks=False)
                if self._is_excluded(exclude, rel, is_dir) or self._is_ignored(ignores, rel, is_dir):
                    continue

                if include.match_file(rel) or (is_dir and include.match_file(f"{rel}/")):
                    entries.append(
                        DirectoryEntry(
                            path=rel,
                            is_dir=is_dir,
                            is_symlink=dirent.is_symlink(),
                            stat=dirent.stat(follow_symlinks=False),
                        ),
                    )
                if is_dir:
                    walk(Path(dirent.path), rel, ignores)

        walk(root, "", [])
        return entries

    @staticmethod
    def _is_excluded(exclude: pathspec.GitIgnoreSpec, rel: str, is_dir: bool) -> bool:
        if exclude.match_file(rel):
            return True
        return is_dir and exclude.match_file(f"{rel}/")

    @staticmethod
    def _load_gitignore(directory: Path, rel_dir: str) -> list[tuple[str, pathspec.GitIgnoreSpec]]:
        """Load the .gitignore of ``directory``, if it has one."""
        gitignore_path = directory / ".gitignore"
        if not gitignore_path.is_file():
            return []
        lines = gitignore_path.read_text(encoding="utf-8").splitlines()
        logging.debug("serializer: applying %s", gitignore_path)
        return [(rel_dir, pathspec.GitIgnoreSpec.from_lines(lines))]

    @staticmethod
    def _is_ignored(ignores: list[tuple[str, pathspec.GitIgnoreSpec]], rel: str, is_dir: bool) -> bool:
        """Check ``rel`` against the applicable .gitignore files, deepest first."""
        for base, spec in reversed(ignores):
            sub = rel[len(base) + 1 :] if base else rel
            result = spec.check_file(f"{sub}/" if is_dir else sub)
            if result.include is not None:
                return result.include
        return False

    async def _filter_entries(self, root: Path, entries: list[DirectoryEntry]) -> list[DirectoryEntry]:
        """Drop directories and symlinks whose target exists."""

        async def keep(entry: DirectoryEntry) -> bool:
            if entry.is_dir:
                return False
            if not entry.is_symlink:
                return True
            safe_path = resolve_safe_child_path(root, entry.path)
            return not await asyncio.to_thread(self._target_exists, safe_path)

        flags = await asyncio.gather(*(keep(entry) for entry in entries))
        return [entry for entry, flag in zip(entries, flags) if flag]

    @staticmethod
    def _target_exists(path: Path) -> bool:
        """Stat ``path`` following links; only a missing target counts as absent."""
        try:
            os.stat(path)
        except FileNotFoundError:
            return False
        except OSError as e:
            logging.debug("serializer: treating %s as present after stat error: %s", path, e)
        return True

    async def _materialize(self, root: Path, entries: list[DirectoryEntry]) -> list[SerializedFile]:
        """Read the entries with at most ``max_concurrent_reads`` reads in flight."""
        semaphore = asyncio.Semaphore(self.max_concurrent_reads)

        async def materialize(entry: DirectoryEntry) -> SerializedFile:
            async with semaphore:
                content = await self._read_entry(root, entry)
            return SerializedFile(
                path=entry.path,
                content=content,
                executable=is_executable(entry.mode),
                symlink=entry.is_symlink,
            )

        return list(await asyncio.gather(*(materialize(entry) for entry in entries)))

    async def _read_entry(self, root: Path, entry: DirectoryEntry) -> bytes:
        """Read file bytes, or the raw link target for symlinks."""
        abs_path = resolve_safe_child_path(root, entry.path)
        if entry.is_symlink:
            return await asyncio.to_thread(os.readlink, os.fsencode(abs_path))
        return await asyncio.to_thread(abs_path.read_bytes)


async def serialize_directory_contents(
    source_path: str | Path,
    *,
    gitignore: bool = False,
    glob_patterns: Sequence[str] | None = None,
) -> list[SerializedFile]:
    """Serialize ``source_path`` with a default DirectorySerializer."""
    return await DirectorySerializer().serialize(source_path, gitignore=gitignore, glob_patterns=glob_patterns)
