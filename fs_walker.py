# fs_walker.py
# -*- coding: utf-8 -*-
"""
Bounded-depth, best-effort directory traversal.

Only files that could be listed and stat'd are yielded. Permission errors,
broken links and directories that vanish mid-walk are skipped silently.
"""
import os
import logging

log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())


def walk(root, max_depth):
    """
    Lazily yields the paths of regular files under root, up to max_depth levels deep.

    The root itself is depth 0, its direct children depth 1. If root is a file
    it is yielded as the only result. Symlinked directories are not followed.
    """
    try:
        if os.path.isfile(root):
            yield os.fspath(root)
            return
    except OSError as e:
        log.debug(f"Could not stat walk root '{root}': {e}")
        return
    yield from _walk_dir(os.fspath(root), 1, max_depth)


def _walk_dir(directory, depth, max_depth):
    if depth > max_depth:
        return
    try:
        with os.scandir(directory) as it:
            entries = list(it)
    except OSError as e:
        log.debug(f"Skipping unreadable directory '{directory}': {e}")
        return

    for entry in entries:
        try:
            if entry.is_dir(follow_symlinks=False):
                yield from _walk_dir(entry.path, depth + 1, max_depth)
            elif entry.is_file():
                yield entry.path
        except OSError as e:
            log.debug(f"Skipping entry '{entry.path}': {e}")


def find_files_named(root, file_name, max_depth, path_must_contain=None):
    """
    Returns the files under root whose name matches file_name case-insensitively.

    When path_must_contain is given, the full path must also contain it
    (case-insensitive).
    """
    wanted = file_name.lower()
    needle = path_must_contain.lower() if path_must_contain else None
    matches = []
    for path in walk(root, max_depth):
        if os.path.basename(path).lower() != wanted:
            continue
        if needle and needle not in path.lower():
            continue
        matches.append(path)
    return matches
