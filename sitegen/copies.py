"""Declarative file and directory copies performed before a site is built."""

from __future__ import annotations

import logging
import os
import shutil
import stat
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Set

from .errors import CopyError
from .logging import get_logger
from .models import CopyTarget

_LOGGER = get_logger("copies")


def remove_all(path: str) -> bool:
    """Remove ``path`` recursively; returns False when it did not exist."""
    try:
        info = os.lstat(path)
    except FileNotFoundError:
        return False
    if stat.S_ISDIR(info.st_mode):
        shutil.rmtree(path)
    else:
        os.remove(path)
    return True


def copy_file(src: str, target: CopyTarget, perm: int = 0) -> str:
    """Copy one file, creating missing parents; ``perm`` 0 keeps the source bits."""
    if target.force:
        remove_all(target.target)

    try:
        data = Path(src).read_bytes()
    except OSError as exc:
        raise CopyError(f"error reading src '{src}': {exc}") from exc

    parent = os.path.dirname(target.target)
    if parent:
        os.makedirs(parent, exist_ok=True)

    if not perm & 0o777:
        perm = os.stat(src).st_mode
    try:
        Path(target.target).write_bytes(data)
        os.chmod(target.target, perm & 0o777)
    except OSError as exc:
        raise CopyError(f"error writing to dst '{target.target}': {exc}") from exc
    return target.target


def copy_tree(src: str, target: CopyTarget) -> List[str]:
    """Mirror every non-directory descendant of ``src`` under ``target``."""
    written: List[str] = []
    for root, dirs, files in os.walk(src):
        dirs.sort()
        for name in sorted(files):
            path = os.path.join(root, name)
            rel = os.path.relpath(path, src)
            out = CopyTarget(target=os.path.join(target.target, rel), force=target.force)
            _LOGGER.debug("copy %s -> %s", path, out.target)
            written.append(copy_file(path, out, os.lstat(path).st_mode))
    return written


def copy_entry(dirs: Set[str], src: str, target: CopyTarget, perms: Mapping[str, int]) -> List[str]:
    """Copy one (src, target) pair using directory facts gathered beforehand."""
    src_is_dir = src in dirs
    target_is_dir = target.target in dirs

    if src_is_dir:
        if not target_is_dir:
            os.makedirs(target.target, exist_ok=True)
        return copy_tree(src, target)

    if target_is_dir:
        target = CopyTarget(
            target=os.path.join(target.target, os.path.basename(src)),
            force=target.force,
        )
    return [copy_file(src, target, perms.get(src, 0))]


def copy_site(
    copies: Mapping[str, Sequence[CopyTarget]],
    logger: Optional[logging.Logger | logging.LoggerAdapter] = None,
) -> List[str]:
    """Perform every copy declared for one site and return the files written.

    All sources and targets are inspected before anything is copied. Symlinked
    sources are refused.
    """
    log = logger or _LOGGER
    dirs: Set[str] = set()
    perms: Dict[str, int] = {}

    for src, targets in copies.items():
        if not src:
            raise CopyError("found empty copy src")
        for target in targets:
            if not target.target:
                raise CopyError(f"found empty copy dst for src '{src}'")

            try:
                src_stat = os.lstat(os.path.normpath(src))
            except OSError as exc:
                raise CopyError(f"failed to stat copy src '{src}': {exc}") from exc
            if stat.S_ISLNK(src_stat.st_mode):
                raise CopyError(f"copy src is symlink: '{src}'")

            try:
                dst_stat: Optional[os.stat_result] = os.stat(target.target)
            except FileNotFoundError:
                dst_stat = None
                parent = os.path.dirname(os.path.normpath(target.target))
                if parent:
                    os.makedirs(parent, exist_ok=True)
            except OSError as exc:
                raise CopyError(f"failed to stat copy dst '{target}': {exc}") from exc

            if stat.S_ISDIR(src_stat.st_mode):
                dirs.add(src)
                perms[src] = src_stat.st_mode & 0o777
            if dst_stat is not None and stat.S_ISDIR(dst_stat.st_mode):
                dirs.add(target.target)
                perms[target.target] = dst_stat.st_mode & 0o777

    written: List[str] = []
    for src, targets in copies.items():
        for target in targets:
            log.info("copying %s -> %s", src, target)
            try:
                written.extend(copy_entry(dirs, src, target, perms))
            except CopyError:
                raise
            except OSError as exc:
                raise CopyError(f"failed to copy '{src}' -> '{target.target}': {exc}") from exc
    return written


__all__ = ["copy_entry", "copy_file", "copy_site", "copy_tree", "remove_all"]
