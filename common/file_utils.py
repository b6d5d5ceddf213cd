# common/file_utils.py
# -*- coding: utf-8 -*-
"""
File system utility functions: non-destructive tree copies, directory
cleanup and symlink replacement.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import NamedTuple, Optional, Union

from stirling_init.config_models import AppSettings

from .command_utils import get_symbols, log_message

module_logger = logging.getLogger(__name__)


class CopyResult(NamedTuple):
    copied: int
    skipped: int


def directory_has_entries(directory_path: Path) -> bool:
    """True if ``directory_path`` is a directory with at least one entry (hidden ones included)."""
    if not directory_path.is_dir():
        return False
    with os.scandir(directory_path) as entries:
        return any(True for _ in entries)


def _copy_entry_if_missing(src: str, dst: str) -> bool:
    if os.path.lexists(dst):
        return False
    shutil.copy2(src, dst, follow_symlinks=False)
    return True


def copy_tree_no_clobber(
    source_dir: Path,
    target_dir: Path,
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
) -> CopyResult:
    """
    Recursively copies the contents of ``source_dir`` into ``target_dir``
    without overwriting anything that already exists there.

    Files keep their mode and timestamps (``shutil.copy2``); symbolic links
    are copied as links. Directories missing from the target are created and
    given the source directory's attributes; directories that already exist
    in the target are merged into and keep their own attributes.

    Parameters:
        source_dir (Path): Directory whose contents are copied.
        target_dir (Path): Destination; created if missing.
        app_settings (Optional[AppSettings]): Provides log symbols.
        current_logger (Optional[logging.Logger]): Logger to use instead of
            the module logger.

    Returns:
        CopyResult: number of entries copied and number left untouched
        because the target already had them.

    Raises:
        OSError: Any copy failure is propagated.
    """
    logger_to_use = current_logger if current_logger else module_logger
    copied = 0
    skipped = 0

    target_dir.mkdir(parents=True, exist_ok=True)
    new_dirs = []

    for root, dir_names, file_names in os.walk(source_dir):
        relative_root = os.path.relpath(root, source_dir)
        dest_root = (
            target_dir
            if relative_root == os.curdir
            else target_dir / relative_root
        )

        # os.walk lists directory symlinks with the directories but does not
        # descend into them; copy those as links.
        for dir_name in list(dir_names):
            src_path = os.path.join(root, dir_name)
            dst_path = dest_root / dir_name
            if os.path.islink(src_path):
                dir_names.remove(dir_name)
                if _copy_entry_if_missing(src_path, str(dst_path)):
                    copied += 1
                else:
                    skipped += 1
            elif os.path.lexists(dst_path):
                if not dst_path.is_dir():
                    # A file shadows this directory in the target; leave it.
                    dir_names.remove(dir_name)
                    skipped += 1
            else:
                dst_path.mkdir()
                new_dirs.append((src_path, dst_path))
                copied += 1

        for file_name in file_names:
            src_path = os.path.join(root, file_name)
            dst_path = dest_root / file_name
            if _copy_entry_if_missing(src_path, str(dst_path)):
                copied += 1
                log_message(
                    f"Copied {src_path} -> {dst_path}",
                    "debug",
                    logger_to_use,
                    app_settings,
                )
            else:
                skipped += 1
                log_message(
                    f"Kept existing {dst_path}",
                    "debug",
                    logger_to_use,
                    app_settings,
                )

    # Directory timestamps change while their contents are copied.
    for src_path, dst_path in reversed(new_dirs):
        shutil.copystat(src_path, dst_path)

    return CopyResult(copied=copied, skipped=skipped)


def clear_directory_contents(
    directory_path: Path,
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
) -> int:
    """
    Removes everything inside ``directory_path`` but keeps the directory.

    Returns:
        int: number of top-level entries removed. A missing directory
        removes nothing.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    if not directory_path.is_dir():
        log_message(
            f"{symbols.get('info', 'ℹ️')} Directory {directory_path} does not exist. No cleanup needed.",
            "info",
            logger_to_use,
            app_settings,
        )
        return 0

    removed = 0
    for entry in directory_path.iterdir():
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()
        removed += 1

    log_message(
        f"Removed {removed} entries from {directory_path}",
        "debug",
        logger_to_use,
        app_settings,
    )
    return removed


def replace_with_symlink(
    link_path: Path,
    target_path: Union[str, Path],
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
) -> Path:
    """
    Makes ``link_path`` a symbolic link to ``target_path``, replacing any
    file or link already there.

    The link is created under a temporary name next to ``link_path`` and
    renamed over it, so ``link_path`` is never observed missing. When the
    target lives in the same directory the link is relative.

    Returns:
        Path: the link path.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    link_dir = link_path.parent
    target = Path(target_path)
    if link_dir.resolve() == target.parent.resolve():
        link_target = target.name
    elif target.is_absolute():
        link_target = str(target)
    else:
        link_target = os.path.relpath(target, link_dir)

    temp_link = link_dir / f".{link_path.name}.tmp"
    if os.path.lexists(temp_link):
        temp_link.unlink()
    os.symlink(link_target, temp_link)
    os.replace(temp_link, link_path)

    log_message(
        f"{symbols.get('success', '✅')} {link_path} -> {link_target}",
        "info",
        logger_to_use,
        app_settings,
    )
    return link_path
