"""
File-safety writer

Writes rendered text over a target while keeping exactly one backup:

1. create missing ancestor directories (a non-directory in the way is fatal);
2. delete any old backup, then move the current target aside to the backup;
3. write the new text;
4. optionally verify that nothing changed: on any difference the new file
   is parked at "<target>.new", the backup is restored to the target, and a
   ChangeDetectedError reports the first differing byte.
"""

from pathlib import Path
from typing import Optional, Union

from ..config import appsettings
from ..models.results import WriteResult
from .errors import ChangeDetectedError, PathError
from .log import LOG


def parents_ensure(target: Path) -> None:
    """
    Create any missing ancestor directories of a target.

    Raises:
        PathError: If an ancestor exists but is not a directory, or cannot
                   be created
    """
    for ancestor in reversed(target.parents):
        if ancestor.exists() and not ancestor.is_dir():
            raise PathError(f"{ancestor} exists but is not a directory", path=target)
    if target.parent.is_dir():
        return
    LOG(f"Creating directory {target.parent} ...", level=2)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise PathError(f"Cannot create directory {target.parent}: {e}", path=target) from e


def backup_make(target: Path) -> Optional[Path]:
    """
    Move the current target aside, keeping a single backup generation.

    Returns:
        The backup path, or None if there was no prior version
    """
    backup = appsettings.backupPath_make(target)
    try:
        if backup.exists():
            LOG(f"Deleting existing backup file {backup} ...", level=2)
            backup.unlink()
        if not target.exists():
            return None
        LOG(f"Renaming file {target} to {backup} ...", level=2)
        target.replace(backup)
    except OSError as e:
        raise PathError(f"Cannot rotate backup {backup}: {e}", path=target) from e
    return backup


def difference_find(old: bytes, new: bytes) -> Optional[int]:
    """
    Byte offset of the first difference, or None if identical.

    If one content is a prefix of the other, the offset is the length of
    the shorter one.
    """
    limit = min(len(old), len(new))
    for offset in range(limit):
        if old[offset] != new[offset]:
            return offset
    if len(old) != len(new):
        return limit
    return None


def difference_describe(old: bytes, new: bytes, offset: int, width: Optional[int] = None) -> str:
    """
    Show the text around a difference in both versions.

    Example output:
        old: '<h1>Hello</h1>\\n'
        new: '<h1>Hallo</h1>\\n'
    """
    if width is None:
        width = appsettings.diff_context
    start = max(0, offset - width)
    end = offset + width
    oldContext = old[start:end].decode(appsettings.encoding, errors='replace')
    newContext = new[start:end].decode(appsettings.encoding, errors='replace')
    return f"old: {oldContext!r}\nnew: {newContext!r}"


def unchanged_check(target: Path, backup: Path) -> None:
    """
    Compare a freshly written target with its backup; roll back on difference.

    Raises:
        PathError: If the backup is missing
        ChangeDetectedError: If the contents differ (target restored)
    """
    if not backup.exists():
        raise PathError(f"Can't check {target} for unexpected changes: backup {backup} is missing", path=target)

    old = backup.read_bytes()
    new = target.read_bytes()
    offset = difference_find(old, new)
    if offset is None:
        LOG(f"Verified {target} is unchanged", level=2)
        return

    context = difference_describe(old, new, offset)
    newPath = appsettings.newPath_make(target)
    LOG(f"Unexpected change in {target} at byte {offset}, moving new content to {newPath}", level=1)
    try:
        target.replace(newPath)
        backup.replace(target)
    except OSError as e:
        raise PathError(f"Cannot roll back {target}: {e}", path=target) from e
    raise ChangeDetectedError(
        f"New file {newPath} is different from old file {target} at byte {offset}:\n{context}",
        path=target,
        offset=offset,
        context=context,
        newPath=newPath,
    )


def outputFile_write(
    target: Union[str, Path],
    text: str,
    checkNoChanges: bool = False,
) -> WriteResult:
    """
    Write rendered text to a target under the backup protocol.

    Args:
        target: File to write (may be the source itself)
        text: Rendered output
        checkNoChanges: Fail, restoring the previous version, if the new
                        content differs from it

    Returns:
        WriteResult describing the target, backup and size written

    Raises:
        PathError: Directory problems, missing previous version when
                   verifying, unencodable text, or write failures
        ChangeDetectedError: Verification found a difference
    """
    target = Path(target)
    parents_ensure(target)
    if target.exists() and target.is_dir():
        raise PathError(f"{target} is a directory", path=target)
    if checkNoChanges and not target.exists():
        raise PathError(f"Can't check {target} for unexpected changes, because it is missing", path=target)

    # Encode before the backup rotation moves the target aside
    try:
        data = text.encode(appsettings.encoding)
    except UnicodeEncodeError as e:
        raise PathError(
            f"Rendered text cannot be encoded as {appsettings.encoding} at character {e.start}: {e.reason}",
            path=target,
        ) from e

    backup = backup_make(target)

    LOG(f"Outputting regenerated page to {target} ...", level=1)
    try:
        target.write_bytes(data)
    except OSError as e:
        raise PathError(f"Cannot write {target}: {e}", path=target) from e

    if checkNoChanges:
        unchanged_check(target, backup)

    LOG(f"Finished writing {target}", level=2)
    return WriteResult(target=target, backup=backup, bytesWritten=len(data), verified=checkNoChanges)
