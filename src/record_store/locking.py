"""Per-dataset advisory locks for read-modify-write sequences."""

from pathlib import Path

from filelock import FileLock

LOCK_DIR_NAME = ".locks"


def dataset_lock(dataset_path: Path, timeout: float = -1) -> FileLock:
    """Return the lock guarding writes to ``dataset_path``.

    Lock files live in a hidden directory beside the datasets so the locator never
    mistakes one for a dataset. A negative timeout waits indefinitely.
    """
    lock_dir = dataset_path.parent / LOCK_DIR_NAME
    lock_dir.mkdir(parents=True, exist_ok=True)
    return FileLock(str(lock_dir / f"{dataset_path.name}.lock"), timeout=timeout)
