"""Output directory preparation."""

from __future__ import annotations

from pathlib import Path

from ..errors import OutputUnwritableError


def prepare_output_dir(path: Path, mode: int = 0o700) -> Path:
    """Create ``path`` when missing and make sure it is a directory."""

    if path.exists():
        if not path.is_dir():
            raise OutputUnwritableError(f"output dir is not a directory: {path}")
        return path
    try:
        path.mkdir(mode=mode, parents=True)
    except FileExistsError:
        if not path.is_dir():
            raise OutputUnwritableError(f"output dir is not a directory: {path}") from None
    except OSError as exc:
        raise OutputUnwritableError(f"cannot create output dir {path}: {exc}") from exc
    return path


__all__ = ["prepare_output_dir"]
