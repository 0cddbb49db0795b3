from __future__ import annotations

from pathlib import Path
import re
import datetime as _dt
from typing import Optional


_NON_ALNUM = re.compile(r"[^A-Za-z0-9._-]+")


def _sanitize_token(token: str) -> str:
    s = _NON_ALNUM.sub("_", token).strip("_")
    return s or "run"


def _ensure_parent_dir(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def _normalize_provider_dir_name(provider: str) -> str:
    """Map a provider or model identifier to one of the two canonical dirs.

    - Any name containing 'gemini' or 'google' -> 'gemini'
    - Otherwise -> 'openai' (covers GPT family and unknowns by default)
    """
    p = provider.lower()
    if "gemini" in p or "google" in p:
        return "gemini"
    return "openai"


def build_versioned_file_path(
    directory: Path,
    base_stem: str,
    extension: str,
    start_version: int = 1,
) -> Path:
    """Return the first non-existing file path with an incrementing version suffix.

    Example: base_stem='aquaculture', extension='.csv' ->
    directory/aquaculture_v001.csv (or next available).
    """
    directory.mkdir(parents=True, exist_ok=True)
    version = max(1, int(start_version))
    while True:
        candidate = directory / f"{base_stem}_v{version:03d}{extension}"
        if not candidate.exists():
            return candidate
        version += 1


def compute_output_path(
    out_arg: Optional[Path],
    run_name: str,
    provider: str,
    *,
    organize_by_provider: bool = False,
    default_extension: str = ".csv",
    append_timestamp: bool = True,
    now: Optional[_dt.datetime] = None,
) -> Path:
    """Compute a non-overwriting output path for a demo run.

    - If `out_arg` has a suffix it is a file path; the timestamp (if requested) is
      appended to its stem, otherwise an existing file gets a `_vNNN` suffix.
    - If `out_arg` is a directory (no suffix) the file is named
      `{run_name}_{timestamp}` inside it, or versioned when no timestamp is used.
    - `None` means the `results/` directory.
    """
    run_token = _sanitize_token(run_name)
    ts = (now or _dt.datetime.now()).strftime("%Y_%m_%d_%H%M") if append_timestamp else ""

    if out_arg is None:
        out_arg = Path("results")
    out_arg = Path(out_arg)

    if out_arg.suffix:
        parent_dir = out_arg.parent
        if organize_by_provider:
            parent_dir = parent_dir / _normalize_provider_dir_name(provider)
        if append_timestamp:
            final_path = parent_dir / f"{out_arg.stem}_{ts}{out_arg.suffix}"
        elif (parent_dir / out_arg.name).exists():
            final_path = build_versioned_file_path(parent_dir, out_arg.stem, out_arg.suffix)
        else:
            final_path = parent_dir / out_arg.name
        _ensure_parent_dir(final_path)
        return final_path

    base_dir = out_arg
    if organize_by_provider:
        base_dir = base_dir / _normalize_provider_dir_name(provider)

    if not append_timestamp:
        return build_versioned_file_path(base_dir, run_token, default_extension)

    final_path = base_dir / f"{run_token}_{ts}{default_extension}"
    _ensure_parent_dir(final_path)
    return final_path
