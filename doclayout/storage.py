from __future__ import annotations

from pathlib import Path

from . import config


ARTIFACT_SUFFIXES = {
    "pdf": ".pdf",
    "preview": ".png",
}


def output_dir(base_dir: Path | None = None) -> Path:
    root = base_dir or config.OUT_DIR
    root.mkdir(parents=True, exist_ok=True)
    return root


def artifact_path(file_name: str, artifact_type: str, base_dir: Path | None = None) -> Path:
    if not file_name or ".." in file_name or "/" in file_name or "\\" in file_name:
        raise ValueError(f"Invalid artifact name: {file_name!r}")
    suffix = ARTIFACT_SUFFIXES[artifact_type]
    return output_dir(base_dir) / f"{file_name}{suffix}"
