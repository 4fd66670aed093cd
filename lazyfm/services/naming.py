"""Collision-free destination names for paste and trash moves."""

from __future__ import annotations

from collections.abc import Collection


def _split_extension(file_name: str) -> tuple[str, str | None]:
    """Split ``name.ext`` into stem and extension like a path's suffix.

    Dotfiles such as ``.bashrc`` have no extension.
    """
    dot = file_name.rfind(".")
    if dot <= 0 or dot == len(file_name) - 1:
        return file_name, None
    return file_name[:dot], file_name[dot + 1 :]


def rename_file(file_name: str, existing: Collection[str]) -> str:
    """Return ``file_name`` or the first free ``stem_N.ext`` (N = 1, 2, ...)."""
    stem, extension = _split_extension(file_name)
    candidate = file_name
    count = 1
    while candidate in existing:
        if extension is None:
            candidate = f"{stem}_{count}"
        else:
            candidate = f"{stem}_{count}.{extension}"
        count += 1
    return candidate


def rename_dir(dir_name: str, existing: Collection[str]) -> str:
    """Return ``dir_name`` or the first free ``dir_name_N``."""
    candidate = dir_name
    count = 1
    while candidate in existing:
        candidate = f"{dir_name}_{count}"
        count += 1
    return candidate


def available_name(name: str, existing: Collection[str], is_dir: bool) -> str:
    if is_dir:
        return rename_dir(name, existing)
    return rename_file(name, existing)
