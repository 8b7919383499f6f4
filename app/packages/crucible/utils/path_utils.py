"""Path utilities: canonical identity, hierarchy depth and range-query helpers.

These helpers centralize the path rules shared by the scanner, tree builder,
tag store and resolver:
- ``normalize_path`` resolves symlinks/relative segments but never fails;
- ``path_depth`` counts normal segments only (anchor and ``.`` excluded, ``..`` counted);
- ``path_key`` is the lexical identity used to match entries without touching disk.
"""

from __future__ import annotations

import os
from pathlib import Path, PurePath
from typing import Optional, Union

from app.packages.crucible.core.logger import logger

PathLike = Union[str, os.PathLike]


def normalize_path(path: PathLike) -> str:
    raw = os.fspath(path)
    try:
        return str(Path(raw).resolve(strict=True))
    except (OSError, RuntimeError) as exc:
        logger.warning("Failed to canonicalize path; using it as provided: %s (%s)", raw, exc)
        return raw


def path_depth(path: PathLike) -> int:
    pure = PurePath(path)
    parts = pure.parts
    if pure.anchor:
        parts = parts[1:]
    return len(parts)


def path_hierarchy(path: PathLike) -> list[str]:
    """按“根标记 + 各级名称”的顺序拆分路径，便于面包屑展示或重新拼接。

    根标记保持平台原样（``/``、``C:\\``，或不带根的盘符 ``C:``），``..`` 原样保留。
    """
    return list(PurePath(path).parts)


def path_key(path: PathLike) -> str:
    return os.path.normpath(os.fspath(path))


def parent_key(path: PathLike) -> Optional[str]:
    """返回词法意义上的父路径；根标记或单段相对路径没有父路径。"""
    key = path_key(path)
    parent = os.path.dirname(key)
    if not parent or parent == key:
        return None
    return parent


def display_name(path: PathLike) -> str:
    """节点名称：最后一段；像 ``/`` 这样没有名称的路径直接使用完整路径。"""
    raw = os.fspath(path)
    return PurePath(raw).name or raw


def strict_ancestors(path: PathLike) -> list[str]:
    """由近及远列出所有严格祖先路径，不包含路径自身。"""
    return [str(parent) for parent in PurePath(path_key(path)).parents if str(parent) != "."]


def descendant_prefix(root: PathLike) -> str:
    key = path_key(root)
    if key.endswith(os.sep):
        return key
    return key + os.sep


def escape_like(value: str, escape: str = "\\") -> str:
    """转义 LIKE 通配符，使路径中的 ``%``、``_`` 与转义符按字面匹配。"""
    return (
        value.replace(escape, escape * 2)
        .replace("%", f"{escape}%")
        .replace("_", f"{escape}_")
    )
