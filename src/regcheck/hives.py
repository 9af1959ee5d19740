"""Translation of .reg section paths into provider addressing."""

from __future__ import annotations

from .settings import get_settings


def split_hive(path: str) -> tuple[str, str]:
    """Split ``HIVE\\sub\\key`` into ``("HIVE", "sub\\key")``."""
    hive, _, rest = path.partition("\\")
    return hive, rest


def translate_path(path: str, aliases: dict[str, str] | None = None) -> str:
    """Rewrite the hive root of *path* to its short alias.

    Hive names are matched case-insensitively; unknown hives are returned
    unchanged.
    """
    if aliases is None:
        aliases = get_settings().hive_aliases
    hive, rest = split_hive(path)
    lookup = {k.upper(): v for k, v in aliases.items()}
    short = lookup.get(hive.upper())
    if short is None:
        return path
    return f"{short}\\{rest}" if rest else short
