"""
Lesson path utilities - single source of truth for lesson file naming.

Lesson markdown and its translation sheet are paired by filename stem;
every component that needs the pairing goes through LessonPaths.
"""

from pathlib import Path, PurePosixPath
from typing import Optional, Union

PathLike = Union[str, Path]


class LessonPaths:
    """Centralized path helpers for the lesson tree."""

    MARKDOWN_EXT = ".md"
    SHEET_EXT = ".xlsx"

    @classmethod
    def sibling_with_ext(cls, path: Optional[PathLike], new_ext: str) -> Optional[Path]:
        """
        Swap the extension of ``path``.

        Args:
            path: Original file path
            new_ext: Extension with or without the leading dot

        Returns:
            Same-stem sibling path, or None when no path was given
        """
        if not path:
            return None
        ext = new_ext if new_ext.startswith(".") else f".{new_ext}"
        return Path(path).with_suffix(ext)

    @classmethod
    def translation_sheet(cls, markdown_path: Optional[PathLike]) -> Optional[Path]:
        """Translation sheet paired with a lesson file."""
        return cls.sibling_with_ext(markdown_path, cls.SHEET_EXT)

    @classmethod
    def parent_directory(cls, path: PathLike, root: PathLike) -> Path:
        """Parent of ``path``, never climbing above ``root``."""
        path = Path(path).resolve()
        root = Path(root).resolve()
        if path == root or not cls.is_within(path, root):
            return root
        return path.parent

    @classmethod
    def is_within(cls, path: PathLike, root: PathLike) -> bool:
        """True when ``path`` is ``root`` or lies beneath it."""
        try:
            Path(path).resolve().relative_to(Path(root).resolve())
            return True
        except ValueError:
            return False

    @classmethod
    def archive_member_target(cls, root: PathLike, member: str) -> Optional[Path]:
        """
        Destination for a zip member, or None if it would escape ``root``.

        Absolute names and ``..`` components are rejected.
        """
        name = PurePosixPath(member.replace("\\", "/"))
        if name.is_absolute() or ".." in name.parts or not name.parts:
            return None
        target = Path(root).joinpath(*name.parts)
        if not cls.is_within(target, root):
            return None
        return target

    @classmethod
    def relative_label(cls, path: PathLike, root: PathLike) -> str:
        """Display label of ``path`` relative to ``root`` (empty at root)."""
        try:
            rel = Path(path).resolve().relative_to(Path(root).resolve())
        except ValueError:
            return str(path)
        return "" if str(rel) == "." else rel.as_posix()
