"""
Lesson Service - browsing the lesson tree and reading lessons.

Also hosts LessonSession, which turns word taps in the reader into review
store mutations.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple, Union

from loguru import logger

from ..config import Config
from ..markdown import MarkdownElement, tokenize
from ..models import FileItem, ReviewRecord
from ..utils.parsing import TextParser
from ..utils.paths import LessonPaths
from .review_service import ReviewStore
from .vocabulary_service import VocabularyIndex

PathLike = Union[str, Path]


class LessonLibrary:
    """
    File-system view over the installed lesson bundle.

    Every read fails soft: missing directories list as empty and missing
    lessons read as empty text.
    """

    HIDDEN_NAMES = frozenset({"__MACOSX", ".DS_Store", "RCTAsyncLocalStorage"})
    HIDDEN_SUFFIXES = (LessonPaths.SHEET_EXT,)

    def __init__(self, root: Optional[PathLike] = None, start_subfolder: Optional[str] = None):
        """
        Initialize lesson library.

        Args:
            root: Root of the lesson tree (defaults to Config.LESSONS_DIR)
            start_subfolder: Folder to open first, if it exists
        """
        self.root = Path(root or Config.LESSONS_DIR).resolve()
        self.start_subfolder = start_subfolder if start_subfolder is not None else Config.START_SUBFOLDER

    def _is_hidden(self, name: str) -> bool:
        return (
            name in self.HIDDEN_NAMES
            or name.startswith("._")
            or name.lower().endswith(self.HIDDEN_SUFFIXES)
        )

    def start_directory(self) -> Path:
        """The configured start subfolder when present, else the root."""
        if self.start_subfolder:
            candidate = self.root / self.start_subfolder.strip("/\\")
            if candidate.is_dir():
                return candidate
        return self.root

    def list_directory(self, path: Optional[PathLike] = None) -> List[FileItem]:
        """
        List a directory of the lesson tree.

        Directories come first, then files, each group sorted by
        case-insensitive name. Archive residue and translation sheets are
        hidden.
        """
        directory = Path(path) if path else self.root
        try:
            entries = list(directory.iterdir())
        except OSError as e:
            logger.warning(f"Cannot list {directory}: {e}")
            return []

        items = [
            FileItem(name=entry.name, path=entry, is_directory=entry.is_dir())
            for entry in entries
            if not self._is_hidden(entry.name)
        ]
        items.sort(key=lambda item: (not item.is_directory, item.name.casefold()))
        return items

    def parent_directory(self, path: PathLike) -> Path:
        return LessonPaths.parent_directory(path, self.root)

    def label_for(self, path: PathLike) -> str:
        return LessonPaths.relative_label(path, self.root)

    @staticmethod
    def read_markdown(path: Optional[PathLike]) -> str:
        """Read a lesson file; empty on missing, junk or undecodable files."""
        if not path or TextParser.is_junk_path(path):
            return ""
        try:
            return Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Cannot read lesson {path}: {e}")
            return ""

    @staticmethod
    def translation_source_for(markdown_path: PathLike) -> Optional[Path]:
        return LessonPaths.translation_sheet(markdown_path)

    def load_lesson(self, path: PathLike) -> "Lesson":
        """Read, tokenize and index one lesson."""
        text = self.read_markdown(path)
        index = VocabularyIndex.from_sheet(self.translation_source_for(path))
        lesson = Lesson(path=Path(path), text=text, elements=tokenize(text), index=index)
        logger.info(f"Loaded lesson {Path(path).name}: {len(lesson.elements)} elements, {len(index)} words")
        return lesson


@dataclass
class Lesson:
    """A lesson ready for display."""

    path: Path
    text: str
    elements: List[MarkdownElement]
    index: VocabularyIndex = field(default_factory=VocabularyIndex)

    @property
    def title(self) -> str:
        return self.path.stem


@dataclass(frozen=True)
class TapResult:
    word: str
    cleaned_word: str
    translation: str
    added: bool


class LessonSession:
    """
    Tap state for one open lesson.

    The canonical key is the cleaned word. Stored records are the only
    source of truth; the surface forms the renderer highlights are derived
    from them.
    """

    def __init__(self, lesson: Lesson, store: ReviewStore):
        self.lesson = lesson
        self.store = store
        self._records: Dict[str, ReviewRecord] = {}

    async def refresh(self) -> None:
        """Reload tapped words from the review store."""
        records = await self.store.load_all_async()
        self._records = {r.cleaned_word: r for r in records}

    @property
    def tapped_words(self) -> Set[str]:
        """Surface forms to highlight."""
        return {r.raw_word for r in self._records.values()}

    def translated_words(self) -> List[Tuple[str, str]]:
        """``(cleaned_word, translation)`` pairs for the word list popup."""
        return [(r.cleaned_word, r.translation) for r in self._records.values()]

    def is_tapped(self, word: str) -> bool:
        return TextParser.clean_word(word) in self._records

    async def toggle(self, word: str) -> TapResult:
        """
        Add the word for review, or remove it if it is already stored.

        Args:
            word: Tapped surface form

        Returns:
            What happened, including the translation shown to the user
        """
        cleaned = TextParser.clean_word(word)
        existing = self._records.get(cleaned)

        if existing is not None:
            await self.store.remove_async(cleaned)
            del self._records[cleaned]
            return TapResult(word=word, cleaned_word=cleaned, translation=existing.translation, added=False)

        translation = self.lesson.index.lookup(word)
        record = await self.store.upsert_async(word, cleaned, translation)
        self._records[cleaned] = record
        return TapResult(word=word, cleaned_word=cleaned, translation=translation, added=True)
