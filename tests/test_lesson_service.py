"""Tests for the lesson library and tap handling."""

import pytest

from lexitap.markdown import Heading, Table
from lexitap.services import LessonLibrary, LessonSession


def stored(store, cleaned_word):
    return next((r for r in store.load_all() if r.cleaned_word == cleaned_word), None)


@pytest.fixture
def library(lesson_tree):
    return LessonLibrary(lesson_tree, start_subfolder="Russian")


@pytest.fixture
def greetings(lesson_tree):
    return lesson_tree / "Russian" / "Basics" / "01 Greetings.md"


class TestLessonLibrary:
    def test_start_directory(self, library, lesson_tree):
        assert library.start_directory() == (lesson_tree / "Russian").resolve()

    def test_missing_start_subfolder_falls_back_to_root(self, lesson_tree):
        library = LessonLibrary(lesson_tree, start_subfolder="German")
        assert library.start_directory() == lesson_tree.resolve()

    def test_directories_first(self, library):
        items = library.list_directory(library.start_directory())
        assert [(i.name, i.is_directory) for i in items] == [("Basics", True), ("02 Family.md", False)]

    def test_hides_sheets_and_archive_residue(self, library, lesson_tree):
        basics = library.list_directory(lesson_tree / "Russian" / "Basics")
        assert [i.name for i in basics] == ["01 Greetings.md"]
        root = library.list_directory()
        assert [i.name for i in root] == ["Russian", "notes.md"]

    def test_missing_directory_lists_empty(self, library, lesson_tree):
        assert library.list_directory(lesson_tree / "nope") == []

    def test_parent_directory(self, library, lesson_tree):
        basics = lesson_tree / "Russian" / "Basics"
        assert library.parent_directory(basics) == (lesson_tree / "Russian").resolve()
        assert library.parent_directory(lesson_tree) == lesson_tree.resolve()

    def test_label(self, library, lesson_tree):
        assert library.label_for(lesson_tree / "Russian" / "Basics") == "Russian/Basics"

    def test_read_markdown_soft_fails(self, library, lesson_tree):
        assert library.read_markdown(lesson_tree / "missing.md") == ""
        assert library.read_markdown(lesson_tree / "Russian" / "Basics" / "._01 Greetings.md") == ""
        assert library.read_markdown(None) == ""

    def test_undecodable_file_reads_empty(self, library, lesson_tree):
        path = lesson_tree / "bad.md"
        path.write_bytes(b"\xff\xfe\xfa")
        assert library.read_markdown(path) == ""

    def test_translation_source(self, greetings):
        assert LessonLibrary.translation_source_for(greetings) == greetings.with_suffix(".xlsx")

    def test_load_lesson(self, library, greetings):
        lesson = library.load_lesson(greetings)
        assert lesson.title == "01 Greetings"
        assert lesson.elements[0] == Heading(1, "Привет")
        assert Table(("дом", "*кот*")) in lesson.elements
        assert lesson.index.lookup("Дом.") == "house"

    def test_load_lesson_without_sheet(self, library, lesson_tree):
        lesson = library.load_lesson(lesson_tree / "Russian" / "02 Family.md")
        assert len(lesson.index) == 0
        assert lesson.index.lookup("мама") == "мама"


@pytest.mark.asyncio
class TestLessonSession:
    async def test_tap_adds_word_with_translation(self, library, greetings, memory_store):
        session = LessonSession(library.load_lesson(greetings), memory_store)
        await session.refresh()

        result = await session.toggle("Дом.")
        assert result.added
        assert (result.cleaned_word, result.translation) == ("дом", "house")
        record = stored(memory_store, "дом")
        assert record.raw_word == "Дом."
        assert session.tapped_words == {"Дом."}
        assert session.translated_words() == [("дом", "house")]

    async def test_second_tap_removes(self, library, greetings, memory_store):
        session = LessonSession(library.load_lesson(greetings), memory_store)
        await session.refresh()

        await session.toggle("Дом.")
        result = await session.toggle("дом,")
        assert not result.added
        assert result.translation == "house"
        assert memory_store.load_all() == []
        assert session.tapped_words == set()

    async def test_unknown_word_stored_with_itself(self, library, greetings, memory_store):
        session = LessonSession(library.load_lesson(greetings), memory_store)
        result = await session.toggle("стоит")
        assert result.translation == "стоит"

    async def test_refresh_sees_existing_records(self, library, greetings, memory_store):
        memory_store.upsert("Кот", "кот", "cat")
        session = LessonSession(library.load_lesson(greetings), memory_store)
        await session.refresh()
        assert session.is_tapped("кот!")
        assert session.tapped_words == {"Кот"}
