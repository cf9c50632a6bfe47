"""The 66 books of the Protestant canon with their chapter counts.

Book names are the English names stored in reading records. Korean names
are display-only.
"""

from typing import Iterator

from ..errors import UnknownBookError

BIBLE_BOOKS: tuple[tuple[str, int], ...] = (
    # Old Testament
    ("Genesis", 50),
    ("Exodus", 40),
    ("Leviticus", 27),
    ("Numbers", 36),
    ("Deuteronomy", 34),
    ("Joshua", 24),
    ("Judges", 21),
    ("Ruth", 4),
    ("1 Samuel", 31),
    ("2 Samuel", 24),
    ("1 Kings", 22),
    ("2 Kings", 25),
    ("1 Chronicles", 29),
    ("2 Chronicles", 36),
    ("Ezra", 10),
    ("Nehemiah", 13),
    ("Esther", 10),
    ("Job", 42),
    ("Psalms", 150),
    ("Proverbs", 31),
    ("Ecclesiastes", 12),
    ("Song of Solomon", 8),
    ("Isaiah", 66),
    ("Jeremiah", 52),
    ("Lamentations", 5),
    ("Ezekiel", 48),
    ("Daniel", 12),
    ("Hosea", 14),
    ("Joel", 3),
    ("Amos", 9),
    ("Obadiah", 1),
    ("Jonah", 4),
    ("Micah", 7),
    ("Nahum", 3),
    ("Habakkuk", 3),
    ("Zephaniah", 3),
    ("Haggai", 2),
    ("Zechariah", 14),
    ("Malachi", 4),
    # New Testament
    ("Matthew", 28),
    ("Mark", 16),
    ("Luke", 24),
    ("John", 21),
    ("Acts", 28),
    ("Romans", 16),
    ("1 Corinthians", 16),
    ("2 Corinthians", 13),
    ("Galatians", 6),
    ("Ephesians", 6),
    ("Philippians", 4),
    ("Colossians", 4),
    ("1 Thessalonians", 5),
    ("2 Thessalonians", 3),
    ("1 Timothy", 6),
    ("2 Timothy", 4),
    ("Titus", 3),
    ("Philemon", 1),
    ("Hebrews", 13),
    ("James", 5),
    ("1 Peter", 5),
    ("2 Peter", 3),
    ("1 John", 5),
    ("2 John", 1),
    ("3 John", 1),
    ("Jude", 1),
    ("Revelation", 22),
)

BOOK_NAMES: tuple[str, ...] = tuple(name for name, _ in BIBLE_BOOKS)

_CHAPTER_COUNTS: dict[str, int] = dict(BIBLE_BOOKS)

TOTAL_CHAPTERS = sum(_CHAPTER_COUNTS.values())

KOREAN_BOOK_NAMES: dict[str, str] = {
    "Genesis": "창세기",
    "Exodus": "출애굽기",
    "Leviticus": "레위기",
    "Numbers": "민수기",
    "Deuteronomy": "신명기",
    "Joshua": "여호수아",
    "Judges": "사사기",
    "Ruth": "룻기",
    "1 Samuel": "사무엘상",
    "2 Samuel": "사무엘하",
    "1 Kings": "열왕기상",
    "2 Kings": "열왕기하",
    "1 Chronicles": "역대상",
    "2 Chronicles": "역대하",
    "Ezra": "에스라",
    "Nehemiah": "느헤미야",
    "Esther": "에스더",
    "Job": "욥기",
    "Psalms": "시편",
    "Proverbs": "잠언",
    "Ecclesiastes": "전도서",
    "Song of Solomon": "아가",
    "Isaiah": "이사야",
    "Jeremiah": "예레미야",
    "Lamentations": "예레미야애가",
    "Ezekiel": "에스겔",
    "Daniel": "다니엘",
    "Hosea": "호세아",
    "Joel": "요엘",
    "Amos": "아모스",
    "Obadiah": "오바댜",
    "Jonah": "요나",
    "Micah": "미가",
    "Nahum": "나훔",
    "Habakkuk": "하박국",
    "Zephaniah": "스바냐",
    "Haggai": "학개",
    "Zechariah": "스가랴",
    "Malachi": "말라기",
    "Matthew": "마태복음",
    "Mark": "마가복음",
    "Luke": "누가복음",
    "John": "요한복음",
    "Acts": "사도행전",
    "Romans": "로마서",
    "1 Corinthians": "고린도전서",
    "2 Corinthians": "고린도후서",
    "Galatians": "갈라디아서",
    "Ephesians": "에베소서",
    "Philippians": "빌립보서",
    "Colossians": "골로새서",
    "1 Thessalonians": "데살로니가전서",
    "2 Thessalonians": "데살로니가후서",
    "1 Timothy": "디모데전서",
    "2 Timothy": "디모데후서",
    "Titus": "디도서",
    "Philemon": "빌레몬서",
    "Hebrews": "히브리서",
    "James": "야고보서",
    "1 Peter": "베드로전서",
    "2 Peter": "베드로후서",
    "1 John": "요한일서",
    "2 John": "요한이서",
    "3 John": "요한삼서",
    "Jude": "유다서",
    "Revelation": "요한계시록",
}


def chapter_count(book: str) -> int:
    """Number of chapters in a book.

    Raises:
        UnknownBookError: If the book is not in the canon
    """
    try:
        return _CHAPTER_COUNTS[book]
    except KeyError:
        raise UnknownBookError(book) from None


def is_valid_chapter(book: str, chapter: int) -> bool:
    """Check that a chapter number exists in a book."""
    count = _CHAPTER_COUNTS.get(book)
    return count is not None and 1 <= chapter <= count


def korean_name(book: str) -> str:
    """Korean display name, falling back to the English name."""
    return KOREAN_BOOK_NAMES.get(book, book)


def iter_chapters() -> Iterator[tuple[str, int]]:
    """Yield every (book, chapter) pair in canonical order."""
    for book, count in BIBLE_BOOKS:
        for chapter in range(1, count + 1):
            yield book, chapter


def find_book(name: str) -> str:
    """Resolve an English (any case) or Korean book name to its canonical name.

    Raises:
        UnknownBookError: If nothing matches
    """
    name = name.strip()
    if name in _CHAPTER_COUNTS:
        return name

    lowered = name.lower()
    for book in BOOK_NAMES:
        if book.lower() == lowered or KOREAN_BOOK_NAMES[book] == name:
            return book

    raise UnknownBookError(name)
