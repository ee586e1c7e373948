"""Analysis draft kept by the analyst kernel."""

from ...models.enums import DraftWrite
from .constants import SECTION_ORDER

AUTO_SECTION_PREFIX = "Section"


class AnalysisDraft:
    """Ordered mapping of section title to accumulated markdown.

    Entries are created on first write, then appended to or replaced; they
    are never removed. Auto-named entries ("Section 1", "Section 2", ...)
    draw their number from ``next_auto_index``.
    """

    def __init__(self) -> None:
        self._sections: dict[str, str] = {}
        self.next_auto_index = 1

    def __len__(self) -> int:
        return len(self._sections)

    def items(self) -> list[tuple[str, str]]:
        return list(self._sections.items())

    def write(self, title: str, content: str, replace: bool = False) -> DraftWrite:
        """Create, append to (separated by a blank line) or replace an entry."""
        if title not in self._sections:
            self._sections[title] = content
            return DraftWrite.CREATED
        if replace:
            self._sections[title] = content
            return DraftWrite.REPLACED
        self._sections[title] = f"{self._sections[title]}\n\n{content}"
        return DraftWrite.APPENDED

    def add_auto_section(self, content: str) -> str:
        """Store ``content`` under the next free auto-generated title."""
        title = f"{AUTO_SECTION_PREFIX} {self.next_auto_index}"
        self.next_auto_index += 1
        while title in self._sections:
            title = f"{AUTO_SECTION_PREFIX} {self.next_auto_index}"
            self.next_auto_index += 1
        self._sections[title] = content
        return title

    def has_section_matching(self, keywords: tuple[str, ...]) -> bool:
        """True when any title contains one of the keywords (case-insensitive)."""
        for title in self._sections:
            lower = title.lower()
            if any(k in lower for k in keywords):
                return True
        return False

    def ordered_items(self) -> list[tuple[str, str]]:
        """Entries in report order, each exactly once.

        Titles matching an entry of SECTION_ORDER come first, in that order;
        the rest follow in insertion order.
        """
        ordered: list[tuple[str, str]] = []
        used: set[str] = set()
        for preferred in SECTION_ORDER:
            needle = preferred.lower()
            for title, content in self._sections.items():
                if title not in used and needle in title.lower():
                    ordered.append((title, content))
                    used.add(title)
        for title, content in self._sections.items():
            if title not in used:
                ordered.append((title, content))
        return ordered
