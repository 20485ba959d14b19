"""Structural parser for Norwegian statute text dumps.

Source text may contain line-break artifacts, inline references that look
like section headers and stray table-of-contents fragments. The parser makes
a single pass over the lines and only accepts a section marker after it
survives an ordered list of rejection rules. Chapters are activated lazily,
at their first section, so that noise chapter markers with no real content
behind them never take effect.
"""

import logging
import os
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Set

from pydantic import BaseModel

from ..utils.text import normalize_section_ref, normalize_whitespace, starts_with_lowercase
from .models import ParseDiagnostics, Provision, ProvisionParseResult
from .patterns import PATTERNS, detect_line_type, is_likely_title, section_number, section_ordinal

logger = logging.getLogger(__name__)


class ParserSettings(BaseModel):
    """Tunable heuristics of the structural parser.

    The defaults are tuned against the current statute corpus; they are not
    derived from any drafting rule.
    """

    flat_jump_threshold: int = 8
    detect_inline_references: bool = True
    max_title_length: int = 100

    @classmethod
    def from_env(cls) -> "ParserSettings":
        """Build settings, letting LOVCITE_* environment variables override defaults."""
        values = {}
        threshold = os.getenv("LOVCITE_FLAT_JUMP_THRESHOLD")
        if threshold:
            values["flat_jump_threshold"] = int(threshold)
        inline = os.getenv("LOVCITE_DETECT_INLINE_REFERENCES")
        if inline:
            values["detect_inline_references"] = inline.strip().lower() not in ("0", "false", "no")
        title_length = os.getenv("LOVCITE_MAX_TITLE_LENGTH")
        if title_length:
            values["max_title_length"] = int(title_length)
        return cls(**values)


@dataclass(frozen=True)
class SectionCandidate:
    """A line that matched the section pattern, before it is accepted."""

    line: str
    section: str
    number: Optional[int]
    ordinal: Optional[int]
    remainder: str
    chapter: Optional[str]
    chapter_activated: bool

    @property
    def provision_ref(self) -> str:
        return f"{self.chapter}:{self.section}" if self.chapter else self.section


@dataclass(frozen=True)
class RejectionRule:
    """A named predicate; a True result suppresses the candidate."""

    name: str
    applies: Callable[["StatuteParser", SectionCandidate], bool]


def _is_duplicate(parser: "StatuteParser", candidate: SectionCandidate) -> bool:
    return candidate.provision_ref in parser.seen_refs


def _is_local_backslide(parser: "StatuteParser", candidate: SectionCandidate) -> bool:
    current = parser.current_ordinal
    return current is not None and candidate.ordinal is not None and candidate.ordinal <= current


def _is_historical_backslide(parser: "StatuteParser", candidate: SectionCandidate) -> bool:
    if candidate.chapter_activated or candidate.chapter is None:
        return False
    last = parser.last_ordinal_by_chapter.get(candidate.chapter)
    return last is not None and candidate.ordinal is not None and candidate.ordinal <= last


def _is_inline_reference(parser: "StatuteParser", candidate: SectionCandidate) -> bool:
    # "... som nevnt i\n2 § skal anvendes ..." continues a sentence
    return (
        parser.settings.detect_inline_references
        and not candidate.chapter_activated
        and parser.current_section is not None
        and bool(parser.current_content)
        and starts_with_lowercase(candidate.remainder)
    )


def _is_suspicious_flat_jump(parser: "StatuteParser", candidate: SectionCandidate) -> bool:
    # Enumerations like "5 a, 6 h, 7 a, 11, 15, 22 og\n39 §" in flat statutes
    current = parser.current_number
    return (
        not candidate.chapter_activated
        and candidate.chapter is None
        and current is not None
        and candidate.number is not None
        and candidate.number - current >= parser.settings.flat_jump_threshold
        and bool(parser.current_content)
    )


# Evaluated in order; the first rule that applies suppresses the candidate.
SECTION_REJECTION_RULES = (
    RejectionRule("duplicate", _is_duplicate),
    RejectionRule("local_backslide", _is_local_backslide),
    RejectionRule("historical_backslide", _is_historical_backslide),
    RejectionRule("inline_reference", _is_inline_reference),
    RejectionRule("suspicious_flat_jump", _is_suspicious_flat_jump),
)


class StatuteParser:
    """Single-pass parser turning statute text into ordered provisions."""

    def __init__(self, settings: Optional[ParserSettings] = None):
        self.settings = settings or ParserSettings.from_env()
        self._reset()

    def _reset(self) -> None:
        self.provisions: List[Provision] = []
        self.seen_refs: Set[str] = set()
        self.last_ordinal_by_chapter: Dict[str, int] = {}
        self.diagnostics = ParseDiagnostics()

        self.current_chapter: Optional[str] = None
        self.pending_chapter: Optional[str] = None
        self.current_section: Optional[str] = None
        self.current_title: Optional[str] = None
        self.pending_title: Optional[str] = None
        self.current_content: List[str] = []

    @property
    def current_ordinal(self) -> Optional[int]:
        return section_ordinal(self.current_section) if self.current_section else None

    @property
    def current_number(self) -> Optional[int]:
        return section_number(self.current_section) if self.current_section else None

    def parse(self, text: str) -> ProvisionParseResult:
        """Parse statute text into provisions plus diagnostics."""
        self._reset()

        for raw_line in text.splitlines():
            line = raw_line.strip()
            if not line:
                continue

            marker = detect_line_type(line)
            if marker is None:
                self._handle_text(line)
                continue

            line_type, number, remainder = marker
            if line_type == "chapter":
                self._flush_section()
                self.pending_chapter = number
                self.pending_title = None
            else:
                self._handle_section(line, number, remainder)

        self._flush_section()

        logger.debug(
            f"Parsed {len(self.provisions)} provisions "
            f"(ignored chapters: {self.diagnostics.ignored_chapter_markers}, "
            f"suppressed sections: {self.diagnostics.suppressed_section_candidates})"
        )
        return ProvisionParseResult(
            provisions=list(self.provisions),
            diagnostics=self.diagnostics.model_copy(),
        )

    def _resolve_chapter(self, number: Optional[int]) -> tuple[Optional[str], bool]:
        """Decide which chapter a section candidate belongs to.

        A pending chapter only takes over when nothing is active yet or the
        candidate restarts numbering at 1.
        """
        chapter = self.current_chapter
        activated = False

        if self.pending_chapter:
            if not self.current_chapter or number == 1:
                chapter = self.pending_chapter
                activated = chapter != self.current_chapter
            else:
                self.diagnostics.ignored_chapter_markers += 1
                logger.debug(
                    f"Ignoring chapter marker {self.pending_chapter} kap.: "
                    f"next section does not restart at 1"
                )
            self.pending_chapter = None

        return chapter, activated

    def _rejection_reason(self, candidate: SectionCandidate) -> Optional[str]:
        for rule in SECTION_REJECTION_RULES:
            if rule.applies(self, candidate):
                return rule.name
        return None

    def _handle_section(self, line: str, marker: str, remainder: str) -> None:
        section = normalize_section_ref(marker)
        number = section_number(section)
        chapter, activated = self._resolve_chapter(number)

        candidate = SectionCandidate(
            line=line,
            section=section,
            number=number,
            ordinal=section_ordinal(section),
            remainder=remainder,
            chapter=chapter,
            chapter_activated=activated,
        )

        reason = self._rejection_reason(candidate)
        if reason:
            self.diagnostics.suppressed_section_candidates += 1
            logger.debug(f"Suppressed section candidate {line[:40]!r}: {reason}")
            if self.current_section:
                self.current_content.append(line)
            return

        title = self.pending_title
        self.pending_title = None
        self._flush_section()

        self.current_chapter = chapter
        self.current_section = section
        self.current_title = title
        if remainder:
            self.current_content.append(remainder)

    def _handle_text(self, line: str) -> None:
        max_length = self.settings.max_title_length

        if not self.current_section:
            if is_likely_title(line, max_length):
                self.pending_title = line
            return

        if not self.current_content and self.current_title is None and is_likely_title(line, max_length):
            self.current_title = line
            return

        self.current_content.append(line)

    def _flush_section(self) -> None:
        if self.current_section and self.current_content:
            section = self.current_section
            chapter = self.current_chapter
            provision_ref = f"{chapter}:{section}" if chapter else section

            self.provisions.append(
                Provision(
                    provision_ref=provision_ref,
                    chapter=chapter,
                    section=section,
                    title=self.current_title,
                    content=normalize_whitespace(" ".join(self.current_content)),
                )
            )
            self.seen_refs.add(provision_ref)

            if chapter:
                ordinal = section_ordinal(section)
                if ordinal is not None:
                    self.last_ordinal_by_chapter[chapter] = ordinal

        self.current_section = None
        self.current_title = None
        self.current_content = []


def parse_statute_provisions(
    text: str, settings: Optional[ParserSettings] = None
) -> ProvisionParseResult:
    """Parse statute text into ordered provisions and diagnostics counters."""
    return StatuteParser(settings).parse(text)


def parse_statute_text(text: str, settings: Optional[ParserSettings] = None) -> List[Provision]:
    """Parse statute text and return only the provisions."""
    return parse_statute_provisions(text, settings).provisions


def is_chaptered_statute(text: str) -> bool:
    """Return True if any line of the text is a chapter marker."""
    return any(PATTERNS["chapter"].match(line.strip()) for line in text.splitlines())
