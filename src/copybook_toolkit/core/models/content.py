"""
Module: core.models.content

Purpose:
    Immutable content model: an ordered list of typed paragraphs, each
    holding the source's explicit line breaks. Produced once per input and
    read by every layout strategy.

Key Classes:
    - ParagraphType: main / small / note / preface / indent
    - Paragraph: Typed block of lines
    - StructuredContent: Ordered paragraphs in reading order

Dependencies:
    - None (pure Python)

Used By:
    - layout.strategies: All layout strategies
    - core.utils.serialization: JSON parsing
    - export.controller: Export requests built from plain text
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, Tuple


class ParagraphType(Enum):
    """Role of a paragraph; drives per-type size scaling in flowing layouts."""

    MAIN = "main"
    SMALL = "small"
    NOTE = "note"
    PREFACE = "preface"
    INDENT = "indent"

    @classmethod
    def from_value(cls, value: str) -> "ParagraphType":
        """
        Parse a paragraph type name.

        Args:
            value: Case-insensitive type name

        Returns:
            Matching ParagraphType

        Raises:
            ValueError: If the name is unknown
        """
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(t.value for t in cls)
            raise ValueError(f"Unknown paragraph type '{value}'. Expected one of: {valid}") from None


@dataclass(frozen=True, slots=True)
class Paragraph:
    """
    One typed paragraph.

    Attributes:
        type: Paragraph role
        lines: Source lines in order, explicit breaks preserved
    """

    type: ParagraphType
    lines: Tuple[str, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.type, ParagraphType):
            raise TypeError(f"type must be ParagraphType, got {type(self.type).__name__}")
        # Accept lists from callers but store an immutable tuple
        if not isinstance(self.lines, tuple):
            object.__setattr__(self, "lines", tuple(self.lines))
        for line in self.lines:
            if not isinstance(line, str):
                raise TypeError(f"lines must be strings, got {type(line).__name__}")

    @property
    def char_count(self) -> int:
        """Number of characters across all lines."""
        return sum(len(line) for line in self.lines)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.value, "lines": list(self.lines)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Paragraph":
        return cls(
            type=ParagraphType.from_value(data.get("type", "main")),
            lines=tuple(data.get("lines", ())),
        )


@dataclass(frozen=True, slots=True)
class StructuredContent:
    """
    Ordered paragraphs. Insertion order is the reading order.

    Example:
        >>> content = StructuredContent.from_text("床前明月光\\n疑是地上霜")
        >>> content.paragraphs[0].lines
        ('床前明月光', '疑是地上霜')
    """

    paragraphs: Tuple[Paragraph, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.paragraphs, tuple):
            object.__setattr__(self, "paragraphs", tuple(self.paragraphs))

    @classmethod
    def empty(cls) -> "StructuredContent":
        return cls(paragraphs=())

    @classmethod
    def from_text(cls, text: str, paragraph_type: ParagraphType = ParagraphType.MAIN) -> "StructuredContent":
        """
        Wrap plain text as a single paragraph, one line per newline.

        Empty text gives empty content rather than a paragraph with one
        empty line.
        """
        if not text:
            return cls.empty()
        lines = tuple(text.replace("\r\n", "\n").split("\n"))
        return cls(paragraphs=(Paragraph(type=paragraph_type, lines=lines),))

    @property
    def is_empty(self) -> bool:
        """True when there is no character to lay out."""
        return self.char_count == 0

    @property
    def char_count(self) -> int:
        return sum(p.char_count for p in self.paragraphs)

    def iter_chars(self) -> Iterator[str]:
        """Yield every character in reading order, line breaks dropped."""
        for paragraph in self.paragraphs:
            for line in paragraph.lines:
                yield from line

    def all_lines(self) -> Tuple[str, ...]:
        return tuple(line for p in self.paragraphs for line in p.lines)

    def to_dict(self) -> Dict[str, Any]:
        return {"paragraphs": [p.to_dict() for p in self.paragraphs]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StructuredContent":
        return cls(paragraphs=tuple(Paragraph.from_dict(p) for p in data.get("paragraphs", ())))
