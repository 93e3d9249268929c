"""Translation content: single-segment texts and multi-segment messages.

Content is a closed variant, ``Text | Message``, discriminated by
``ContentKind``. Both are immutable; placeholder replacement returns a new
instance (or the same one when nothing matches).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Iterable, Iterator, Mapping, Tuple, Union


class ContentKind(str, Enum):
    """Discriminant between single- and multi-segment content."""

    TEXT = "text"
    MESSAGE = "message"


class Replacer(Mapping[str, str]):
    """Fluent builder of placeholder replacements.

    Values are converted with ``str()`` when set. A Replacer is a read-only
    mapping, so it can be passed anywhere a mapping of replacements is
    accepted.

    Usage:
        replacer = Replacer().set("{player}", "Ann").set("{score}", 42)
        text.replace_many(replacer)
    """

    def __init__(self, replacements: Mapping[str, Any] = None):
        self._replacements: Dict[str, str] = {}
        for placeholder, value in (replacements or {}).items():
            self.set(placeholder, value)

    def set(self, placeholder: str, value: Any) -> "Replacer":
        """Register ``placeholder`` -> ``str(value)`` and return self."""
        self._replacements[placeholder] = value if isinstance(value, str) else str(value)
        return self

    def __getitem__(self, placeholder: str) -> str:
        return self._replacements[placeholder]

    def __iter__(self) -> Iterator[str]:
        return iter(self._replacements)

    def __len__(self) -> int:
        return len(self._replacements)

    def __repr__(self) -> str:
        return f"Replacer({self._replacements!r})"


def contains_brackets(content: str) -> bool:
    """Check whether ``content`` holds a non-empty ``{placeholder}``.

    Examples:
        >>> contains_brackets("Hello {name}")
        True
        >>> contains_brackets("Hello {}")
        False
    """
    if not content:
        return False
    start = -1
    for index, char in enumerate(content):
        if char == "{":
            start = index
        elif char == "}" and start != -1 and index > start + 1:
            return True
    return False


def _replace_segment(segment: str, field: str, value: str) -> str:
    if field not in segment:
        return segment
    return segment.replace(field, value)


def _coerce_value(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


@dataclass(frozen=True)
class Text:
    """Single-segment translated content."""

    content: str
    kind: ClassVar[ContentKind] = ContentKind.TEXT

    def __post_init__(self):
        if not isinstance(self.content, str):
            raise TypeError(
                f"Text content must be a string, got {type(self.content).__name__}"
            )

    def replace(self, field: str, value: Any) -> "Text":
        """Replace every occurrence of ``field`` with ``value``.

        Returns:
            A new Text, or this instance when ``field`` is empty or absent.
        """
        if not field or field not in self.content:
            return self
        return Text(self.content.replace(field, _coerce_value(value)))

    def replace_many(self, values: Mapping[str, Any]) -> "Text":
        """Apply replacements in mapping order, left to right."""
        result = self
        for field, value in (values or {}).items():
            result = result.replace(field, value)
        return result

    def __str__(self) -> str:
        return self.content


@dataclass(frozen=True)
class Message:
    """Multi-segment translated content; each segment is one line."""

    segments: Tuple[str, ...]
    kind: ClassVar[ContentKind] = ContentKind.MESSAGE

    def __init__(self, segments: Iterable[str]):
        if isinstance(segments, str):
            raise TypeError("Message segments must be an iterable of strings, not a string")
        segments = tuple(segments)
        for segment in segments:
            if not isinstance(segment, str):
                raise TypeError(
                    f"Message segments must be strings, got {type(segment).__name__}"
                )
        object.__setattr__(self, "segments", segments)

    @property
    def content(self) -> Tuple[str, ...]:
        return self.segments

    def replace(self, field: str, value: Any) -> "Message":
        """Replace ``field`` with ``value`` in every segment.

        Segments without ``field`` are shared with the original.

        Returns:
            A new Message, or this instance when nothing matches.
        """
        if not field or not any(field in segment for segment in self.segments):
            return self
        value = _coerce_value(value)
        return Message(_replace_segment(segment, field, value) for segment in self.segments)

    def replace_many(self, values: Mapping[str, Any]) -> "Message":
        """Apply replacements in mapping order, left to right."""
        result = self
        for field, value in (values or {}).items():
            result = result.replace(field, value)
        return result

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[str]:
        return iter(self.segments)

    def __str__(self) -> str:
        return "\n".join(self.segments)


Content = Union[Text, Message]
