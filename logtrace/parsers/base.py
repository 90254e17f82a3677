"""
Abstract building blocks for the log line parsing pipeline.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set


@dataclass
class ParseState:
    """
    Working state threaded through the parser stages.

    ``remaining`` shrinks as prefix stages consume text, so later
    stages never see tokens already claimed by earlier ones.
    ``leftovers`` maps a claimed pipe segment's index to the text the
    detector did not use.
    """

    raw: str
    remaining: str
    fields: Dict[str, Any] = field(default_factory=dict)
    leftovers: Dict[int, str] = field(default_factory=dict)

    def get(self, name: str) -> Optional[Any]:
        return self.fields.get(name)

    def set(self, name: str, value: Any) -> None:
        self.fields[name] = value

    def consume(self, length: int) -> None:
        """Drop ``length`` characters from the front of the working copy."""
        self.remaining = self.remaining[length:].strip()


class PrefixExtractor(ABC):
    """
    A stage that recognizes one token at the start of the line.

    Each extractor must implement:
    - consume(): Claim its token, record the field, strip the prefix
    """

    name: str = "prefix"

    @abstractmethod
    def consume(self, state: ParseState) -> bool:
        """
        Try to claim a prefix of ``state.remaining``.

        Args:
            state: Current parse state (mutated on success)

        Returns:
            True if the prefix was recognized and consumed
        """
        pass


class SegmentDetector(ABC):
    """
    A detector run against the ``|``-separated segments of a line body.

    Each detector must implement:
    - match(): Extract its value from a segment, or None

    The first unclaimed segment that matches is the only one considered.
    ``record()`` may still decline it (e.g. an out-of-range status code),
    in which case the segment stays in the message. Text of a claimed
    segment outside the matched token is kept as a leftover.
    """

    name: str = "segment"

    @abstractmethod
    def match(self, segment: str) -> Optional[Any]:
        """
        Extract this detector's value from a trimmed segment.

        Args:
            segment: Trimmed segment text

        Returns:
            The extracted value, or None if the segment does not match
        """
        pass

    def record(self, value: Any, state: ParseState) -> bool:
        """Store the extracted value; return False to leave the segment unclaimed."""
        state.set(self.name, value)
        return True

    def remainder(self, segment: str, value: Any) -> str:
        """Text of ``segment`` around the matched value."""
        if isinstance(value, str):
            start = segment.find(value)
            if start >= 0:
                return cut_span(segment, start, start + len(value))
        return ""

    def claim(self, segments: List[str], consumed: Set[int], state: ParseState) -> Optional[int]:
        """
        Run the detector over the segments.

        Returns:
            Index of the claimed segment, or None
        """
        for index, segment in enumerate(segments):
            if index in consumed:
                continue
            value = self.match(segment)
            if value is None:
                continue
            if not self.record(value, state):
                return None
            consumed.add(index)
            leftover = self.remainder(segment, value)
            if leftover:
                state.leftovers[index] = leftover
            return index
        return None


def cut_span(text: str, start: int, end: int) -> str:
    """Remove ``text[start:end]`` and join what is left with a single space."""
    parts = (text[:start].strip(), text[end:].strip())
    return " ".join(part for part in parts if part)
