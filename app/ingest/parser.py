from dataclasses import dataclass
from typing import Iterable, Iterator, List


@dataclass(frozen=True)
class TranscriptLine:
    """A single trimmed, non-empty line of a transcript and its 1-based physical line number.
    Why available: Standard unit for analysis; consumed by the key-point and task extractors."""

    line_no: int
    text: str


def split_lines_stream(lines: Iterable[str]) -> Iterator[TranscriptLine]:
    """Streaming line segmenter: consumes an iterable of raw lines and yields trimmed, non-empty TranscriptLine objects in order.
    Why available: Lets callers feed a file object directly without reading the whole transcript first."""
    for idx, line in enumerate(lines, start=1):
        text = line.strip()
        if not text:
            continue
        yield TranscriptLine(line_no=idx, text=text)


def split_lines(text: str) -> List[TranscriptLine]:
    """
    Split a whole transcript on line boundaries (\\n, \\r\\n, \\r and Unicode line separators).
    Empty or whitespace-only input gives an empty list.
    """
    return list(split_lines_stream((text or "").splitlines()))


def line_texts(text: str) -> List[str]:
    """Return only the text of each segmented line. Used where line numbers are not needed."""
    return [line.text for line in split_lines(text)]
