"""SRT parsing, formatting, and file utilities."""

import re
from pathlib import Path

from .errors import FileReadError, FileWriteError

INDEX_RE = re.compile(r"[0-9]+")


def parse_srt(content):
    """Parse SRT text into list of entries.

    Each entry is a dict with keys: idx, timestamp, text.
    Blocks are separated by a blank line. A block needs an index line,
    a timestamp line and at least one text line; anything else is skipped.
    Text lines are joined with a single space.
    """
    content = content.replace("\r\n", "\n")

    entries = []
    for raw in content.split("\n\n"):
        lines = [line for line in raw.split("\n") if line.strip()]
        if len(lines) < 3:
            continue
        if not INDEX_RE.fullmatch(lines[0].strip()):
            continue
        entries.append(
            {
                "idx": int(lines[0].strip()),
                "timestamp": lines[1],
                "text": " ".join(lines[2:]),
            }
        )

    return entries


def format_srt(entries):
    """Render entries as SRT text with sequential numbering."""
    return "\n".join(f"{i}\n{e['timestamp']}\n{e['text']}\n" for i, e in enumerate(entries, 1))


def read_text(filepath, what="input file"):
    """Read a UTF-8 text file, dropping a BOM if present."""
    try:
        with open(filepath, encoding="utf-8-sig") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(filepath, f"Failed to read {what}") from e


def write_text(filepath, content, what="output file"):
    try:
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        raise FileWriteError(filepath, f"Failed to write {what}") from e


def read_srt(filepath):
    """Read and parse an SRT file."""
    return parse_srt(read_text(filepath))


def write_srt(entries, filepath):
    """Write entries to SRT file with sequential numbering."""
    write_text(filepath, format_srt(entries))


def output_path_for(input_path, suffix):
    """Default output path: <stem><suffix>.srt next to the input."""
    path = Path(input_path)
    return path.with_name(f"{path.stem}{suffix}.srt")
