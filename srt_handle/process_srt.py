"""Apply skip/combine/end-word rules to an SRT file.

Drops captions containing skip words, joins captions split inside a
configured phrase, and moves dangling end words to the next caption.

Usage:
    python -m srt_handle.process_srt INPUT [-o OUTPUT] [-c CONFIG]
"""

import argparse
import sys

from .config import load_config
from .errors import SrtHandleError
from .srt_utils import format_srt, output_path_for, parse_srt, read_text, write_text


# ---------------------------------------------------------------------------
# Rule passes
# ---------------------------------------------------------------------------

def should_skip(text, skip_words):
    """True if text contains any skip word (case-insensitive substring)."""
    text_lower = text.lower()
    return any(word.lower() in text_lower for word in skip_words)


def apply_skip_filter(entries, skip_words):
    """Drop entries containing a skip word. Returns (kept, skipped_count)."""
    kept = [e for e in entries if not should_skip(e["text"], skip_words)]
    return kept, len(entries) - len(kept)


def apply_combine_rules(entries, combine_phrases):
    """Join neighbours split inside a (prefix, suffix) phrase.

    The first rule whose prefix ends entry i and whose suffix starts entry
    i+1 merges i+1 into i. Position i is then retried so chains collapse.
    Returns count of combines.
    """
    combined = 0
    i = 0
    while i < len(entries) - 1:
        current_text = entries[i]["text"].lower()
        next_text = entries[i + 1]["text"].lower()
        for prefix, suffix in combine_phrases:
            if current_text.endswith(prefix.lower()) and next_text.startswith(suffix.lower()):
                entries[i]["text"] = f"{entries[i]['text']} {entries[i + 1]['text']}"
                del entries[i + 1]
                combined += 1
                break
        else:
            i += 1
    return combined


def apply_end_rules(entries, end_words):
    """Move a trailing end-word phrase from entry i to the start of entry i+1.

    First matching phrase wins; every position is visited once.
    Returns count of moved phrases.
    """
    moved = 0
    for i in range(len(entries) - 1):
        words = entries[i]["text"].split()
        words_lower = [w.lower() for w in words]
        for end_word in end_words:
            parts = [p.lower() for p in end_word.split()]
            if not parts or len(words) < len(parts):
                continue
            if words_lower[len(words) - len(parts):] == parts:
                entries[i]["text"] = " ".join(words[: len(words) - len(parts)])
                entries[i + 1]["text"] = f"{end_word} {entries[i + 1]['text']}"
                moved += 1
                break
    return moved


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

def process_entries(entries, config):
    """Run skip, combine and end-word passes in order.

    Returns (entries, stats) where stats counts each pass's changes.
    """
    entries, skipped = apply_skip_filter(entries, config.skip_words)
    combined = apply_combine_rules(entries, config.combine_rules)
    moved = apply_end_rules(entries, config.end_words)
    stats = {
        "input": len(entries) + skipped + combined,
        "skipped": skipped,
        "combined": combined,
        "moved": moved,
        "output": len(entries),
    }
    return entries, stats


def process_text(content, config):
    """Parse, apply rules and re-serialize SRT text."""
    entries, _ = process_entries(parse_srt(content), config)
    return format_srt(entries)


def process_file(input_path, output_path=None, config=None):
    """Process one SRT file. Returns (output_path, stats)."""
    if config is None:
        config = load_config()
    if output_path is None:
        output_path = output_path_for(input_path, "_processed")

    entries, stats = process_entries(parse_srt(read_text(input_path)), config)
    write_text(output_path, format_srt(entries))
    return output_path, stats


def format_process_stats(stats):
    return (
        f"  {stats['input']} entries in, {stats['output']} out "
        f"(skipped {stats['skipped']}, combined {stats['combined']}, moved {stats['moved']} end words)"
    )


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def main(argv=None):
    parser = argparse.ArgumentParser(description="Process an SRT file with skip/combine/end rules")
    parser.add_argument("input", help="Input SRT file")
    parser.add_argument("-o", "--output", help="Output SRT file (default: <input>_processed.srt)")
    parser.add_argument("-c", "--config", help="Rules file (default: $SRT_HANDLE_CONFIG, ./config.txt, built-in)")
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
        output_path, stats = process_file(args.input, args.output, config)
    except SrtHandleError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    print(format_process_stats(stats), file=sys.stderr)
    print(f"Processed SRT file saved to: {output_path}")


if __name__ == "__main__":
    main()
