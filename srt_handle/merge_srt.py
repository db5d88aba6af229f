"""Merge a two-language SRT into bilingual entries.

Consecutive entries with the same timestamp line are joined into one entry
with the two texts on separate lines.

Usage:
    python -m srt_handle.merge_srt INPUT [-o OUTPUT]
"""

import argparse
import sys

from .errors import SrtHandleError
from .srt_utils import format_srt, output_path_for, parse_srt, read_text, write_text


def merge_bilingual(entries):
    """Pair consecutive entries sharing a timestamp.

    A merged pair consumes both entries, so at most two entries end up in
    one. Unpaired entries pass through unchanged.
    """
    merged = []
    i = 0
    while i < len(entries):
        current = entries[i]
        if i + 1 < len(entries) and entries[i + 1]["timestamp"] == current["timestamp"]:
            merged.append(
                {
                    "idx": current["idx"],
                    "timestamp": current["timestamp"],
                    "text": f"{current['text']}\n{entries[i + 1]['text']}",
                }
            )
            i += 2
        else:
            merged.append(current)
            i += 1
    return merged


def merge_text(content):
    """Merge SRT text. Returns (output_text, original_count, merged_count)."""
    entries = parse_srt(content)
    merged = merge_bilingual(entries)
    return format_srt(merged), len(entries), len(merged)


def merge_file(input_path, output_path=None):
    """Merge one SRT file. Returns (output_path, original_count, merged_count)."""
    if output_path is None:
        output_path = output_path_for(input_path, "_merged")

    text, original_count, merged_count = merge_text(read_text(input_path))
    write_text(output_path, text)
    return output_path, original_count, merged_count


def main(argv=None):
    parser = argparse.ArgumentParser(description="Merge same-timestamp SRT entries into bilingual entries")
    parser.add_argument("input", help="Input SRT file with both languages")
    parser.add_argument("-o", "--output", help="Output SRT file (default: <input>_merged.srt)")
    args = parser.parse_args(argv)

    try:
        output_path, original_count, merged_count = merge_file(args.input, args.output)
    except SrtHandleError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Merged {original_count} entries into {merged_count}", file=sys.stderr)
    print(f"Merged SRT file saved to: {output_path}")


if __name__ == "__main__":
    main()
