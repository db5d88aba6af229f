"""Batch-process a directory of subtitle files.

Renames files matching known patterns into canonical slot names, runs the
slot's action on each (rule processing or bilingual merge), then optionally
deletes the slot inputs.

Usage:
    python -m srt_handle.batch DIR [-c CONFIG] [--slots slots.yaml] [--cleanup]

Slot manifest format:
    slots:
      - name: input.srt
        action: process
        patterns: ["*.en.srt", "*_en.srt"]
"""

import argparse
import os
import sys
from pathlib import Path

import yaml

from .config import load_config
from .errors import SlotManifestError, SrtHandleError
from .merge_srt import merge_file
from .process_srt import format_process_stats, process_file

ACTIONS = ("process", "merge")

DEFAULT_SLOTS = [
    {
        "name": "input.srt",
        "action": "process",
        "patterns": ["*.en.srt", "*_en.srt", "*.eng.srt"],
    },
    {
        "name": "bilingual.srt",
        "action": "merge",
        "patterns": ["*.bilingual.srt", "*_bilingual.srt", "*.zh-en.srt", "*.en-zh.srt"],
    },
]


def load_slots(manifest_path):
    """Load slot definitions from a YAML manifest."""
    with open(manifest_path, encoding="utf-8") as f:
        manifest = yaml.safe_load(f)

    if not isinstance(manifest, dict) or not manifest.get("slots"):
        raise SlotManifestError(f"No slots defined in {manifest_path}")

    slots = manifest["slots"]
    for slot in slots:
        if not isinstance(slot, dict) or not slot.get("name") or not slot.get("patterns"):
            raise SlotManifestError(f"Slot needs a name and patterns: {slot!r}")
        name, patterns = slot["name"], slot["patterns"]
        if not isinstance(name, str) or Path(name).name != name:
            raise SlotManifestError(f"Slot name must be a plain file name: {name!r}")
        if not isinstance(patterns, list) or not all(isinstance(p, str) and p for p in patterns):
            raise SlotManifestError(f"Slot patterns must be a list of strings: {patterns!r}")
        if slot.get("action", "process") not in ACTIONS:
            raise SlotManifestError(f"Unknown action '{slot['action']}' for slot {slot['name']}")
        slot.setdefault("action", "process")
    return slots


def find_matches(directory, patterns, exclude=()):
    """Sorted files in directory matching any pattern, first pattern first."""
    matches = []
    for pattern in patterns:
        for path in sorted(directory.glob(pattern)):
            if path.is_file() and path.name not in exclude and path not in matches:
                matches.append(path)
    return matches


def rename_into_slots(directory, slots, warnings):
    """Phase 1: move the first match for each slot to the slot name.

    Returns ({slot name: slot path} for every filled slot, [(old, new) names]).
    """
    slot_names = {slot["name"] for slot in slots}
    filled = {}
    renamed = []
    for slot in slots:
        target = directory / slot["name"]
        matches = find_matches(directory, slot["patterns"], exclude=slot_names)
        if target.is_file():
            filled[slot["name"]] = target
            if matches:
                warnings.append(f"{slot['name']} already exists, ignoring {len(matches)} match(es)")
            continue
        if not matches:
            continue
        source = matches[0]
        try:
            os.rename(source, target)
        except OSError as e:
            warnings.append(f"could not rename {source.name} -> {target.name}: {e}")
            continue
        renamed.append((source.name, target.name))
        filled[slot["name"]] = target
        for extra in matches[1:]:
            warnings.append(f"{extra.name} also matches {slot['name']}, left untouched")
    return filled, renamed


def run_slot(slot, path, config):
    """Phase 2 for one slot. Returns (output_path, summary line)."""
    if slot["action"] == "merge":
        output_path, original_count, merged_count = merge_file(path)
        return output_path, f"  Merged {original_count} entries into {merged_count}"
    output_path, stats = process_file(path, config=config)
    return output_path, format_process_stats(stats)


def delete_files(paths, warnings):
    """Phase 3: delete each path; failures become warnings."""
    deleted = []
    for path in paths:
        try:
            os.remove(path)
            deleted.append(path.name)
        except OSError as e:
            warnings.append(f"could not delete {path}: {e}")
    return deleted


def batch(directory, config=None, slots=None, cleanup=False):
    """Rename, process and optionally clean up one directory.

    Returns a summary dict with keys: renamed, outputs, deleted, warnings.
    """
    directory = Path(directory)
    if config is None:
        config = load_config()
    if slots is None:
        slots = DEFAULT_SLOTS

    warnings = []
    filled, renamed = rename_into_slots(directory, slots, warnings)
    for old, new in renamed:
        print(f"Renamed {old} -> {new}")

    outputs = []
    done = []
    for slot in slots:
        path = filled.get(slot["name"])
        if path is None:
            continue
        print(f"Running {slot['action']} on {path.name}")
        try:
            output_path, summary = run_slot(slot, path, config)
        except SrtHandleError as e:
            warnings.append(f"{e}; keeping {path.name}")
            continue
        print(summary)
        outputs.append(str(output_path))
        done.append(path)

    # only inputs whose output was written are removed
    deleted = []
    if cleanup:
        deleted = delete_files(done, warnings)

    for w in warnings:
        print(f"WARNING: {w}", file=sys.stderr)

    return {
        "renamed": renamed,
        "outputs": outputs,
        "deleted": deleted,
        "warnings": warnings,
    }


def main(argv=None):
    parser = argparse.ArgumentParser(description="Rename and process subtitle files in a directory")
    parser.add_argument("directory", help="Directory to scan")
    parser.add_argument("-c", "--config", help="Rules file (default: $SRT_HANDLE_CONFIG, ./config.txt, built-in)")
    parser.add_argument("--slots", help="Slot manifest YAML file (default: built-in slots)")
    parser.add_argument("--cleanup", action="store_true", help="Delete slot inputs after processing")
    args = parser.parse_args(argv)

    if not Path(args.directory).is_dir():
        print(f"ERROR: Not a directory: {args.directory}", file=sys.stderr)
        sys.exit(1)

    try:
        config = load_config(args.config)
        slots = load_slots(args.slots) if args.slots else None
    except (SrtHandleError, OSError, yaml.YAMLError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    result = batch(args.directory, config, slots, cleanup=args.cleanup)
    print(f"Batch complete: {len(result['outputs'])} file(s) written, {len(result['warnings'])} warning(s)")


if __name__ == "__main__":
    main()
