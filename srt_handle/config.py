"""Rule configuration: parsing of the KEY: "phrase" ... text format."""

import os
import re
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .srt_utils import read_text

CONFIG_ENV_VAR = "SRT_HANDLE_CONFIG"
DEFAULT_CONFIG_FILE = "config.txt"

DEFAULT_CONFIG_TEXT = """\
SKIP: "[Music]" "[Applause]" "[Laughter]" "♪"
COMBINE: "Mr. Smith" "New York"
END: "the" "a" "an" "and" "of the"
INSERT: "as well"
SPLIT: "and"
"""

QUOTED_RE = re.compile(r'"([^"]*)"')


@dataclass(frozen=True)
class Config:
    skip_words: tuple = ()
    combine_phrases: tuple = ()
    end_words: tuple = ()
    insert_phrases: tuple = ()
    split_words: tuple = ()

    @property
    def combine_rules(self):
        """Pairs tried by the combine pass: COMBINE first, then INSERT."""
        return self.combine_phrases + self.insert_phrases


def parse_quoted_list(content):
    """Return the contents of every "..." span, in order of appearance.

    Empty literals are dropped.
    """
    return [phrase for phrase in QUOTED_RE.findall(content) if phrase]


def parse_phrase_pairs(content):
    """Split each quoted phrase on its first space into (prefix, suffix).

    Phrases without a space are dropped.
    """
    pairs = []
    for phrase in parse_quoted_list(content):
        if " " in phrase:
            prefix, suffix = phrase.split(" ", 1)
            pairs.append((prefix, suffix))
    return tuple(pairs)


def parse_config(text):
    """Parse config text into a Config.

    Unknown keys and blank lines are ignored. When a key appears on more
    than one line, the last one wins.
    """
    fields = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or ":" not in line:
            continue
        key, content = line.split(":", 1)
        if key == "SKIP":
            fields["skip_words"] = tuple(parse_quoted_list(content))
        elif key == "COMBINE":
            fields["combine_phrases"] = parse_phrase_pairs(content)
        elif key == "INSERT":
            fields["insert_phrases"] = parse_phrase_pairs(content)
        elif key == "END":
            fields["end_words"] = tuple(p for p in parse_quoted_list(content) if p.split())
        elif key == "SPLIT":
            fields["split_words"] = tuple(parse_quoted_list(content))
    return Config(**fields)


def resolve_config_path(path=None):
    """Pick the config file to load, or None for the embedded default.

    Order: explicit path, $SRT_HANDLE_CONFIG (also read from .env),
    ./config.txt if it exists.
    """
    if path:
        return Path(path)
    load_dotenv()
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    if Path(DEFAULT_CONFIG_FILE).is_file():
        return Path(DEFAULT_CONFIG_FILE)
    return None


def load_config(path=None):
    """Load Config from file, falling back to the embedded default."""
    config_path = resolve_config_path(path)
    if config_path is None:
        return parse_config(DEFAULT_CONFIG_TEXT)
    return parse_config(read_text(config_path, what="config file"))
