"""Shared test fixtures."""

from pathlib import Path

import pytest

from srt_handle.config import DEFAULT_CONFIG_TEXT, load_config, parse_config
from srt_handle.srt_utils import read_srt

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_srt_path():
    return FIXTURES / "sample.srt"


@pytest.fixture
def bilingual_srt_path():
    return FIXTURES / "bilingual.srt"


@pytest.fixture
def rules_path():
    return FIXTURES / "rules.txt"


@pytest.fixture
def sample_entries(sample_srt_path):
    return read_srt(sample_srt_path)


@pytest.fixture
def rules_config(rules_path):
    return load_config(rules_path)


@pytest.fixture
def default_config():
    return parse_config(DEFAULT_CONFIG_TEXT)


@pytest.fixture
def make_entries():
    def _make(*texts, timestamp="00:00:01,000 --> 00:00:02,000"):
        return [{"idx": i, "timestamp": timestamp, "text": t} for i, t in enumerate(texts, 1)]

    return _make


@pytest.fixture
def tmp_srt(tmp_path):
    return tmp_path / "output.srt"
