"""Tests for srt_handle.merge_srt."""

import pytest

from srt_handle.merge_srt import main, merge_bilingual, merge_file, merge_text
from srt_handle.srt_utils import read_srt

T1 = "00:00:01,000 --> 00:00:02,000"
T2 = "00:00:03,000 --> 00:00:04,000"


def entry(idx, timestamp, text):
    return {"idx": idx, "timestamp": timestamp, "text": text}


# --- merge_bilingual ---


def test_merge_pairs_same_timestamp():
    entries = [entry(1, T1, "A"), entry(2, T1, "B"), entry(3, T2, "C")]
    merged = merge_bilingual(entries)
    assert [(e["timestamp"], e["text"]) for e in merged] == [(T1, "A\nB"), (T2, "C")]


def test_merge_no_triple_chain():
    entries = [entry(1, T1, "A"), entry(2, T1, "B"), entry(3, T1, "C")]
    merged = merge_bilingual(entries)
    assert [e["text"] for e in merged] == ["A\nB", "C"]


def test_merge_unpaired_pass_through():
    entries = [entry(1, T1, "A"), entry(2, T2, "B"), entry(3, T1, "C")]
    assert merge_bilingual(entries) == entries


def test_merge_does_not_mutate_input():
    entries = [entry(1, T1, "A"), entry(2, T1, "B")]
    merge_bilingual(entries)
    assert entries[0]["text"] == "A"


def test_merge_empty():
    assert merge_bilingual([]) == []


# --- merge_text / merge_file ---


def test_merge_text_counts_and_output():
    content = f"1\n{T1}\nHello\n\n2\n{T1}\nBonjour\n\n3\n{T2}\nBye\n"
    text, original_count, merged_count = merge_text(content)
    assert (original_count, merged_count) == (3, 2)
    assert text == f"1\n{T1}\nHello\nBonjour\n\n2\n{T2}\nBye\n"


def test_merge_file_default_output(tmp_path, bilingual_srt_path):
    src = tmp_path / "show.srt"
    src.write_text(bilingual_srt_path.read_text(encoding="utf-8"), encoding="utf-8")
    output_path, original_count, merged_count = merge_file(src)
    assert output_path == tmp_path / "show_merged.srt"
    assert (original_count, merged_count) == (5, 3)
    content = output_path.read_text(encoding="utf-8")
    assert "Hello there.\nBonjour." in content
    assert content.startswith("1\n")


def test_merge_output_reparses_as_single_line(tmp_path, bilingual_srt_path):
    output_path, _, _ = merge_file(bilingual_srt_path, tmp_path / "out.srt")
    entries = read_srt(output_path)
    assert [e["text"] for e in entries] == [
        "Hello there. Bonjour.",
        "How are you? Comment ça va ?",
        "Goodbye.",
    ]


# --- CLI ---


def test_main_reports_counts(tmp_path, bilingual_srt_path, capsys):
    out = tmp_path / "out.srt"
    main([str(bilingual_srt_path), "-o", str(out)])
    captured = capsys.readouterr()
    assert "Merged 5 entries into 3" in captured.err
    assert out.exists()


def test_main_unwritable_output(tmp_path, bilingual_srt_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main([str(bilingual_srt_path), "-o", str(tmp_path / "missing_dir" / "out.srt")])
    assert exc.value.code == 1
    assert "Failed to write" in capsys.readouterr().err
