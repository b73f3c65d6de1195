import io
import json
import re

import pytest

from cowmaze import config
from cowmaze.report import dump_transitions, export_run, summary_dict, transition_rows, write_transcript
from cowmaze.search import StateSpace
from cowmaze.utils_io import make_run_tag, slugify, write_csv


@pytest.fixture(scope="module")
def searched():
    space = StateSpace()
    return space, space.search()


def test_write_transcript_counts_lines(searched):
    space, result = searched
    buf = io.StringIO()
    n = write_transcript(space, result, stream=buf, dump=False)
    assert n == 1 + 1 + 251 + 1
    assert buf.getvalue().endswith("The maximal search depth encountered is 272\n")


def test_visited_dump_matches_visited_marks(searched):
    space, _ = searched
    buf = io.StringIO()
    assert dump_transitions(space, stream=buf, visited_only=True) == 431
    lines = buf.getvalue().splitlines()
    assert all("  visited: " in line for line in lines)
    assert sum(" or " in line for line in lines) == 31


def test_rows_and_summary(searched):
    space, result = searched
    rows = transition_rows(space)
    assert len(rows) == 431
    alts = [r for r in rows if r["alt0"] or r["alt1"]]
    assert alts and all("55" in r["current"] for r in alts)
    summary = summary_dict(space, result)
    assert summary["goal_state"] == "(m.,GG,50, )"
    assert summary["illegal_hits"] == 0
    json.dumps(summary)


def test_export_run_layout(tmp_path, searched):
    space, result = searched
    csv_path, json_path = export_run(space, result, tmp_path, "tag")
    assert csv_path.endswith("transitions.csv")
    assert json.loads(open(json_path, encoding="utf-8").read())["run_tag"] == "tag"
    assert not list(tmp_path.glob("tag/*.tmp"))


def test_write_csv_without_rows(tmp_path):
    path = write_csv(tmp_path / "empty.csv", [], fieldnames=["a", "b"])
    assert open(path, encoding="utf-8").read().strip() == "a,b"


def test_run_tags():
    assert make_run_tag("first", add_timestamp=False) == "cows_first"
    assert make_run_tag("All Goals", add_timestamp=False, suffix="v2!") == "cows_all_goals_v2"
    assert re.fullmatch(r"cows_first_\d{4}-\d{2}-\d{2}_\d{2}-\d{2}", make_run_tag())
    assert slugify("  ") == "run"


def test_config_normalizers():
    assert config.normalize_trace_entries("12") == 12
    assert config.normalize_trace_entries(None) == int(config.TRACE_ENTRIES)
    with pytest.raises(ValueError):
        config.normalize_trace_entries(0)
    with pytest.raises(ValueError):
        config.normalize_trace_entries("lots")
    assert config.normalize_style(" IEEE ") == "ieee"
    assert config.normalize_style(None) == config.DEFAULT_STYLE
    with pytest.raises(ValueError):
        config.normalize_style("fancy")


def test_bad_trace_entries_env_fails_in_the_normalizer(monkeypatch):
    import importlib

    monkeypatch.setenv("COWS_TRACE_ENTRIES", "lots")
    try:
        importlib.reload(config)
        assert config.TRACE_ENTRIES == "lots"
        with pytest.raises(ValueError, match="trace entries must be an integer"):
            config.normalize_trace_entries(None)
        with pytest.raises(ValueError, match="trace entries must be an integer"):
            StateSpace()
    finally:
        monkeypatch.delenv("COWS_TRACE_ENTRIES")
        importlib.reload(config)
    assert config.normalize_trace_entries(None) == 300
