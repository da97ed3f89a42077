from __future__ import annotations

import pytest

from vine.rows import (
    cx_to_rx,
    del_row,
    insert_row,
    join_rows,
    render_row,
    row_append_string,
    row_del_char,
    row_insert_char,
    rows_to_string,
    rx_to_cx,
    split_row,
)


def test_render_expands_tabs_to_next_stop():
    assert render_row("\tab", 4) == "    ab"
    assert render_row("a\tb", 4) == "a   b"
    assert render_row("abcd\tx", 4) == "abcd    x"
    assert render_row("a\tb", 8) == "a       b"


def test_render_passes_other_bytes_through():
    assert render_row("x\x01y\xe9", 4) == "x\x01y\xe9"


@pytest.mark.parametrize("chars", ["", "abc", "\t", "a\tb\tc", "\t\tfoo", "ab\t\t\tz", "x\x01\ty"])
@pytest.mark.parametrize("tab_stop", [1, 2, 4, 8])
def test_cx_rx_round_trip(chars, tab_stop):
    for cx in range(len(chars) + 1):
        assert rx_to_cx(chars, cx_to_rx(chars, cx, tab_stop), tab_stop) == cx


def test_rx_inside_tab_maps_to_the_tab():
    assert rx_to_cx("\tx", 2, 4) == 0
    assert rx_to_cx("\tx", 4, 4) == 1


def test_rx_past_end_maps_to_row_length():
    assert rx_to_cx("ab", 10, 4) == 2


def test_cx_to_rx_counts_tab_width():
    assert cx_to_rx("a\tb", 2, 4) == 4
    assert cx_to_rx("a\tb", 3, 4) == 5


@pytest.mark.parametrize("chars", ["\t\tfoo", "foo", "\t", "abcd\tx"])
def test_display_length_with_tabs_on_stops(chars):
    tabs = chars.count("\t")
    assert len(render_row(chars, 4)) == len(chars) + tabs * 3


@pytest.mark.parametrize("chars", ["a\tb", "ab\t\tc", "\t x\t"])
def test_display_length_bounded_by_tab_count(chars):
    tabs = chars.count("\t")
    assert len(chars) <= len(render_row(chars, 4)) <= len(chars) + tabs * 3


class TestRowStore:
    def test_insert_renumbers_and_marks_dirty(self, make_cfg):
        cfg = make_cfg(["a", "b"])
        insert_row(cfg, 1, "x")
        assert [r.chars for r in cfg.rows] == ["a", "x", "b"]
        assert [r.idx for r in cfg.rows] == [0, 1, 2]
        assert cfg.dirty == 1

    def test_insert_clamps_position(self, make_cfg):
        cfg = make_cfg(["a"])
        insert_row(cfg, 99, "end")
        insert_row(cfg, -3, "start")
        assert [r.chars for r in cfg.rows] == ["start", "a", "end"]
        assert [r.idx for r in cfg.rows] == [0, 1, 2]

    def test_insert_derives_render_and_highlight(self, make_cfg):
        cfg = make_cfg([])
        insert_row(cfg, 0, "\tx")
        row = cfg.rows[0]
        assert row.render == "    x"
        assert len(row.hl) == row.rsize

    def test_delete_renumbers(self, make_cfg):
        cfg = make_cfg(["a", "b", "c"])
        del_row(cfg, 0)
        assert [r.chars for r in cfg.rows] == ["b", "c"]
        assert [r.idx for r in cfg.rows] == [0, 1]
        assert cfg.dirty == 1

    @pytest.mark.parametrize("at", [-1, 3, 100])
    def test_delete_out_of_range_is_noop(self, make_cfg, at):
        cfg = make_cfg(["a", "b", "c"])
        del_row(cfg, at)
        assert cfg.numrows == 3
        assert cfg.dirty == 0

    def test_split(self, make_cfg):
        cfg = make_cfg(["hello world"])
        split_row(cfg, 0, 5)
        assert [r.chars for r in cfg.rows] == ["hello", " world"]
        assert [r.render for r in cfg.rows] == ["hello", " world"]

    def test_split_clamps_column(self, make_cfg):
        cfg = make_cfg(["ab"])
        split_row(cfg, 0, 10)
        assert [r.chars for r in cfg.rows] == ["ab", ""]

    def test_split_out_of_range_is_noop(self, make_cfg):
        cfg = make_cfg(["ab"])
        split_row(cfg, 4, 1)
        assert [r.chars for r in cfg.rows] == ["ab"]

    def test_join(self, make_cfg):
        cfg = make_cfg(["ab", "cd", "ef"])
        join_rows(cfg, 0, 1)
        assert [r.chars for r in cfg.rows] == ["abcd", "ef"]
        assert [r.idx for r in cfg.rows] == [0, 1]

    @pytest.mark.parametrize("dst,src", [(0, 0), (0, 5), (-1, 1)])
    def test_join_invalid_is_noop(self, make_cfg, dst, src):
        cfg = make_cfg(["ab", "cd"])
        join_rows(cfg, dst, src)
        assert [r.chars for r in cfg.rows] == ["ab", "cd"]
        assert cfg.dirty == 0

    def test_row_mutators(self, make_cfg):
        cfg = make_cfg(["ac"])
        row = cfg.rows[0]
        row_insert_char(cfg, row, 1, "b")
        assert row.chars == "abc"
        row_insert_char(cfg, row, 99, "d")
        assert row.chars == "abcd"
        row_del_char(cfg, row, 0)
        assert row.chars == "bcd"
        row_del_char(cfg, row, 10)
        assert row.chars == "bcd"
        row_append_string(cfg, row, "\te")
        assert row.render == "bcd e"
        assert cfg.dirty == 4

    def test_rows_to_string(self, make_cfg):
        cfg = make_cfg(["a", "", "\tb"])
        assert rows_to_string(cfg) == "a\n\n\tb\n"

    def test_load_leaves_buffer_clean(self, make_cfg):
        cfg = make_cfg(["a", "b"])
        assert cfg.dirty == 0
        assert [r.idx for r in cfg.rows] == [0, 1]
