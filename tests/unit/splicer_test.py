import pytest

from ts_expect_errors.core.splicer import LineBuffer
from ts_expect_errors.models import Edit, EditKind


class TestLineBuffer:
    def test_preserves_crlf_newlines(self) -> None:
        buffer = LineBuffer("a\r\nb\r\n")
        buffer.insert_line_before(2, "x")
        assert buffer.text() == "a\r\nx\r\nb\r\n"

    def test_trailing_newline_is_kept(self) -> None:
        buffer = LineBuffer("a\nb\n")
        assert len(buffer) == 3
        assert buffer.text() == "a\nb\n"

    def test_insert_after_last_line(self) -> None:
        buffer = LineBuffer("a")
        buffer.insert_line_before(2, "b")
        assert buffer.text() == "a\nb"

    def test_splice_inline_bounds(self) -> None:
        buffer = LineBuffer("abc")
        buffer.splice_inline(1, 4, "!")
        assert buffer.text() == "abc!"
        with pytest.raises(IndexError):
            buffer.splice_inline(1, 6, "?")

    @pytest.mark.parametrize("number", [0, 3])
    def test_line_out_of_range(self, number: int) -> None:
        with pytest.raises(IndexError):
            LineBuffer("a\nb").line(number)

    def test_delete_and_replace(self) -> None:
        buffer = LineBuffer("a\nb\nc")
        buffer.replace_line(3, "C")
        buffer.delete_line(1)
        assert buffer.text() == "b\nC"


class TestApply:
    def test_edits_use_original_coordinates(self) -> None:
        buffer = LineBuffer("one\ntwo\nthree\nfour")
        buffer.apply(
            [
                Edit(kind=EditKind.INSERT, line=2, text="// before two"),
                Edit(kind=EditKind.DELETE, line=3),
                Edit(kind=EditKind.INSERT, line=4, text="// before four"),
            ]
        )
        assert buffer.text() == "one\n// before two\ntwo\n// before four\nfour"

    def test_inline_splices_run_right_to_left(self) -> None:
        buffer = LineBuffer("<a><b></b></a>")
        buffer.apply(
            [
                Edit(kind=EditKind.INSERT, line=1, column=1, text="[1]"),
                Edit(kind=EditKind.INSERT, line=1, column=4, text="[4]"),
            ]
        )
        assert buffer.text() == "[1]<a>[4]<b></b></a>"

    def test_new_line_goes_above_inline_edits_on_same_line(self) -> None:
        buffer = LineBuffer("  <p>x</p>")
        buffer.apply(
            [
                Edit(kind=EditKind.INSERT, line=1, text="  // marker"),
                Edit(kind=EditKind.INSERT, line=1, column=3, text="<!-- m -->"),
            ]
        )
        assert buffer.text() == "  // marker\n  <!-- m --><p>x</p>"

    def test_duplicate_edits_are_applied_once(self) -> None:
        buffer = LineBuffer("a\nb")
        edit = Edit(kind=EditKind.INSERT, line=2, text="x")
        applied = buffer.apply([edit, edit.model_copy()])
        assert len(applied) == 1
        assert buffer.text() == "a\nx\nb"

    def test_replace_then_delete_on_other_lines(self) -> None:
        buffer = LineBuffer("keep\nfoo() // m\n// m\nend")
        buffer.apply(
            [
                Edit(kind=EditKind.DELETE, line=3),
                Edit(kind=EditKind.REPLACE_INLINE, line=2, text="foo()"),
            ]
        )
        assert buffer.text() == "keep\nfoo()\nend"

    def test_out_of_range_edit_raises(self) -> None:
        with pytest.raises(IndexError):
            LineBuffer("a").apply([Edit(kind=EditKind.DELETE, line=5)])

    def test_rewrite_runs_before_inline_splice_on_same_line(self) -> None:
        buffer = LineBuffer("<!-- old --><p>ok</p> <div")
        buffer.apply(
            [
                Edit(kind=EditKind.INSERT, line=1, column=11, text="<!-- new -->"),
                Edit(kind=EditKind.REPLACE_INLINE, line=1, text="<p>ok</p> <div"),
            ]
        )
        assert buffer.text() == "<p>ok</p> <!-- new --><div"
