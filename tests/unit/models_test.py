"""Unit tests for Pydantic models."""

import pytest
from pydantic import ValidationError

from ts_expect_errors.models import (
    CommentStyle,
    Diagnostic,
    Edit,
    EditKind,
    FileReport,
    Location,
    NodeKind,
    Position,
    Region,
    RegionKind,
    SyntaxNode,
)


class TestDiagnosticModel:
    def test_requires_line_column_and_code(self) -> None:
        with pytest.raises(ValidationError):
            Diagnostic(line=1, column=1)  # type: ignore[call-arg]

    def test_defaults_file_and_message(self) -> None:
        diagnostic = Diagnostic(line=3, column=7, code="TS2322")
        assert diagnostic.file == ""
        assert diagnostic.message == ""


class TestSyntaxNodeModel:
    def test_nested_nodes_round_trip_through_dict(self) -> None:
        location = Location(start=Position(line=1, column=1), end=Position(line=1, column=10))
        node = SyntaxNode(
            kind=NodeKind.CONDITIONAL_GROUP,
            location=location,
            branches=[SyntaxNode(kind=NodeKind.CONDITIONAL_BRANCH, location=location, condition=location)],
        )
        restored = SyntaxNode.model_validate(node.model_dump())
        assert restored == node
        assert restored.branches[0].condition == location

    def test_children_are_not_shared_between_instances(self) -> None:
        first = SyntaxNode(kind=NodeKind.ELEMENT)
        second = SyntaxNode(kind=NodeKind.ELEMENT)
        first.children.append(SyntaxNode(kind=NodeKind.TEXT))
        assert second.children == []

    def test_kind_accepts_string_value(self) -> None:
        node = SyntaxNode.model_validate({"kind": "repeat"})
        assert node.kind is NodeKind.REPEAT


def test_region_defaults_to_line_comments() -> None:
    region = Region(kind=RegionKind.CODE, start=1, end=4)
    assert region.style is CommentStyle.LINE


def test_edit_optional_fields_default_to_none() -> None:
    edit = Edit(kind=EditKind.DELETE, line=2)
    assert edit.column is None
    assert edit.text is None
    assert edit.code is None


def test_file_report_defaults() -> None:
    report = FileReport(path="a.ts")
    assert (report.inserted, report.removed, report.skipped) == (0, 0, 0)
    assert report.changed is False
    assert report.error is None
