"""Tests for data models."""

from datetime import datetime

from wxr_flatten.models import BranchElement, ConversionSummary, LeafElement


class TestElements:
    """Test the leaf/branch element variants."""

    def test_leaf_has_no_children(self) -> None:
        """Test leaves carry no children attribute."""
        leaf = LeafElement('title', 'x')

        assert leaf.is_leaf
        assert not hasattr(leaf, 'children')

    def test_branch_children_are_not_shared(self) -> None:
        """Test each branch owns its own children list."""
        first = BranchElement('item')
        second = BranchElement('item')
        first.children.append(LeafElement('a'))

        assert second.children == []
        assert not first.is_leaf

    def test_leaf_and_branch_never_equal(self) -> None:
        """Test the variant is part of equality."""
        assert LeafElement('item') != BranchElement('item')


class TestConversionSummary:
    """Test conversion summaries."""

    def test_to_dict(self) -> None:
        """Test timestamps are ISO formatted and the column count is added."""
        summary = ConversionSummary(
            source='site.xml',
            file_id='abc',
            started_at=datetime(2024, 1, 2, 3, 4, 5),
            completed_at=datetime(2024, 1, 2, 3, 4, 6),
            item_count=2,
            columns=['title', 'link'],
        )

        d = summary.to_dict()

        assert d['started_at'] == '2024-01-02T03:04:05'
        assert d['completed_at'] == '2024-01-02T03:04:06'
        assert d['column_count'] == 2
        assert d['output_path'] is None
        assert d['export_stats'] == {}
