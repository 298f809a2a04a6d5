"""Tests for locating item subtrees."""

from wxr_flatten.item_locator import find_items, iter_items
from wxr_flatten.models import BranchElement, LeafElement
from wxr_flatten.tokenizer import tokenize
from wxr_flatten.tree_builder import build_tree


def _tree(xml: str):
    return build_tree(tokenize(xml))


class TestFindItems:
    """Test depth-first item collection."""

    def test_items_found_at_any_depth(self) -> None:
        """Test items are found below the top-level element's direct children."""
        tree = _tree('<rss><channel><item><title>1</title></item>'
                     '<item><title>2</title></item></channel></rss>')

        items = find_items(tree, 'item')

        assert [i.children[0].value for i in items] == ['1', '2']

    def test_nested_items_are_collected_in_pre_order(self) -> None:
        """Test an item inside an item yields both, outer first."""
        tree = _tree('<rss><item><title>outer</title>'
                     '<item><title>inner</title></item></item>'
                     '<item><title>last</title></item></rss>')

        items = find_items(tree, 'item')

        assert [i.children[0].value for i in items] == ['outer', 'inner', 'last']

    def test_leaf_items_are_not_matches(self) -> None:
        """Test item elements without children are skipped."""
        tree = _tree('<rss><item>text only</item><item/><item><a>1</a></item></rss>')

        items = find_items(tree, 'item')

        assert len(items) == 1
        assert items[0].children[0].tag == 'a'

    def test_empty_branch_item_is_not_a_match(self) -> None:
        """Test an item branch with no children is skipped."""
        root = BranchElement('rss', children=[BranchElement('item')])

        assert find_items(root, 'item') == []

    def test_root_itself_can_match(self) -> None:
        """Test the element passed in is considered."""
        tree = _tree('<item><title>x</title></item>')

        assert find_items(tree, 'item') == [tree]

    def test_no_matches_on_leaf_root(self) -> None:
        """Test a single leaf yields nothing."""
        assert find_items(LeafElement('item', 'x'), 'item') == []

    def test_iter_items_is_lazy(self) -> None:
        """Test iter_items yields one match at a time."""
        tree = _tree('<rss><item><a>1</a></item><item><a>2</a></item></rss>')

        iterator = iter_items(tree, 'item')

        assert next(iterator).children[0].value == '1'
        assert next(iterator).children[0].value == '2'
