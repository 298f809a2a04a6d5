"""
Find every subtree with a given tag, including nested ones.
"""

import logging
from typing import Iterator, List

from .models import BranchElement, Element

logger = logging.getLogger(__name__)


def iter_items(root: Element, tag_name: str) -> Iterator[BranchElement]:
    """
    Walk the tree depth-first in pre-order and yield matching branches.

    A branch matches when its tag equals `tag_name` and it has at least one
    child. The walk continues below a match, so an item nested in another
    item is yielded as well. Leaves are neither matched nor descended into.
    """
    stack: List[Element] = [root]
    while stack:
        element = stack.pop()
        if not isinstance(element, BranchElement):
            continue
        if element.tag == tag_name and element.children:
            yield element
        stack.extend(reversed(element.children))


def find_items(root: Element, tag_name: str) -> List[BranchElement]:
    """Collect matching branches in document order."""
    items = list(iter_items(root, tag_name))
    logger.debug(f"Located {len(items)} <{tag_name}> elements")
    return items
