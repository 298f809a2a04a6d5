"""
Rebuild a nested element tree from a flat sequence of tokenizer events.
"""

import logging
from typing import Iterable, List, Tuple

from .errors import EmptyDocumentError, StructureError
from .models import BranchElement, Element, EventKind, LeafElement, ParseEvent

logger = logging.getLogger(__name__)


class TreeBuilder:
    """Builds an element tree from open/complete/close events."""

    @staticmethod
    def build(events: Iterable[ParseEvent]) -> Element:
        """
        Build the element tree.

        Args:
            events: Tokenizer events in emission order

        Returns:
            The top-level element of the document

        Raises:
            StructureError: If open and close events do not balance
            EmptyDocumentError: If the events contain no element
        """
        root = BranchElement(tag=None)
        cursor: List[Element] = root.children
        # Each frame: the container to resume appending to, and the branch being filled
        stack: List[Tuple[List[Element], BranchElement]] = []
        count = 0

        for position, event in enumerate(events):
            if event.kind is EventKind.OPEN:
                branch = BranchElement(event.tag, event.value, event.attributes)
                cursor.append(branch)
                stack.append((cursor, branch))
                cursor = branch.children
                count += 1

            elif event.kind is EventKind.COMPLETE:
                cursor.append(LeafElement(event.tag, event.value, event.attributes))
                count += 1

            elif event.kind is EventKind.CLOSE:
                if not stack:
                    raise StructureError(
                        f"Unmatched close event for <{event.tag}> at position {position}"
                    )
                cursor, branch = stack.pop()
                if event.tag != branch.tag:
                    raise StructureError(
                        f"Close event for <{event.tag}> at position {position} "
                        f"does not match open <{branch.tag}>"
                    )

        if stack:
            unclosed = ', '.join(f"<{branch.tag}>" for _, branch in stack)
            raise StructureError(f"Elements left open at end of input: {unclosed}")

        if not root.children:
            raise EmptyDocumentError("Document contains no elements")

        logger.debug(f"Built tree with {count} elements")
        return root.children[0]


def build_tree(events: Iterable[ParseEvent]) -> Element:
    """Build an element tree from tokenizer events."""
    return TreeBuilder.build(events)
