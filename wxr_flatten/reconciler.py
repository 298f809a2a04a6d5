"""
Column reconciliation module.
Gives every record the same ordered set of columns.
"""

import logging
from typing import Dict, List, Optional

from .models import NULL_MARKER, Record

logger = logging.getLogger(__name__)


class Reconciler:
    """Normalizes heterogeneous records to a uniform column set."""

    @staticmethod
    def collect_keys(records: List[Record]) -> List[str]:
        """
        Collect the union of record keys.

        Args:
            records: Records in document order

        Returns:
            Keys in first-seen order across the records
        """
        keys: Dict[str, None] = {}
        for record in records:
            for key in record:
                keys.setdefault(key, None)
        return list(keys)

    @staticmethod
    def reconcile(records: List[Record],
                  null_marker: Optional[str] = NULL_MARKER) -> List[Record]:
        """
        Rewrite every record to contain exactly the union of all keys.

        Args:
            records: Records in document order
            null_marker: Value used for columns a record does not have

        Returns:
            New records, same length and order as the input
        """
        keys = Reconciler.collect_keys(records)

        reconciled = []
        for record in records:
            reconciled.append({
                key: record[key] if key in record else null_marker
                for key in keys
            })

        logger.debug(f"Reconciled {len(reconciled)} records to {len(keys)} columns")
        return reconciled


def reconcile(records: List[Record]) -> List[Record]:
    """Reconcile records using the default null marker."""
    return Reconciler.reconcile(records)
