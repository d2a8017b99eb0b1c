#!/usr/bin/env python3
"""Keep only the most recent lease per MAC address."""

import logging
from typing import Dict, List

from lease_models import Lease
from lease_time import compare


logger = logging.getLogger(__name__)


def remove_duplicates(leases: List[Lease]) -> List[Lease]:
    """
    Drop all but the latest-ending lease for each MAC address.

    MAC addresses are compared case-insensitively. Leases without a MAC
    address are dropped. When two leases for the same MAC end at the same
    time the one later in the file wins. Survivors keep their file order.
    """
    newest: Dict[str, int] = {}
    for index, lease in enumerate(leases):
        if not lease.macaddr:
            continue
        key = lease.macaddr.lower()
        if key not in newest or compare(lease.end, leases[newest[key]].end) >= 0:
            newest[key] = index

    keep = set(newest.values())
    result = [lease for index, lease in enumerate(leases) if index in keep]
    logger.debug(f"Deduplicated {len(leases)} lease(s) down to {len(result)}")
    return result
