#!/usr/bin/env python3
"""
Filtering and tabular output of parsed leases.

Column widths come from the parser and cover every lease in the file,
not just the ones that survive filtering, so the table layout stays the
same whichever filters are applied.
"""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, TextIO

import yaml

from lease_errors import LeaseIOError
from lease_models import ColumnWidths, Lease
from lease_time import format_time, is_expired


logger = logging.getLogger(__name__)

HEADERS = ('CLIENT', 'IP ADDRESS', 'MAC ADDRESS', 'LEASE START', 'LEASE END', 'EXPIRED')
EXPIRED_WIDTH = 7
COLUMN_GAP = 2
MISSING = '-'


def match_partial(value: Optional[str], search: str) -> bool:
    """Case-insensitive substring test; an absent value only matches ''."""
    if not search:
        return True
    if value is None:
        return False
    return search.lower() in value.lower()


@dataclass
class LeaseFilter:
    """Active report filters; all set filters must match."""
    client: Optional[str] = None
    ipaddr: Optional[str] = None
    macaddr: Optional[str] = None
    active_only: bool = False
    expired_only: bool = False

    def matches(self, lease: Lease) -> bool:
        if self.macaddr is not None and not match_partial(lease.macaddr, self.macaddr):
            return False
        if self.client is not None and not match_partial(lease.client, self.client):
            return False
        if self.ipaddr is not None and not match_partial(lease.ipaddr, self.ipaddr):
            return False
        if self.active_only and is_expired(lease.end):
            return False
        if self.expired_only and not is_expired(lease.end):
            return False
        return True


def filter_leases(leases: List[Lease], lease_filter: LeaseFilter) -> List[Lease]:
    selected = [lease for lease in leases if lease_filter.matches(lease)]
    logger.debug(f"{len(selected)} of {len(leases)} lease(s) match filters")
    return selected


def _column_widths(widths: ColumnWidths) -> List[int]:
    values = [widths.client, widths.ipaddr, widths.macaddr, widths.start, widths.end, EXPIRED_WIDTH]
    return [max(len(header), value) + COLUMN_GAP for header, value in zip(HEADERS, values)]


def _format_row(cells, columns: List[int]) -> str:
    return ''.join(f"{cell:<{width}}" for cell, width in zip(cells, columns)).rstrip()


def render_report(leases: List[Lease], widths: ColumnWidths, utc: bool = False) -> List[str]:
    """
    Build the report lines: a header followed by one row per lease.

    Args:
        leases: Leases to show, already filtered
        widths: Widths recorded while parsing the full file
        utc: Render times in UTC instead of local time
    """
    columns = _column_widths(widths)
    lines = [_format_row(HEADERS, columns)]
    for lease in leases:
        lines.append(_format_row((
            lease.client if lease.client is not None else MISSING,
            lease.ipaddr,
            lease.macaddr if lease.macaddr is not None else MISSING,
            format_time(lease.start, utc),
            format_time(lease.end, utc),
            'Yes' if is_expired(lease.end) else 'No',
        ), columns))
    return lines


def print_report(leases: List[Lease], widths: ColumnWidths, utc: bool = False,
                 out: Optional[TextIO] = None) -> None:
    out = out or sys.stdout
    for line in render_report(leases, widths, utc):
        print(line, file=out)


def lease_to_dict(lease: Lease) -> Dict:
    return {
        'client': lease.client,
        'ip_address': lease.ipaddr,
        'mac_address': lease.macaddr,
        'starts': lease.start.isoformat() if lease.start else None,
        'ends': lease.end.isoformat() if lease.end else None,
        'expired': is_expired(lease.end),
        'abandoned': lease.abandoned,
    }


def export_leases(leases: List[Lease], output_file: Path) -> None:
    """
    Write leases to a YAML file as a list of mappings.

    Raises:
        LeaseIOError: If the file cannot be written
    """
    try:
        with open(output_file, 'w', encoding='utf-8') as f:
            yaml.safe_dump([lease_to_dict(lease) for lease in leases], f,
                           default_flow_style=False, sort_keys=False)
    except OSError as e:
        raise LeaseIOError(f"failed to write export file {output_file}: {e}") from e

    logger.info(f"Exported {len(leases)} lease(s) to {output_file}")
