from datetime import datetime, timedelta, timezone

from lease_dedup import remove_duplicates
from lease_models import Lease


BASE = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_lease(ip, mac, hours):
    return Lease(ipaddr=ip, macaddr=mac, end=BASE + timedelta(hours=hours) if hours is not None else None)


def test_keeps_latest_end_per_mac():
    leases = [
        make_lease('10.0.0.1', 'aa:bb:cc:dd:ee:ff', 1),
        make_lease('10.0.0.2', 'aa:bb:cc:dd:ee:ff', 5),
        make_lease('10.0.0.3', 'aa:bb:cc:dd:ee:ff', 3),
    ]
    result = remove_duplicates(leases)
    assert [lease.ipaddr for lease in result] == ['10.0.0.2']


def test_mac_comparison_ignores_case():
    leases = [
        make_lease('10.0.0.1', 'AA:BB:CC:DD:EE:FF', 9),
        make_lease('10.0.0.2', 'aa:bb:cc:dd:ee:ff', 2),
    ]
    assert [lease.ipaddr for lease in remove_duplicates(leases)] == ['10.0.0.1']


def test_leases_without_mac_are_dropped():
    leases = [
        make_lease('10.0.0.1', None, 1),
        make_lease('10.0.0.2', '00:00:00:00:00:01', 1),
    ]
    assert [lease.ipaddr for lease in remove_duplicates(leases)] == ['10.0.0.2']


def test_unset_end_loses_to_set_end():
    leases = [
        make_lease('10.0.0.1', '00:00:00:00:00:01', 1),
        make_lease('10.0.0.2', '00:00:00:00:00:01', None),
    ]
    assert [lease.ipaddr for lease in remove_duplicates(leases)] == ['10.0.0.1']


def test_tie_keeps_later_lease_in_file():
    leases = [
        make_lease('10.0.0.1', '00:00:00:00:00:01', 4),
        make_lease('10.0.0.2', '00:00:00:00:00:01', 4),
    ]
    assert [lease.ipaddr for lease in remove_duplicates(leases)] == ['10.0.0.2']


def test_survivors_keep_file_order_and_one_per_mac():
    leases = [
        make_lease('10.0.0.1', '00:00:00:00:00:02', 7),
        make_lease('10.0.0.2', '00:00:00:00:00:01', 1),
        make_lease('10.0.0.3', '00:00:00:00:00:01', 8),
        make_lease('10.0.0.4', '00:00:00:00:00:02', 2),
        make_lease('10.0.0.5', '00:00:00:00:00:03', 2),
    ]
    result = remove_duplicates(leases)
    assert [lease.ipaddr for lease in result] == ['10.0.0.1', '10.0.0.3', '10.0.0.5']

    for mac in {lease.macaddr for lease in leases}:
        matching = [lease for lease in result if lease.macaddr == mac]
        assert len(matching) == 1
        assert matching[0].end == max(lease.end for lease in leases if lease.macaddr == mac)


def test_idempotent():
    leases = [
        make_lease('10.0.0.1', '00:00:00:00:00:01', 1),
        make_lease('10.0.0.2', '00:00:00:00:00:01', 2),
        make_lease('10.0.0.3', '00:00:00:00:00:02', 2),
        make_lease('10.0.0.4', None, 2),
    ]
    once = remove_duplicates(leases)
    assert remove_duplicates(once) == once


def test_empty_list():
    assert remove_duplicates([]) == []
