import io
import logging

import pytest

from lease_lexer import LeaseLexer
from lease_parser import LeaseParser


SAMPLE_LEASES = """\
# The format of this file is documented in the dhcpd.leases(5) manual page.
# This lease file was written by isc-dhcp-4.4.3

lease 192.168.1.10 {
  starts 1 2001/01/01 08:00:00;
  ends 1 2001/01/01 20:00:00;
  cltt 1 2001/01/01 08:00:00;
  binding state free;
  next binding state free;
  hardware ethernet 00:11:22:33:44:55;
  uid "\\001\\000\\021\\042\\063DU";
  client-hostname "laptop";
}
lease 192.168.1.11 {
  starts 4 2099/01/01 08:00:00;
  ends 4 2099/01/01 20:00:00;
  binding state active;
  hardware ethernet 66:77:88:99:aa:bb;
  set vendor-class-identifier = "MSFT 5.0";
  client-hostname "printer-lobby";
}
lease 192.168.1.12 {
  starts 4 2099/01/01 09:00:00;
  ends 4 2099/01/01 21:00:00;
  hardware ethernet 00:11:22:33:44:55;
  client-hostname "laptop";
}
"""


def parse_text(text, utc=False):
    """Parse lease text held in memory, returning the finished parser."""
    parser = LeaseParser(LeaseLexer(io.StringIO(text), "<test>"), utc=utc)
    parser.parse()
    return parser


@pytest.fixture
def lease_file(tmp_path):
    path = tmp_path / "dhcpd.leases"
    path.write_text(SAMPLE_LEASES)
    return path


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in ('DHLEASE_CONFIG', 'DHLEASE_LEASE_FILE', 'DHLEASE_LOG_LEVEL', 'DHLEASE_UTC'):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
