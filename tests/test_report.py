"""Tests for the text report."""

from lxcport.lxc.report import HEADER, SEPARATOR, format_port_mappings
from lxcport.models.mapping import PortMapping


def _mapping(**overrides):
    values = dict(
        device_name="test-container-8080-80-tcp",
        protocol="TCP",
        host_port=8080,
        container_port=80,
    )
    values.update(overrides)
    return PortMapping(**values)


def test_empty():
    assert format_port_mappings([]) == ""


def test_header_first():
    report = format_port_mappings([_mapping()])
    lines = report.splitlines()

    assert lines[0] == HEADER
    assert lines[0].startswith("PROTOCOL  HOST PORT  CONTAINER PORT  HOST IP")
    assert lines[1] == SEPARATOR
    assert report.endswith("\n")


def test_rows():
    report = format_port_mappings(
        [
            _mapping(),
            _mapping(
                device_name="test-container-5432-5432-udp",
                protocol="UDP",
                host_port=5432,
                container_port=5432,
                host_ip="127.0.0.1",
                container_ip="192.168.1.1",
            ),
        ]
    )
    lines = report.splitlines()

    assert len(lines) == 4
    assert lines[2] == (
        "TCP" + " " * 7 + "8080" + " " * 7 + "80" + " " * 14
        + "0.0.0.0" + " " * 6 + "0.0.0.0" + " " * 7
        + "test-container-8080-80-tcp"
    )
    assert lines[3].split() == [
        "UDP",
        "5432",
        "5432",
        "127.0.0.1",
        "192.168.1.1",
        "test-container-5432-5432-udp",
    ]


def test_columns_align_with_header():
    report = format_port_mappings([_mapping()])
    header, _, row = report.splitlines()

    assert row.index("8080") == header.index("HOST PORT")
    assert row.index(" 80 ") + 1 == header.index("CONTAINER PORT")
    assert row.index("test-container") == header.index("DEVICE NAME")
