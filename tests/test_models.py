"""Tests for request validation and protocol normalization."""

import pytest

from lxcport.exceptions import ForwardingValidationError
from lxcport.models.enums import Protocol
from lxcport.models.mapping import ForwardingRequest, normalize_protocol


class TestForwardingRequest:
    def test_valid(self):
        request = ForwardingRequest.from_user_input("web", "8080", "80", "tcp")

        assert request == ForwardingRequest("web", 8080, 80, Protocol.TCP, False)

    def test_int_ports(self):
        request = ForwardingRequest.from_user_input("web", 1, 65535, "udp", force=True)

        assert (request.host_port, request.container_port) == (1, 65535)
        assert request.protocol is Protocol.UDP
        assert request.force is True

    @pytest.mark.parametrize(
        "protocol,expected",
        [
            ("", Protocol.TCP),
            (None, Protocol.TCP),
            ("TCP", Protocol.TCP),
            ("Udp", Protocol.UDP),
            ("BOTH", Protocol.BOTH),
            ("  both ", Protocol.BOTH),
            (Protocol.UDP, Protocol.UDP),
        ],
    )
    def test_protocol_normalization(self, protocol, expected):
        request = ForwardingRequest.from_user_input("web", 80, 80, protocol)

        assert request.protocol is expected

    def test_missing_container_name(self):
        with pytest.raises(ForwardingValidationError, match="container name is required") as exc_info:
            ForwardingRequest.from_user_input("", 80, 80)

        assert exc_info.value.field == "container_name"

    @pytest.mark.parametrize(
        "value,message",
        [
            ("0", "invalid host port '0': must be between 1 and 65535"),
            (0, "invalid host port '0': must be between 1 and 65535"),
            ("65536", "invalid host port '65536': must be between 1 and 65535"),
            ("-1", "invalid host port '-1': must be between 1 and 65535"),
            ("abc", "invalid host port 'abc': must be a number"),
            ("80a", "invalid host port '80a': must be a number"),
            ("8_0", "invalid host port '8_0': must be a number"),
            ("", "host port is required"),
        ],
    )
    def test_invalid_host_port(self, value, message):
        with pytest.raises(ForwardingValidationError) as exc_info:
            ForwardingRequest.from_user_input("web", value, "80")

        assert str(exc_info.value) == message
        assert exc_info.value.field == "host_port"

    @pytest.mark.parametrize(
        "value,message",
        [
            ("99999", "invalid container port '99999': must be between 1 and 65535"),
            ("x", "invalid container port 'x': must be a number"),
            ("", "container port is required"),
        ],
    )
    def test_invalid_container_port(self, value, message):
        with pytest.raises(ForwardingValidationError) as exc_info:
            ForwardingRequest.from_user_input("web", "8080", value)

        assert str(exc_info.value) == message
        assert exc_info.value.field == "container_port"

    @pytest.mark.parametrize("protocol", ["http", "sctp", "tcp/udp"])
    def test_invalid_protocol(self, protocol):
        with pytest.raises(ForwardingValidationError, match="must be 'tcp', 'udp', or 'both'") as exc_info:
            ForwardingRequest.from_user_input("web", "8080", "80", protocol)

        assert exc_info.value.field == "protocol"

    def test_host_port_checked_before_container_port(self):
        with pytest.raises(ForwardingValidationError) as exc_info:
            ForwardingRequest.from_user_input("web", "0", "0")

        assert exc_info.value.field == "host_port"


def test_normalize_protocol():
    assert normalize_protocol(" UDP ") == "udp"
    assert normalize_protocol("") == "tcp"
    assert normalize_protocol(Protocol.BOTH) == "both"


def test_protocol_legs():
    assert Protocol.TCP.legs == [Protocol.TCP]
    assert Protocol.UDP.legs == [Protocol.UDP]
    assert Protocol.BOTH.legs == [Protocol.TCP, Protocol.UDP]
