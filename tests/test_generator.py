import inspect

import pytest

from partialmock import ConfigurationError, PartialMockGenerator, control, is_partial_mock_type
from tests.harness.network import Connection, Endpoint, Point, Pop3, Record, Socket, Telnet


def test_generated_type_subclasses_base() -> None:
    gen = PartialMockGenerator()
    TelnetTestVersion = gen.generate(Telnet, "TelnetTestVersion", ["create_socket"])
    assert issubclass(TelnetTestVersion, Telnet)
    assert TelnetTestVersion.__name__ == "TelnetTestVersion"
    assert TelnetTestVersion.__module__ == Telnet.__module__
    assert is_partial_mock_type(TelnetTestVersion)
    assert not is_partial_mock_type(Telnet)


def test_non_overridden_methods_match_base_behavior() -> None:
    gen = PartialMockGenerator()
    Pop3TestVersion = gen.generate(Pop3, "Pop3TestVersion", ["_open_transport"])
    mock = control(Pop3TestVersion()).construct("mail.example")
    real = Pop3("mail.example")
    for raw in ["  hello  ", "", "\tline\n"]:
        assert mock.decode(raw) == real.decode(raw)
    assert mock.host == real.host


def test_overridden_method_never_runs_base_implementation() -> None:
    gen = PartialMockGenerator()
    Pop3TestVersion = gen.generate(Pop3, "Pop3TestVersion", ["_open_transport"])
    pop = Pop3TestVersion()
    transport = Socket("10.0.0.1", 110)
    control(pop).set_return("_open_transport", transport).construct("mail.example")
    # The real factory raises NetworkAccessDenied.
    assert pop.fetch(2) == ["", ""]
    assert transport.sent == ["RETR 1\r\n", "RETR 2\r\n"]
    assert control(pop).call_count("_open_transport") == 1


def test_unconfigured_stand_in_returns_none_and_accepts_any_call() -> None:
    gen = PartialMockGenerator()
    TelnetTestVersion = gen.generate(Telnet, "TelnetTestVersion", ["prompt"])
    telnet = TelnetTestVersion()
    assert telnet.prompt("root") is None
    assert telnet.prompt() is None
    assert telnet.prompt(1, 2, flag=True) is None
    assert control(telnet).call_count("prompt") == 3


def test_stand_in_keeps_base_signature() -> None:
    gen = PartialMockGenerator()
    TelnetTestVersion = gen.generate(Telnet, "TelnetTestVersion", ["create_socket"])
    assert list(inspect.signature(TelnetTestVersion.create_socket).parameters) == ["self", "ip", "port"]
    assert TelnetTestVersion.create_socket.__qualname__ == "TelnetTestVersion.create_socket"


def test_abstract_methods_become_concrete() -> None:
    gen = PartialMockGenerator()
    ConnectionTestVersion = gen.generate(Connection, "ConnectionTestVersion", ["negotiate"])
    conn = ConnectionTestVersion()
    control(conn).set_return("negotiate", "ok").construct("10.1.1.1")
    assert conn.describe() == "10.1.1.1 (ok)"


def test_same_specification_returns_cached_type() -> None:
    gen = PartialMockGenerator()
    first = gen.generate(Telnet, "TelnetTestVersion", ["create_socket"])
    second = gen.generate(Telnet, "TelnetTestVersion", ("create_socket",))
    assert first is second
    assert gen.generated() == ("TelnetTestVersion",)
    assert gen.get("TelnetTestVersion") is first


def test_conflicting_specification_under_same_name_rejected() -> None:
    gen = PartialMockGenerator()
    gen.generate(Telnet, "TelnetTestVersion", ["create_socket"])
    with pytest.raises(ConfigurationError, match="type_name_in_use"):
        gen.generate(Telnet, "TelnetTestVersion", ["prompt"])
    gen.reset()
    assert gen.generate(Telnet, "TelnetTestVersion", ["prompt"]).__name__ == "TelnetTestVersion"


def test_unknown_type_lookup_fails() -> None:
    with pytest.raises(ConfigurationError, match="unknown_type"):
        PartialMockGenerator().get("Missing")


@pytest.mark.parametrize(
    "methods, code",
    [
        (["missing"], "unknown_method:missing"),
        (["__init__"], "constructor_not_overridable"),
        (["__new__"], "constructor_not_overridable"),
        (["url"], "not_a_method:url"),
        (["scheme"], "not_a_method:scheme"),
        (["default_port"], "unsupported_method_kind:default_port:staticmethod"),
        (["localhost"], "unsupported_method_kind:localhost:classmethod"),
        (["resolve", "resolve"], "duplicate_method:resolve"),
        ([], "no_methods_to_override"),
        (["not-a-name"], "invalid_method_name"),
    ],
)
def test_invalid_method_lists_rejected(methods: list, code: str) -> None:
    with pytest.raises(ConfigurationError, match=code):
        PartialMockGenerator().generate(Endpoint, "EndpointTestVersion", methods)


def test_invalid_type_name_and_base_rejected() -> None:
    gen = PartialMockGenerator()
    with pytest.raises(ConfigurationError, match="invalid_type_name"):
        gen.generate(Endpoint, "class", ["resolve"])
    with pytest.raises(ConfigurationError, match="base_not_a_class"):
        gen.generate(Endpoint("h"), "EndpointTestVersion", ["resolve"])  # type: ignore[arg-type]


def test_unsubclassable_base_rejected() -> None:
    with pytest.raises(ConfigurationError, match="base_not_subclassable"):
        PartialMockGenerator().generate(bool, "BoolTestVersion", ["conjugate"])


def test_control_rejects_plain_instances() -> None:
    with pytest.raises(ConfigurationError, match="not_a_partial_mock"):
        control(Socket("127.0.0.1", 21))
    with pytest.raises(ConfigurationError, match="not_a_partial_mock"):
        control(3)


def test_module_level_generator() -> None:
    from partialmock import generate
    from partialmock.generator import default_generator, reset

    reset()
    try:
        first = generate(Socket, "SocketTestVersion", ["read"])
        assert generate(Socket, "SocketTestVersion", ["read"]) is first
        assert default_generator().generated() == ("SocketTestVersion",)
    finally:
        reset()
    assert default_generator().generated() == ()


def test_instance_dict_matches_base_instance() -> None:
    RecordTestVersion = PartialMockGenerator().generate(Record, "RecordTestVersion", ["touch"])
    record = control(RecordTestVersion()).construct("x")
    real = Record("x")
    assert vars(record) == vars(real) == {"name": "x"}
    assert record.to_json() == real.to_json() == '{"name": "x"}'
    assert record == real
    assert record.touch() is None
    assert control(record).call_count("touch") == 1


def test_slotted_base_without_instance_dict() -> None:
    PointTestVersion = PartialMockGenerator().generate(Point, "PointTestVersion", ["shift"])
    point = PointTestVersion()
    control(point).set_return("shift", "shifted").construct(3, -4)
    assert not hasattr(point, "__dict__")
    assert point.norm() == Point(3, -4).norm()
    assert point.shift(1) == "shifted"


def test_generated_type_rejected_as_base() -> None:
    gen = PartialMockGenerator()
    TelnetTestVersion = gen.generate(Telnet, "TelnetTestVersion", ["create_socket"])
    with pytest.raises(ConfigurationError, match="base_is_partial_mock:TelnetTestVersion"):
        gen.generate(TelnetTestVersion, "TelnetTwice", ["send"])

    class DerivedTelnet(TelnetTestVersion):  # type: ignore[misc, valid-type]
        pass

    with pytest.raises(ConfigurationError, match="base_is_partial_mock:.*DerivedTelnet"):
        gen.generate(DerivedTelnet, "DerivedTelnetTestVersion", ["send"])
