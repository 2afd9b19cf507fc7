import pytest

from partialmock.errors import ConfigurationError
from partialmock.matching import ANY, Args
from partialmock.standin import StandInMethod, normalize_call, signature_of


def _call(stand_in: StandInMethod, *args, **kwargs):
    call = stand_in.record(args, kwargs, len(stand_in.calls))
    return stand_in.respond(call)


def test_unconfigured_returns_none() -> None:
    stand_in = StandInMethod("read")
    assert stand_in.configured is False
    assert _call(stand_in) is None
    assert _call(stand_in, 1, flag=True) is None
    assert [c.args for c in stand_in.calls] == [(), (1,)]
    assert stand_in.calls[1].kwargs == {"flag": True}


def test_default_return_repeats() -> None:
    stand_in = StandInMethod("read")
    stand_in.set_return("line")
    assert [_call(stand_in) for _ in range(3)] == ["line", "line", "line"]


def test_return_resolution_order() -> None:
    stand_in = StandInMethod("read")
    stand_in.set_return("default")
    stand_in.set_return("for-two", args=(2,))
    stand_in.set_return("for-any", args=(ANY,))
    stand_in.set_return("first", once=True)
    stand_in.set_return("second", once=True)
    stand_in.set_return_at(3, "third-call")
    assert _call(stand_in, 2) == "first"
    assert _call(stand_in, 2) == "second"
    assert _call(stand_in, 2) == "for-two"
    assert _call(stand_in, 2) == "third-call"
    assert _call(stand_in, 5) == "for-any"
    assert _call(stand_in) == "default"


def test_keyword_conditional_return() -> None:
    stand_in = StandInMethod("connect")
    stand_in.set_return("secure", args=Args("host", tls=True))
    assert _call(stand_in, "host", tls=True) == "secure"
    assert _call(stand_in, "host") is None


def test_raise_is_recorded_first() -> None:
    stand_in = StandInMethod("connect")
    stand_in.set_raise(ConnectionRefusedError("closed"), args=("10.0.0.9",))
    stand_in.set_raise(TimeoutError, at=2)
    stand_in.set_return("ok")
    with pytest.raises(ConnectionRefusedError):
        _call(stand_in, "10.0.0.9")
    assert _call(stand_in, "10.0.0.1") == "ok"
    with pytest.raises(TimeoutError):
        _call(stand_in, "10.0.0.1")
    assert len(stand_in.calls) == 3


def test_invalid_outcome_configuration() -> None:
    stand_in = StandInMethod("connect")
    with pytest.raises(ConfigurationError, match="not_an_exception"):
        stand_in.set_raise("boom")
    with pytest.raises(ConfigurationError, match="invalid_call_index"):
        stand_in.set_return_at(-1, "x")
    with pytest.raises(ConfigurationError, match="conflicting_outcome_options"):
        stand_in.set_return("x", args=("a",), once=True)
    with pytest.raises(ConfigurationError, match="conflicting_outcome_options"):
        stand_in.set_raise(ValueError, args=("a",), at=0)


def test_reset_calls_keeps_outcomes() -> None:
    stand_in = StandInMethod("read")
    stand_in.set_return("line")
    _call(stand_in)
    stand_in.reset_calls()
    assert stand_in.calls == []
    assert _call(stand_in) == "line"


class _Dialer:
    def dial(self, host, port=23, *extra, timeout=None, **options):
        raise AssertionError("never called")

    def connect(self, host, port=23, tls=False):
        raise AssertionError("never called")


@pytest.mark.parametrize(
    "args, kwargs, expected",
    [
        (("h", 21), {}, (("h", 21), {})),
        (("h",), {"port": 21}, (("h", 21), {})),
        ((), {"port": 21, "host": "h"}, (("h", 21), {})),
        (("h",), {}, (("h",), {})),
        (("h", 21, "x"), {"timeout": 5, "retry": 1}, (("h", 21, "x"), {"timeout": 5, "retry": 1})),
    ],
)
def test_normalize_call_against_signature(args, kwargs, expected) -> None:
    assert normalize_call(signature_of(_Dialer.dial), args, kwargs) == expected


def test_normalize_call_keeps_keywords_after_a_gap() -> None:
    signature = signature_of(_Dialer.connect)
    assert normalize_call(signature, ("h",), {"tls": True}) == (("h",), {"tls": True})


def test_normalize_call_leaves_unbindable_calls_alone() -> None:
    signature = signature_of(_Dialer.connect)
    assert normalize_call(signature, (), {"tls": True}) == ((), {"tls": True})
    assert normalize_call(None, ("h",), {"port": 1}) == (("h",), {"port": 1})


def test_signature_normalizes_records_and_patterns() -> None:
    stand_in = StandInMethod("connect", signature_of(_Dialer.connect))
    stand_in.set_return("secure", args=Args("h", 443, tls=True))
    assert _call(stand_in, host="h", port=443, tls=True) == "secure"
    assert stand_in.calls[0].args == ("h", 443, True)
    assert stand_in.calls[0].kwargs == {}
