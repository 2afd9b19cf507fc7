from .expectations import MethodExpectations, check_first_call_order
from .records import CallRecord
from .signature import normalize_call, signature_of
from .standin import StandInMethod

__all__ = [
    "CallRecord",
    "MethodExpectations",
    "StandInMethod",
    "check_first_call_order",
    "normalize_call",
    "signature_of",
]
