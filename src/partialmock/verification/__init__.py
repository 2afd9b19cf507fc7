from .report import Mismatch, MismatchKind, VerificationReport
from .transcript import render_transcript, transcript_digest

__all__ = [
    "Mismatch",
    "MismatchKind",
    "VerificationReport",
    "render_transcript",
    "transcript_digest",
]
