"""Operators for segmenting, fingerprinting and classifying documents."""

from towelie.operators.fingerprint import fingerprint
from towelie.operators.segment import minify, normalize, qualifies, segment

__all__ = [
    "fingerprint",
    "minify", "normalize", "qualifies", "segment",
]
