"""Utility functions for smfreader."""

from smfreader.utils.vlq import decode_vlq, encode_vlq

__all__ = [
    "decode_vlq",
    "encode_vlq",
]
