# src/logictest_core/resolution/naming.py
import re

_NON_CANONICAL_CHARS = re.compile(r"[^0-9a-z]+")


def canonical_name(name: str) -> str:
    """
    Reduces a human-entered name to lowercase ASCII letters and digits.

    Two names are the same name when their canonical forms are equal, so
    "1-bit adder!", "1 Bit Adder" and "1bitadder" all match. The empty string
    is a legal canonical form.
    """
    return _NON_CANONICAL_CHARS.sub("", name.lower())
