# utils.py
import os
import logging

HEX_DIGITS = '0123456789abcdefABCDEF'


def lossy_path_str(path) -> str:
    """
    Returns a string form of a filesystem path that is always valid UTF-8.

    Bytes the filesystem encoding could not decode (kept by Python as
    surrogate escapes) are replaced with U+FFFD, so the result can be
    serialized to JSON and hashed without errors.
    """
    try:
        raw = os.fsencode(path)
    except (TypeError, UnicodeEncodeError):
        logging.debug(f"Could not encode path {path!r}, falling back to str().")
        return str(path).encode('utf-8', 'replace').decode('utf-8')
    return raw.decode('utf-8', 'replace')


def is_title_id(text: str) -> bool:
    """True if text is a 16 character hexadecimal Switch title id."""
    return len(text) == 16 and all(c in HEX_DIGITS for c in text)
