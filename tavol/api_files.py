"""File-oriented convenience wrappers."""

import sys
import warnings

from .main import tavol


def _with_echoed_warnings(fn, *args, **kwargs):
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", RuntimeWarning)
        result = fn(*args, **kwargs)
    for item in caught:
        msg = str(item.message).strip()
        if msg:
            print(f"⚠ {msg}", file=sys.stderr)
    return result


def encrypt_file(file: str, code: str | bytes, output: str | None = None, *, random_source=None):
    return tavol.encrypt_file(file, output, code, random_source=random_source)


def decrypt_file(file: str, code: str | bytes, output: str | None = None):
    return _with_echoed_warnings(tavol.decrypt_file, file, output, code)


def tavol_file(
    file: str,
    code: str | bytes,
    output: str | None = None,
    *,
    encrypt: bool = False,
    decrypt: bool = False,
):
    return _with_echoed_warnings(
        tavol.process,
        code,
        file,
        output,
        encrypt=encrypt,
        decrypt=decrypt,
    )
