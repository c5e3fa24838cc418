# TAVOL FILE ENCRYPTION ENGINE ->

import os as _os_module
import sys as _sys_module
import warnings as _warnings_module


class FormatError(ValueError):
    """Input is not a readable tavol ciphertext (too short or bad padding field)."""


class tavol:
    import contextlib
    import getpass
    import os
    import pathlib
    import shutil
    import sys
    import tempfile
    import typing
    from io import BytesIO
    import numpy as np
    from cryptography.hazmat.primitives import hashes
    from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

    ENGINE_VERSION = "1.2.0"

    FormatError = FormatError

    # AES-256: 16-byte blocks, 32-byte keys; 8 blocks make one super block
    BLOCK_SIZE = 16
    BLOCKS_PER_CHUNK = 8
    CHUNK_SIZE = BLOCK_SIZE * BLOCKS_PER_CHUNK
    KEY_LEN = 32
    NONCE_LEN = 32
    PADDING_FIELD_LEN = 16
    TRAILER_LEN = NONCE_LEN + PADDING_FIELD_LEN
    FILE_SUFFIX = ".tavol"
    PLAIN_SUFFIX = ".out"
    PASSPHRASE_LIMIT = 1 << 16

    # KEY DERIVATION
    @staticmethod
    def _coerce_password_bytes(
        password: "tavol.typing.Union[str, bytes, bytearray, memoryview]"
    ) -> bytes:
        if isinstance(password, str):
            return password.encode("utf-8")
        if isinstance(password, (bytes, bytearray, memoryview)):
            return bytes(password)
        raise TypeError(f"Unsupported password type: {type(password)!r}")

    @staticmethod
    def derive_key_material(
        passphrase: "tavol.typing.Union[str, bytes, bytearray, memoryview]"
    ) -> bytes:
        """SHA-256 of the passphrase. No salt: the per-file nonce is mixed in later."""
        digest = tavol.hashes.Hash(tavol.hashes.SHA256())
        digest.update(tavol._coerce_password_bytes(passphrase))
        return digest.finalize()

    @staticmethod
    def _random_bytes(random_source, length: int) -> bytes:
        source = random_source or tavol.os.urandom
        data = bytes(source(length))
        if len(data) != length:
            raise ValueError(f"Random source returned {len(data)} bytes, expected {length}")
        return data

    @staticmethod
    def draw_nonce(random_source=None) -> bytes:
        return tavol._random_bytes(random_source, tavol.NONCE_LEN)

    @staticmethod
    def mix_key(material: bytes, nonce: bytes) -> bytes:
        """XOR two 32-byte values. Self-inverse, so the same call recovers either side."""
        if len(material) != tavol.KEY_LEN or len(nonce) != tavol.NONCE_LEN:
            raise ValueError("Key material and nonce must both be 32 bytes")
        arr = tavol.np.frombuffer(bytes(material), dtype=tavol.np.uint8)
        mask_arr = tavol.np.frombuffer(bytes(nonce), dtype=tavol.np.uint8)
        return tavol.np.bitwise_xor(arr, mask_arr).tobytes()

    # BLOCK TRANSFORM
    class BlockTransform:
        """AES-256 applied to each 16-byte block on its own.

        A chunk is 8 blocks transformed independently: nothing is chained
        between neighbours, so block order inside a chunk does not matter.
        """

        def __init__(self, key: bytes):
            if len(key) != tavol.KEY_LEN:
                raise ValueError(f"AES-256 key must be {tavol.KEY_LEN} bytes, got {len(key)}")
            cipher = tavol.Cipher(tavol.algorithms.AES(bytes(key)), tavol.modes.ECB())
            self._encryptor = cipher.encryptor()
            self._decryptor = cipher.decryptor()

        @staticmethod
        def _check(data, size: int, label: str) -> None:
            if len(data) != size:
                raise ValueError(f"{label} expects {size} bytes, got {len(data)}")

        def single_encrypt(self, block) -> bytes:
            self._check(block, tavol.BLOCK_SIZE, "single_encrypt")
            return self._encryptor.update(bytes(block))

        def single_decrypt(self, block) -> bytes:
            self._check(block, tavol.BLOCK_SIZE, "single_decrypt")
            return self._decryptor.update(bytes(block))

        def _chunk(self, ctx, data) -> bytes:
            view = memoryview(data)
            out = bytearray(tavol.CHUNK_SIZE)
            for off in range(0, tavol.CHUNK_SIZE, tavol.BLOCK_SIZE):
                out[off:off + tavol.BLOCK_SIZE] = ctx.update(view[off:off + tavol.BLOCK_SIZE])
            return bytes(out)

        def chunk_encrypt(self, data) -> bytes:
            self._check(data, tavol.CHUNK_SIZE, "chunk_encrypt")
            return self._chunk(self._encryptor, data)

        def chunk_decrypt(self, data) -> bytes:
            self._check(data, tavol.CHUNK_SIZE, "chunk_decrypt")
            return self._chunk(self._decryptor, data)

    # TRAILER
    @staticmethod
    def encode_padding_count(count: int, transform: "tavol.BlockTransform") -> bytes:
        if not 0 <= count <= tavol.CHUNK_SIZE:
            raise ValueError(f"Padding count out of range: {count}")
        return transform.single_encrypt(int(count).to_bytes(tavol.PADDING_FIELD_LEN, "big"))

    @staticmethod
    def decode_padding_count(field: bytes, transform: "tavol.BlockTransform") -> int:
        count = int.from_bytes(transform.single_decrypt(field), "big")
        if not 0 <= count <= tavol.CHUNK_SIZE:
            # no auth tag, so a wrong passphrase usually lands here too
            raise FormatError("Invalid padding field; wrong passphrase or not a tavol file")
        return count

    @staticmethod
    def _read_full(handle, size: int) -> bytes:
        buf = bytearray()
        while len(buf) < size:
            part = handle.read(size - len(buf))
            if not part:
                break
            buf += part
        return bytes(buf)

    @staticmethod
    def read_trailer(
        handle,
        passphrase: "tavol.typing.Union[str, bytes, bytearray, memoryview]"
    ) -> "tavol.typing.Tuple[tavol.BlockTransform, int, int]":
        """Recover the cipher and padding count from the last 48 bytes.

        Returns ``(transform, padding_count, data_len)`` and leaves the
        handle back at the position it had on entry.
        """
        material = tavol.derive_key_material(passphrase)
        start = handle.tell()
        total = handle.seek(0, tavol.os.SEEK_END) - start
        if total < tavol.TRAILER_LEN:
            handle.seek(start)
            raise FormatError(
                f"Ciphertext too short: {total} bytes, trailer alone is {tavol.TRAILER_LEN}"
            )
        handle.seek(start + total - tavol.TRAILER_LEN)
        nonce = tavol._read_full(handle, tavol.NONCE_LEN)
        transform = tavol.BlockTransform(tavol.mix_key(material, nonce))
        handle.seek(start + total - tavol.PADDING_FIELD_LEN)
        field = tavol._read_full(handle, tavol.PADDING_FIELD_LEN)
        handle.seek(start)
        padding = tavol.decode_padding_count(field, transform)
        data_len = total - tavol.TRAILER_LEN
        if data_len % tavol.CHUNK_SIZE:
            _warnings_module.warn(
                f"Ciphertext body is {data_len} bytes, not a multiple of {tavol.CHUNK_SIZE}; "
                "not a tavol ciphertext or truncated",
                RuntimeWarning,
                stacklevel=3
            )
        return transform, padding, data_len

    # STREAM CODEC
    @staticmethod
    def _is_seekable(handle) -> bool:
        try:
            return bool(handle.seekable())
        except Exception:
            return False

    @staticmethod
    def encrypt_stream(
        source,
        dest,
        passphrase: "tavol.typing.Union[str, bytes, bytearray, memoryview]",
        *,
        random_source=None
    ) -> int:
        material = tavol.derive_key_material(passphrase)
        nonce = tavol.draw_nonce(random_source)
        transform = tavol.BlockTransform(tavol.mix_key(material, nonce))
        written = 0
        while True:
            buf = tavol._read_full(source, tavol.CHUNK_SIZE)
            if len(buf) == tavol.CHUNK_SIZE:
                dest.write(transform.chunk_encrypt(buf))
                written += tavol.CHUNK_SIZE
                continue
            # Short read ends the stream. An input that is an exact multiple
            # of 128 (or empty) ends on a 0-byte read: one whole filler chunk.
            padding = tavol.CHUNK_SIZE - len(buf)
            buf += tavol._random_bytes(random_source, padding)
            dest.write(transform.chunk_encrypt(buf))
            written += tavol.CHUNK_SIZE
            break
        dest.write(nonce)
        dest.write(tavol.encode_padding_count(padding, transform))
        written += tavol.TRAILER_LEN
        dest.flush()
        return written

    @staticmethod
    def _decrypt_body(handle, dest, transform: "tavol.BlockTransform", padding: int) -> int:
        dest_start = dest.tell()
        processed = 0
        while True:
            buf = tavol._read_full(handle, tavol.CHUNK_SIZE)
            if len(buf) < tavol.CHUNK_SIZE:
                # reached the 48-byte trailer
                break
            dest.write(transform.chunk_decrypt(buf))
            processed += 1
        kept = max(0, processed * tavol.CHUNK_SIZE - padding)
        dest.flush()
        dest.truncate(dest_start + kept)
        dest.seek(dest_start + kept)
        return kept

    @staticmethod
    def decrypt_stream(
        source,
        dest,
        passphrase: "tavol.typing.Union[str, bytes, bytearray, memoryview]"
    ) -> int:
        def _decrypt_from(handle) -> int:
            transform, padding, _ = tavol.read_trailer(handle, passphrase)
            if tavol._is_seekable(dest):
                return tavol._decrypt_body(handle, dest, transform, padding)
            tmp = tavol.tempfile.TemporaryFile("w+b")
            try:
                kept = tavol._decrypt_body(handle, tmp, transform, padding)
                tmp.seek(0)
                tavol.shutil.copyfileobj(tmp, dest)
                dest.flush()
                return kept
            finally:
                tmp.close()

        if tavol._is_seekable(source):
            return _decrypt_from(source)

        tmp = tavol.tempfile.TemporaryFile("w+b")
        try:
            tavol.shutil.copyfileobj(source, tmp)
            tmp.seek(0)
            return _decrypt_from(tmp)
        finally:
            tmp.close()

    @staticmethod
    def encrypt_bytes(
        plaintext: bytes,
        passphrase: "tavol.typing.Union[str, bytes, bytearray, memoryview]",
        *,
        random_source=None
    ) -> bytes:
        if not isinstance(plaintext, (bytes, bytearray, memoryview)):
            raise TypeError("encrypt_bytes expects bytes")
        out = tavol.BytesIO()
        tavol.encrypt_stream(tavol.BytesIO(bytes(plaintext)), out, passphrase, random_source=random_source)
        return out.getvalue()

    @staticmethod
    def decrypt_bytes(
        blob: bytes,
        passphrase: "tavol.typing.Union[str, bytes, bytearray, memoryview]"
    ) -> bytes:
        if not isinstance(blob, (bytes, bytearray, memoryview)):
            raise TypeError("decrypt_bytes expects bytes")
        out = tavol.BytesIO()
        tavol.decrypt_stream(tavol.BytesIO(bytes(blob)), out, passphrase)
        return out.getvalue()

    # FILES
    @staticmethod
    def _normalize_path(path_like: "tavol.typing.Union[str, tavol.pathlib.Path]") -> "tavol.pathlib.Path":
        path = tavol.pathlib.Path(str(path_like)).expanduser()
        try:
            return path.resolve(strict=False)
        except Exception:
            return path

    @staticmethod
    def _ensure_existing_file(path: "tavol.pathlib.Path") -> None:
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(f"Input file not found: {path}")

    @staticmethod
    def default_output(
        path: "tavol.typing.Union[str, tavol.pathlib.Path]",
        *,
        encrypt: bool
    ) -> "tavol.pathlib.Path":
        path = tavol.pathlib.Path(str(path))
        if encrypt:
            return path.with_name(path.name + tavol.FILE_SUFFIX)
        if path.suffix.lower() == tavol.FILE_SUFFIX:
            return path.with_suffix("")
        return path.with_name(path.name + tavol.PLAIN_SUFFIX)

    @staticmethod
    def _prepare_paths(file, output, *, encrypt: bool) -> "tavol.typing.Tuple[tavol.pathlib.Path, tavol.pathlib.Path]":
        path = tavol._normalize_path(file)
        tavol._ensure_existing_file(path)
        out_path = tavol._normalize_path(output) if output else tavol.default_output(path, encrypt=encrypt)
        if out_path == path:
            raise ValueError(f"Output path must differ from input: {path}")
        return path, out_path

    @staticmethod
    def encrypt_file(
        file: "tavol.typing.Union[str, tavol.pathlib.Path]",
        output: "tavol.typing.Union[str, tavol.pathlib.Path, None]",
        passphrase: "tavol.typing.Union[str, bytes, bytearray, memoryview]",
        *,
        random_source=None
    ) -> str:
        path, out_path = tavol._prepare_paths(file, output, encrypt=True)
        with open(path, "rb") as source, open(out_path, "wb") as dest:
            tavol.encrypt_stream(source, dest, passphrase, random_source=random_source)
        return str(out_path)

    @staticmethod
    def decrypt_file(
        file: "tavol.typing.Union[str, tavol.pathlib.Path]",
        output: "tavol.typing.Union[str, tavol.pathlib.Path, None]",
        passphrase: "tavol.typing.Union[str, bytes, bytearray, memoryview]"
    ) -> str:
        path, out_path = tavol._prepare_paths(file, output, encrypt=False)
        with open(path, "rb") as source:
            # validate the trailer before the output file exists
            transform, padding, _ = tavol.read_trailer(source, passphrase)
            with open(out_path, "w+b") as dest:
                tavol._decrypt_body(source, dest, transform, padding)
        return str(out_path)

    @staticmethod
    def process(
        passphrase: "tavol.typing.Union[str, bytes, bytearray, memoryview]",
        file: "tavol.typing.Union[str, tavol.pathlib.Path]",
        output: "tavol.typing.Union[str, tavol.pathlib.Path, None]" = None,
        *,
        encrypt: bool = False,
        decrypt: bool = False
    ) -> str:
        if encrypt == decrypt:
            raise ValueError("Exactly one of encrypt or decrypt must be selected")
        if encrypt:
            return tavol.encrypt_file(file, output, passphrase)
        return tavol.decrypt_file(file, output, passphrase)

    # PASSPHRASE
    @staticmethod
    def read_passphrase(prompt: str = "Passphrase: ") -> bytes:
        stdin = tavol.sys.stdin
        if stdin is None:
            raise ValueError("No stdin available for passphrase prompt")
        if stdin.isatty():
            return tavol.getpass.getpass(prompt).encode("utf-8")
        print(prompt, end="", file=tavol.sys.stderr, flush=True)
        raw = stdin.buffer if hasattr(stdin, "buffer") else stdin
        line = raw.readline(tavol.PASSPHRASE_LIMIT + 1)
        if isinstance(line, str):
            line = line.encode("utf-8")
        if len(line) > tavol.PASSPHRASE_LIMIT and not line.endswith(b"\n"):
            raise ValueError(f"Passphrase exceeds {tavol.PASSPHRASE_LIMIT} bytes")
        return line.rstrip(b"\r\n")

    @staticmethod
    def resolve_passphrase(
        password: "tavol.typing.Union[str, bytes, bytearray, memoryview, tavol.pathlib.Path, None]",
        prompt: str = "Passphrase: "
    ) -> bytes:
        if password is None:
            return tavol.read_passphrase(prompt)
        if isinstance(password, (bytes, bytearray, memoryview)):
            return bytes(password)
        text = str(password)
        if text:
            try:
                candidate = tavol.pathlib.Path(text).expanduser()
                if candidate.is_file():
                    return candidate.read_bytes()
            except OSError:
                pass  # too long or otherwise not a usable path: treat as text
        return tavol._coerce_password_bytes(text)


def cli(argv=None) -> int:
    import argparse

    def _cli_config_path() -> "tavol.pathlib.Path":
        cfg = _os_module.getenv("TAVOL_CLI_CONFIG")
        if cfg:
            return tavol.pathlib.Path(cfg).expanduser()
        xdg = _os_module.getenv("XDG_CONFIG_HOME")
        if xdg:
            return tavol.pathlib.Path(xdg) / "tavol" / "cli.conf"
        appdata = _os_module.getenv("APPDATA")
        if appdata:
            return tavol.pathlib.Path(appdata) / "tavol" / "cli.conf"
        return tavol.pathlib.Path("~/.config/tavol/cli.conf").expanduser()

    def _cli_plain_mode() -> bool:
        if _os_module.getenv("TAVOL_CLI_PLAIN"):
            return True
        if _os_module.getenv("NO_COLOR"):
            return True
        style = (_os_module.getenv("TAVOL_CLI_STYLE") or "").strip().lower()
        if style in {"plain", "boring", "0", "false", "off"}:
            return True
        if style in {"color", "emoji", "on"}:
            return False
        cfg_path = _cli_config_path()
        try:
            if cfg_path.exists():
                data = cfg_path.read_text(encoding="utf-8").lower()
                if "plain=1" in data or "plain=true" in data or "style=plain" in data:
                    return True
        except OSError:
            pass
        return False

    class _CliTheme:
        def __init__(self, plain: bool):
            self.plain = plain
            self.reset = "" if plain else "\033[0m"
            self.bold = "" if plain else "\033[1m"
            self.red = "" if plain else "\033[31m"
            self.green = "" if plain else "\033[32m"
            self.yellow = "" if plain else "\033[33m"
            self.cyan = "" if plain else "\033[36m"

        def _wrap(self, msg: str, color: str, emoji: str | None = None) -> str:
            if self.plain:
                return msg
            prefix = f"{emoji} " if emoji else ""
            return f"{self.bold}{color}{prefix}{msg}{self.reset}"

        def ok(self, msg: str) -> str:
            return self._wrap(msg, self.green, "✅")

        def warn(self, msg: str) -> str:
            return self._wrap(msg, self.yellow, "⚠️")

        def err(self, msg: str) -> str:
            return self._wrap(msg, self.red, "❌")

        def info(self, msg: str) -> str:
            return self._wrap(msg, self.cyan, "✨")

    theme = _CliTheme(_cli_plain_mode())
    if not theme.plain:
        import colorama
        colorama.just_fix_windows_console()

    parser = argparse.ArgumentParser(prog="tavol", description="Password-based AES-256 file encryption")
    subparsers = parser.add_subparsers(dest="command", required=True)
    for name, help_text in (
        ("encrypt", "Encrypt a file with a passphrase"),
        ("decrypt", "Decrypt a tavol file with its passphrase"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("input", help="Input file path")
        sub.add_argument(
            "output",
            nargs="?",
            default=None,
            help="Output file path (default: add/strip the .tavol suffix)"
        )
        sub.add_argument(
            "-p", "--password",
            default=None,
            help="Passphrase text or path to a file holding it (prompted when omitted)"
        )

    args = parser.parse_args(argv)
    encrypt = args.command == "encrypt"

    try:
        in_path = tavol._normalize_path(args.input)
        tavol._ensure_existing_file(in_path)
        out_path = tavol._normalize_path(args.output) if args.output else tavol.default_output(in_path, encrypt=encrypt)
    except OSError as exc:
        print(theme.err(str(exc)), file=_sys_module.stderr)
        return 1

    password = args.password
    if password is None:
        password = _os_module.getenv("TAVOL_PASSWORD")
    try:
        passphrase = tavol.resolve_passphrase(password)
    except (OSError, ValueError) as exc:
        print(theme.err(f"Password resolution failed: {exc}"), file=_sys_module.stderr)
        return 1
    if not passphrase:
        print(theme.err("Passphrase must not be empty"), file=_sys_module.stderr)
        return 1

    existed = out_path.exists()
    verb = "Encrypting" if encrypt else "Decrypting"
    print(theme.info(f"{verb} {in_path} -> {out_path}"), file=_sys_module.stderr)
    try:
        with _warnings_module.catch_warnings(record=True) as caught:
            _warnings_module.simplefilter("always", RuntimeWarning)
            result = tavol.process(passphrase, in_path, out_path, encrypt=encrypt, decrypt=not encrypt)
        for item in caught:
            print(theme.warn(str(item.message)), file=_sys_module.stderr)
    except (OSError, ValueError) as exc:
        # the core never rolls back; drop whatever this run left behind
        if not existed and out_path != in_path:
            with tavol.contextlib.suppress(OSError):
                out_path.unlink()
        print(theme.err(f"{args.command} failed: {exc}"), file=_sys_module.stderr)
        return 1
    print(theme.ok(result))
    return 0


def main(argv=None) -> int:
    try:
        return cli(argv)
    except KeyboardInterrupt:
        print("Exiting...")
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
