"""Stream, byte and key helpers."""

from .main import tavol


def encrypt_stream(source, dest, password: str | bytes, random_source=None):
    return tavol.encrypt_stream(source, dest, password, random_source=random_source)


def decrypt_stream(source, dest, password: str | bytes):
    return tavol.decrypt_stream(source, dest, password)


def encrypt_bytes(plaintext: bytes, password: str | bytes, random_source=None):
    return tavol.encrypt_bytes(plaintext, password, random_source=random_source)


def decrypt_bytes(blob: bytes, password: str | bytes):
    return tavol.decrypt_bytes(blob, password)


def derive_key_material(password: str | bytes):
    return tavol.derive_key_material(password)


def mix_key(material: bytes, nonce: bytes):
    return tavol.mix_key(material, nonce)
