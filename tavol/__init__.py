from .main import *
from .api_files import decrypt_file, encrypt_file, tavol_file
from .api_streams import (
    decrypt_bytes,
    decrypt_stream,
    derive_key_material,
    encrypt_bytes,
    encrypt_stream,
    mix_key,
)
from .version import __version__
