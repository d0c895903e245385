"""Validation and decoding of the ``java_heap_dump`` exec alias output.

The alias prints the heap dump gzip-compressed and base64-encoded on stdout.
Anything else the remote side prints is treated as an error message.
"""

import base64
import binascii
import gzip
import zlib

from java_heapdump.errors import CorruptPayloadError, NoJavaProcessError, RemoteExecutionError
from java_heapdump.protocol import AttachResult

# base64 text of a real dump is far larger than this; shorter stdout is jcmd error output
MIN_PAYLOAD_CHARS = 5000


def validate(result: AttachResult, min_chars: int = MIN_PAYLOAD_CHARS) -> str:
    """Return the encoded payload, or raise the error the output describes."""
    if result.stderr:
        raise RemoteExecutionError(result.stderr)
    if result.stdout == "":
        raise NoJavaProcessError()
    if len(result.stdout) < min_chars:
        raise RemoteExecutionError(result.stdout)
    return result.stdout


def decode(encoded: str) -> bytes:
    try:
        compressed = base64.b64decode(encoded.strip())
    except (binascii.Error, ValueError) as e:
        raise CorruptPayloadError(f"Heap dump is not valid base64: {e}") from e
    try:
        return gzip.decompress(compressed)
    except (OSError, EOFError, zlib.error) as e:
        raise CorruptPayloadError(f"Heap dump is not valid gzip data: {e}") from e
