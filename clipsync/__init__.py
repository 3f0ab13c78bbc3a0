"""clipsync - Envelope encryption core for clipboard sync."""

__version__ = "0.1.0"

from .vault import Envelope, EnvelopeCodec, SecretStore

__all__ = [
    "__version__",
    "Envelope",
    "EnvelopeCodec",
    "SecretStore",
]
