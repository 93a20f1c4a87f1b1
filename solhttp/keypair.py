"""Handler that creates a new wallet keypair."""

from __future__ import annotations

from .base58 import b58encode
from .models import KeypairData
from .solana import Keypair


def generate_keypair() -> KeypairData:
    """Create a random keypair and return its public key and base58 secret."""
    keypair = Keypair.generate()
    return KeypairData(
        pubkey=str(keypair.pubkey()),
        secret=b58encode(keypair.to_bytes()),
    )