"""Validation and conversion shared by the request handlers."""

from __future__ import annotations

from .base58 import Base58Error, b58decode, b58encode
from .models import AccountInfo, InstructionData
from .solana import Instruction, Keypair, Pubkey

_EXCLUDED_CHARS = frozenset("0OIl")


class RequestError(ValueError):
    """A client error whose message is returned to the caller."""

    @property
    def message(self) -> str:
        return str(self)


def _is_base58_charset(text: str) -> bool:
    return all(
        char.isascii() and char.isalnum() and char not in _EXCLUDED_CHARS for char in text
    )


def parse_pubkey(address: str) -> Pubkey:
    """Validate and parse a base58 public key."""
    if not 32 <= len(address.encode("utf-8")) <= 44:
        raise RequestError("The provided address length is not valid for a Solana public key")
    if not _is_base58_charset(address):
        raise RequestError("The address contains invalid characters for base58 encoding")
    try:
        return Pubkey.from_base58(address)
    except ValueError:
        raise RequestError(
            f"Unable to parse the provided address as a valid Solana public key: {address}"
        ) from None


def keypair_from_base58(secret: str) -> Keypair:
    """Validate and decode a base58 64-byte keypair."""
    if not 80 <= len(secret.encode("utf-8")) <= 100:
        raise RequestError(
            "The private key length doesn't match expected base58 encoding standards"
        )
    if not _is_base58_charset(secret):
        raise RequestError(
            "The private key contains characters that aren't valid in base58 encoding"
        )
    try:
        decoded = b58decode(secret)
    except Base58Error:
        raise RequestError("Failed to decode the private key from base58 format") from None
    if len(decoded) != 64:
        raise RequestError("The decoded private key must be exactly 64 bytes for Solana keypairs")
    try:
        return Keypair.from_bytes(decoded)
    except ValueError:
        raise RequestError("The provided bytes don't form a valid Solana keypair") from None


def instruction_to_response(instruction: Instruction) -> InstructionData:
    """Describe an instruction in its response form."""
    return InstructionData(
        program_id=str(instruction.program_id),
        accounts=[
            AccountInfo(str(meta.pubkey), meta.is_signer, meta.is_writable)
            for meta in instruction.accounts
        ],
        instruction_data=b58encode(instruction.data),
    )