"""Solana keys, signatures, program addresses and instruction builders."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field

import nacl.bindings
import nacl.exceptions
import nacl.signing

from .base58 import Base58Error, b58decode, b58encode

PUBKEY_LENGTH = 32
SIGNATURE_LENGTH = 64
KEYPAIR_LENGTH = 64
MAX_BASE58_PUBKEY_LENGTH = 44
MAX_SEEDS = 16
MAX_SEED_LENGTH = 32
_U64_MAX = 2**64 - 1

_FIELD_PRIME = 2**255 - 19
_CURVE_D = (-121665 * pow(121666, _FIELD_PRIME - 2, _FIELD_PRIME)) % _FIELD_PRIME
_PDA_MARKER = b"ProgramDerivedAddress"


@dataclass(frozen=True)
class Pubkey:
    """A 32-byte Solana public key."""

    key: bytes

    def __post_init__(self) -> None:
        if len(self.key) != PUBKEY_LENGTH:
            raise ValueError(f"a public key must be {PUBKEY_LENGTH} bytes, got {len(self.key)}")
        object.__setattr__(self, "key", bytes(self.key))

    @classmethod
    def from_base58(cls, text: str) -> Pubkey:
        """Parse a base58 public key."""
        if len(text) > MAX_BASE58_PUBKEY_LENGTH:
            raise ValueError("base58 public key string is too long")
        try:
            decoded = b58decode(text)
        except Base58Error as exc:
            raise ValueError(f"invalid base58 public key: {exc}") from exc
        if len(decoded) != PUBKEY_LENGTH:
            raise ValueError("decoded public key has the wrong size")
        return cls(decoded)

    def __bytes__(self) -> bytes:
        return self.key

    def __str__(self) -> str:
        return b58encode(self.key)


SYSTEM_PROGRAM_ID = Pubkey(bytes(PUBKEY_LENGTH))
TOKEN_PROGRAM_ID = Pubkey.from_base58("TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA")
ASSOCIATED_TOKEN_PROGRAM_ID = Pubkey.from_base58("ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL")
RENT_SYSVAR_ID = Pubkey.from_base58("SysvarRent111111111111111111111111111111111")


def is_on_curve(data: bytes) -> bool:
    """Whether 32 bytes decompress to a point on the ed25519 curve."""
    if len(data) != PUBKEY_LENGTH:
        return False
    p = _FIELD_PRIME
    y = (int.from_bytes(data, "little") & ((1 << 255) - 1)) % p
    y_squared = y * y % p
    numerator = (y_squared - 1) % p
    denominator = (_CURVE_D * y_squared + 1) % p
    x_squared = numerator * pow(denominator, p - 2, p) % p
    return x_squared == 0 or pow(x_squared, (p - 1) // 2, p) == 1


class Keypair:
    """An ed25519 keypair stored as 32 secret bytes followed by 32 public bytes."""

    __slots__ = ("_secret",)

    def __init__(self, data: bytes) -> None:
        data = bytes(data)
        if len(data) != KEYPAIR_LENGTH:
            raise ValueError(f"a keypair must be {KEYPAIR_LENGTH} bytes, got {len(data)}")
        if not is_on_curve(data[PUBKEY_LENGTH:]):
            raise ValueError("the public half of the keypair is not a curve point")
        self._secret = data

    @classmethod
    def generate(cls) -> Keypair:
        """Create a fresh random keypair."""
        signing_key = nacl.signing.SigningKey.generate()
        return cls(bytes(signing_key) + bytes(signing_key.verify_key))

    @classmethod
    def from_bytes(cls, data: bytes) -> Keypair:
        """Build a keypair from its 64-byte form."""
        return cls(data)

    def to_bytes(self) -> bytes:
        """Return the 64-byte form of the keypair."""
        return self._secret

    def pubkey(self) -> Pubkey:
        """Return the public key."""
        return Pubkey(self._secret[PUBKEY_LENGTH:])

    def sign(self, message: bytes) -> bytes:
        """Sign a message and return the 64-byte signature."""
        return nacl.bindings.crypto_sign(bytes(message), self._secret)[:SIGNATURE_LENGTH]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Keypair):
            return NotImplemented
        return self._secret == other._secret

    def __hash__(self) -> int:
        return hash(self._secret)

    def __repr__(self) -> str:
        return f"Keypair(pubkey={self.pubkey()})"


def verify_signature(pubkey: Pubkey, message: bytes, signature: bytes) -> bool:
    """Check an ed25519 signature; raises ValueError if it is not 64 bytes."""
    if len(signature) != SIGNATURE_LENGTH:
        raise ValueError(f"a signature must be {SIGNATURE_LENGTH} bytes, got {len(signature)}")
    try:
        nacl.signing.VerifyKey(bytes(pubkey)).verify(bytes(message), bytes(signature))
    except (nacl.exceptions.CryptoError, ValueError):
        return False
    return True


@dataclass(frozen=True)
class AccountMeta:
    """An account referenced by an instruction."""

    pubkey: Pubkey
    is_signer: bool
    is_writable: bool


@dataclass(frozen=True)
class Instruction:
    """A program instruction: target program, accounts and data bytes."""

    program_id: Pubkey
    accounts: list[AccountMeta] = field(default_factory=list)
    data: bytes = b""


def find_program_address(seeds, program_id: Pubkey) -> tuple[Pubkey, int]:
    """Find the first off-curve program address and its bump seed."""
    seeds = [bytes(seed) for seed in seeds]
    if len(seeds) >= MAX_SEEDS:
        raise ValueError("too many seeds")
    if any(len(seed) > MAX_SEED_LENGTH for seed in seeds):
        raise ValueError("a seed is longer than the maximum")
    prefix = b"".join(seeds)
    for bump in range(255, -1, -1):
        digest = hashlib.sha256(
            prefix + bytes([bump]) + bytes(program_id) + _PDA_MARKER
        ).digest()
        if not is_on_curve(digest):
            return Pubkey(digest), bump
    raise ValueError("unable to find a viable program address bump seed")


def get_associated_token_address(wallet: Pubkey, mint: Pubkey) -> Pubkey:
    """Return the associated token account of a wallet for a mint."""
    address, _ = find_program_address(
        [bytes(wallet), bytes(TOKEN_PROGRAM_ID), bytes(mint)],
        ASSOCIATED_TOKEN_PROGRAM_ID,
    )
    return address


def _u64(value: int, name: str) -> bytes:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _U64_MAX:
        raise ValueError(f"{name} must be an unsigned 64-bit integer")
    return value.to_bytes(8, "little")


def system_transfer(from_pubkey: Pubkey, to_pubkey: Pubkey, lamports: int) -> Instruction:
    """Build a system program transfer of lamports."""
    data = (2).to_bytes(4, "little") + _u64(lamports, "lamports")
    return Instruction(
        SYSTEM_PROGRAM_ID,
        [AccountMeta(from_pubkey, True, True), AccountMeta(to_pubkey, False, True)],
        data,
    )


def initialize_mint(
    mint: Pubkey, mint_authority: Pubkey, freeze_authority: Pubkey | None, decimals: int
) -> Instruction:
    """Build a token program InitializeMint instruction."""
    if isinstance(decimals, bool) or not isinstance(decimals, int) or not 0 <= decimals <= 255:
        raise ValueError("decimals must fit in one byte")
    data = bytes([0, decimals]) + bytes(mint_authority)
    data += b"\x00" if freeze_authority is None else b"\x01" + bytes(freeze_authority)
    return Instruction(
        TOKEN_PROGRAM_ID,
        [AccountMeta(mint, False, True), AccountMeta(RENT_SYSVAR_ID, False, False)],
        data,
    )


def mint_to(mint: Pubkey, destination: Pubkey, authority: Pubkey, amount: int) -> Instruction:
    """Build a token program MintTo instruction with a single authority."""
    return Instruction(
        TOKEN_PROGRAM_ID,
        [
            AccountMeta(mint, False, True),
            AccountMeta(destination, False, True),
            AccountMeta(authority, True, False),
        ],
        bytes([7]) + _u64(amount, "amount"),
    )


def token_transfer(source: Pubkey, destination: Pubkey, owner: Pubkey, amount: int) -> Instruction:
    """Build a token program Transfer instruction with a single owner."""
    return Instruction(
        TOKEN_PROGRAM_ID,
        [
            AccountMeta(source, False, True),
            AccountMeta(destination, False, True),
            AccountMeta(owner, True, False),
        ],
        bytes([3]) + _u64(amount, "amount"),
    )