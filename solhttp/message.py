"""Handlers that sign and verify messages with ed25519 keys."""

from __future__ import annotations

from typing import Optional

from .base58 import Base58Error, b58decode, b58encode
from .helpers import RequestError, keypair_from_base58, parse_pubkey
from .models import (
    SignMessageData,
    SignMessageRequest,
    VerifyMessageData,
    VerifyMessageRequest,
)
from .solana import SIGNATURE_LENGTH, verify_signature

MAX_MESSAGE_BYTES = 1000

_SIGNING_INPUT_MISSING = "A valid private key is required for message signing"


def _checked_message(message: Optional[str], missing: str, too_long: str) -> str:
    if not message:
        raise RequestError(missing)
    if len(message.encode("utf-8")) > MAX_MESSAGE_BYTES:
        raise RequestError(too_long)
    return message


def _required(value: Optional[str], missing: str) -> str:
    if not value:
        raise RequestError(missing)
    return value


def sign_message(request: SignMessageRequest) -> SignMessageData:
    """Sign the request's message with its base58 secret key."""
    message = _checked_message(
        request.message,
        "Please provide a message to sign",
        "Your message is too long - please keep it under 1000 characters",
    )
    encoded_keypair = _required(request.secret, _SIGNING_INPUT_MISSING)
    keypair = keypair_from_base58(encoded_keypair)
    signature = keypair.sign(message.encode("utf-8"))
    return SignMessageData(
        signature=b58encode(signature),
        pubkey=str(keypair.pubkey()),
        message=message,
    )


def verify_message(request: VerifyMessageRequest) -> VerifyMessageData:
    """Check whether the signature over the message belongs to the public key."""
    message = _checked_message(
        request.message,
        "Please provide the original message for verification",
        "The message is too long to verify - maximum 1000 characters allowed",
    )
    signature_text = _required(
        request.signature,
        "A digital signature is required for message verification",
    )
    pubkey_text = _required(
        request.pubkey,
        "The public key of the signer is required for verification",
    )
    pubkey = parse_pubkey(pubkey_text)
    try:
        signature = b58decode(signature_text)
    except Base58Error:
        raise RequestError(
            "The provided signature is not in valid base58 format"
        ) from None
    if len(signature) != SIGNATURE_LENGTH:
        raise RequestError("The signature format is invalid or corrupted")
    valid = verify_signature(pubkey, message.encode("utf-8"), signature)
    return VerifyMessageData(valid=valid, message=message, pubkey=pubkey_text)