"""Handlers that build SOL and SPL token transfer instructions."""

from __future__ import annotations

from typing import Optional

from .base58 import b58encode
from .helpers import RequestError, parse_pubkey
from .models import (
    SendSolRequest,
    SendTokenRequest,
    SolTransferData,
    TokenAccountInfo,
    TokenTransferData,
)
from .solana import (
    SYSTEM_PROGRAM_ID,
    get_associated_token_address,
    system_transfer,
    token_transfer,
)

MAX_LAMPORTS = 100_000_000_000_000
MAX_TOKEN_AMOUNT = (2**64 - 1) // 2


def _required(value: Optional[str], missing: str) -> str:
    if not value:
        raise RequestError(missing)
    return value


def send_sol(request: SendSolRequest) -> SolTransferData:
    """Build a system program transfer of lamports between two wallets."""
    sender_text = _required(request.from_, "Please provide a valid sender wallet address")
    recipient_text = _required(request.to, "Please provide a valid recipient wallet address")

    lamports = request.lamports
    if lamports is None:
        raise RequestError("Please specify the amount you want to transfer")
    if lamports == 0:
        raise RequestError("Amount must be greater than 0")
    if lamports > MAX_LAMPORTS:
        raise RequestError("The transfer amount exceeds the maximum allowed limit")

    try:
        sender = parse_pubkey(sender_text)
    except RequestError:
        raise RequestError("Invalid sender public key") from None
    recipient = parse_pubkey(recipient_text)

    if sender == recipient:
        raise RequestError("Cannot transfer to the same address")
    if SYSTEM_PROGRAM_ID in (sender, recipient):
        raise RequestError("Transfers involving the system program are not permitted")

    instruction = system_transfer(sender, recipient, lamports)
    return SolTransferData(
        program_id=str(instruction.program_id),
        accounts=[str(meta.pubkey) for meta in instruction.accounts],
        instruction_data=b58encode(instruction.data),
    )


def send_token(request: SendTokenRequest) -> TokenTransferData:
    """Build an SPL token transfer between the associated accounts of two wallets."""
    destination_text = _required(
        request.destination, "Destination wallet address is required for this operation"
    )
    mint_text = _required(request.mint, "Token mint address must be specified")
    owner_text = _required(request.owner, "Current token owner address is needed")

    amount = request.amount
    if amount is None:
        raise RequestError("Please specify how many tokens to transfer")
    if amount == 0:
        raise RequestError("Amount must be greater than 0")
    if amount > MAX_TOKEN_AMOUNT:
        raise RequestError("The requested transfer amount is unreasonably large")

    mint = parse_pubkey(mint_text)
    owner = parse_pubkey(owner_text)
    destination = parse_pubkey(destination_text)

    if owner == destination:
        raise RequestError("Cannot transfer to the same address")
    if SYSTEM_PROGRAM_ID in (owner, destination):
        raise RequestError("Token transfers involving the system program are not allowed")

    sender_account = get_associated_token_address(owner, mint)
    receiver_account = get_associated_token_address(destination, mint)

    try:
        instruction = token_transfer(sender_account, receiver_account, owner, amount)
    except ValueError:
        raise RequestError("Unable to create the token transfer instruction") from None

    owner_text_form = str(owner)
    return TokenTransferData(
        program_id=str(instruction.program_id),
        accounts=[
            TokenAccountInfo(pubkey=owner_text_form, is_signer=False),
            TokenAccountInfo(pubkey=str(receiver_account), is_signer=False),
            TokenAccountInfo(pubkey=owner_text_form, is_signer=True),
        ],
        instruction_data=b58encode(instruction.data),
    )