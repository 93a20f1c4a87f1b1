"""Handlers that build SPL token mint instructions."""

from __future__ import annotations

from typing import Optional

from .helpers import RequestError, instruction_to_response, parse_pubkey
from .models import CreateTokenRequest, InstructionData, MintTokenRequest
from .solana import SYSTEM_PROGRAM_ID, initialize_mint, mint_to

MAX_DECIMALS = 9


def _required(value: Optional[str], missing: str) -> str:
    if not value:
        raise RequestError(missing)
    return value


def create_token(request: CreateTokenRequest) -> InstructionData:
    """Build an InitializeMint instruction for a new token."""
    authority_text = _required(
        request.mint_authority,
        "A mint authority address is required to create a new token",
    )
    mint_text = _required(
        request.mint, "Please provide the address for the new token mint"
    )
    if request.decimals is None:
        raise RequestError("Please specify the number of decimal places for this token")
    if request.decimals > MAX_DECIMALS:
        raise RequestError("Decimals must be between 0 and 9")

    authority = parse_pubkey(authority_text)
    mint = parse_pubkey(mint_text)

    if authority == SYSTEM_PROGRAM_ID:
        raise RequestError("The system program cannot be used as a mint authority")
    if mint == SYSTEM_PROGRAM_ID:
        raise RequestError("The system program cannot be used as a token mint address")

    try:
        instruction = initialize_mint(mint, authority, authority, request.decimals)
    except ValueError:
        raise RequestError(
            "Unable to create the token initialization instruction"
        ) from None
    return instruction_to_response(instruction)


def mint_token(request: MintTokenRequest) -> InstructionData:
    """Build a MintTo instruction sending new tokens to a destination."""
    mint_text = _required(
        request.mint,
        "Please provide the mint address of the token you want to mint",
    )
    destination_text = _required(
        request.destination,
        "A destination address is required to receive the minted tokens",
    )
    authority_text = _required(
        request.authority,
        "The minting authority address is required to authorize this operation",
    )
    if request.amount == 0:
        raise RequestError("Amount must be greater than 0")
    if request.amount is None:
        raise RequestError("Please specify how many tokens you want to mint")

    mint = parse_pubkey(mint_text)
    destination = parse_pubkey(destination_text)
    authority = parse_pubkey(authority_text)

    if mint == SYSTEM_PROGRAM_ID:
        raise RequestError("The system program cannot be used as a token mint")
    if destination == SYSTEM_PROGRAM_ID:
        raise RequestError("Tokens cannot be minted directly to the system program")
    if authority == SYSTEM_PROGRAM_ID:
        raise RequestError("The system program cannot serve as a minting authority")

    try:
        instruction = mint_to(mint, destination, authority, request.amount)
    except ValueError:
        raise RequestError("Unable to create the token minting instruction") from None
    return instruction_to_response(instruction)