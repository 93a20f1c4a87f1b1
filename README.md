# solhttp

A small HTTP server for Solana work that never touches the network. It
generates Ed25519 keypairs, signs and verifies messages, and builds
SPL Token and System Program instructions, returning everything as JSON.

## Installation

```
pip install .
```

With the test requirements:

```
pip install ".[test]"
```

## Running the server

```
solhttp
```

By default the server listens on `0.0.0.0:8084`. Use `--host` and `--port`
to bind elsewhere:

```
solhttp --host 127.0.0.1 --port 9000
```

Every route accepts `POST` only and allows cross-origin requests from any
origin.

## Endpoints

| Route             | Body fields                                  | Result                                   |
|-------------------|----------------------------------------------|------------------------------------------|
| `/keypair`        | none                                         | new `pubkey` and base58 `secret`         |
| `/token/create`   | `mintAuthority`, `mint`, `decimals` (0–9)    | `InitializeMint` instruction             |
| `/token/mint`     | `mint`, `destination`, `authority`, `amount` | `MintTo` instruction                     |
| `/message/sign`   | `message`, `secret`                          | base58 `signature`, `pubkey`, `message`  |
| `/message/verify` | `message`, `signature`, `pubkey`             | `valid`, `message`, `pubkey`             |
| `/send/sol`       | `from`, `to`, `lamports`                     | System Program transfer instruction      |
| `/send/token`     | `destination`, `mint`, `owner`, `amount`     | SPL Token transfer instruction           |

`/token/create` and `/token/mint` return `program_id`, `accounts` (each with
`pubkey`, `is_signer`, `is_writable`) and base58 `instruction_data`.
`/send/sol` returns the account addresses as plain strings, and `/send/token`
returns accounts with `pubkey` and `isSigner`. Token transfers move tokens
between the associated token accounts of the owner and the destination for
the given mint.

### Responses

A successful call answers with status 200:

```json
{"success": true, "data": {"valid": true, "message": "hello", "pubkey": "..."}}
```

A request that fails validation answers with status 400 and a message that
explains why:

```json
{"success": false, "error": "Amount must be greater than 0"}
```

Requests that never reach validation get a plain-text answer instead:

- 415 when the `Content-Type` is not JSON,
- 400 when the body is not valid JSON,
- 422 when a field has the wrong type or an integer is out of range.

### Rules

- Messages must be non-empty and at most 1000 bytes in UTF-8.
- Public keys are base58 strings of 32 to 44 characters that decode to 32 bytes.
- Secrets are base58 encodings, 80 to 100 characters long, of the 64-byte
  keypair that `/keypair` returns.
- `decimals` must be from 0 to 9; amounts and lamports must be greater than 0.
- `lamports` may be at most 100,000,000,000,000; token transfer amounts at most
  half of the largest unsigned 64-bit value.
- Sender and recipient of a transfer must differ.
- The System Program address is refused wherever it would act as a mint, an
  authority, a mint destination, or a transfer party.

## Using it from Python

The instruction builders and helpers work without the server:

```python
from solhttp.solana import Keypair, system_transfer
from solhttp.helpers import instruction_to_response

sender = Keypair.generate()
receiver = Keypair.generate()
instruction = system_transfer(sender.pubkey(), receiver.pubkey(), 1_000)
print(instruction_to_response(instruction))
```

The modules are:

- `solhttp.base58` — `b58encode`, `b58decode` and `Base58Error`.
- `solhttp.solana` — `Pubkey`, `Keypair`, `verify_signature`,
  `find_program_address`, `get_associated_token_address` and the instruction
  builders `system_transfer`, `initialize_mint`, `mint_to`, `token_transfer`.
- `solhttp.models` — request classes with `from_json`, the response data
  classes and the `ApiResponse` envelope.
- `solhttp.helpers` — `parse_pubkey`, `keypair_from_base58`,
  `instruction_to_response` and `RequestError`.
- `solhttp.keypair`, `solhttp.message`, `solhttp.tokens`, `solhttp.transfer` —
  the endpoint handlers, which raise `RequestError` on invalid input.
- `solhttp.server` — `create_app()` returns the Starlette ASGI application,
  so it can be served by any ASGI server or called through a test client;
  `main()` runs it with uvicorn.

## What it does not do

The server only builds instructions. It does not connect to a Solana cluster,
assemble or sign transactions, submit anything, or look up balances and
account state.