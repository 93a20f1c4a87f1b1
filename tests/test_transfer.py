import pytest

from solhttp.base58 import b58decode, b58encode
from solhttp.helpers import RequestError
from solhttp.models import SendSolRequest, SendTokenRequest
from solhttp.solana import (
    SYSTEM_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
    Keypair,
    get_associated_token_address,
    system_transfer,
    token_transfer,
)
from solhttp.transfer import MAX_LAMPORTS, MAX_TOKEN_AMOUNT, send_sol, send_token


def _address() -> str:
    return str(Keypair.generate().pubkey())


@pytest.fixture
def wallets():
    return _address(), _address()


# --- send_sol ---------------------------------------------------------------


def test_send_sol_success(wallets):
    sender, recipient = wallets
    result = send_sol(SendSolRequest(from_=sender, to=recipient, lamports=5000))
    expected = system_transfer(
        Keypair.generate().pubkey().__class__.from_base58(sender),
        Keypair.generate().pubkey().__class__.from_base58(recipient),
        5000,
    )
    assert result.program_id == str(SYSTEM_PROGRAM_ID)
    assert result.accounts == [sender, recipient]
    assert result.instruction_data == b58encode(expected.data)


def test_send_sol_data_holds_transfer_tag_and_amount(wallets):
    sender, recipient = wallets
    result = send_sol(SendSolRequest(from_=sender, to=recipient, lamports=1))
    data = b58decode(result.instruction_data)
    assert len(data) == 12
    assert int.from_bytes(data[:4], "little") == 2
    assert int.from_bytes(data[4:], "little") == 1


def test_send_sol_allows_exact_maximum(wallets):
    sender, recipient = wallets
    result = send_sol(SendSolRequest(from_=sender, to=recipient, lamports=MAX_LAMPORTS))
    assert int.from_bytes(b58decode(result.instruction_data)[4:], "little") == MAX_LAMPORTS


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"to": "x", "lamports": 1}, "Please provide a valid sender wallet address"),
        ({"from_": "", "to": "x", "lamports": 1}, "Please provide a valid sender wallet address"),
        ({"from_": "x", "lamports": 1}, "Please provide a valid recipient wallet address"),
        ({"from_": "x", "to": "", "lamports": 1}, "Please provide a valid recipient wallet address"),
        ({"from_": "x", "to": "y"}, "Please specify the amount you want to transfer"),
        ({"from_": "x", "to": "y", "lamports": 0}, "Amount must be greater than 0"),
        (
            {"from_": "x", "to": "y", "lamports": MAX_LAMPORTS + 1},
            "The transfer amount exceeds the maximum allowed limit",
        ),
    ],
)
def test_send_sol_field_errors(kwargs, message):
    with pytest.raises(RequestError) as excinfo:
        send_sol(SendSolRequest(**kwargs))
    assert excinfo.value.message == message


def test_send_sol_invalid_sender(wallets):
    _, recipient = wallets
    with pytest.raises(RequestError) as excinfo:
        send_sol(SendSolRequest(from_="short", to=recipient, lamports=10))
    assert excinfo.value.message == "Invalid sender public key"


def test_send_sol_invalid_recipient_reports_parse_error(wallets):
    sender, _ = wallets
    with pytest.raises(RequestError) as excinfo:
        send_sol(SendSolRequest(from_=sender, to="short", lamports=10))
    assert (
        excinfo.value.message
        == "The provided address length is not valid for a Solana public key"
    )


def test_send_sol_same_address(wallets):
    sender, _ = wallets
    with pytest.raises(RequestError) as excinfo:
        send_sol(SendSolRequest(from_=sender, to=sender, lamports=10))
    assert excinfo.value.message == "Cannot transfer to the same address"


@pytest.mark.parametrize("system_side", ["from_", "to"])
def test_send_sol_system_program_rejected(wallets, system_side):
    other, _ = wallets
    kwargs = {"from_": other, "to": other, "lamports": 10}
    kwargs[system_side] = str(SYSTEM_PROGRAM_ID)
    with pytest.raises(RequestError) as excinfo:
        send_sol(SendSolRequest(**kwargs))
    assert (
        excinfo.value.message
        == "Transfers involving the system program are not permitted"
    )


# --- send_token -------------------------------------------------------------


def test_send_token_success():
    owner_key = Keypair.generate().pubkey()
    destination_key = Keypair.generate().pubkey()
    mint_key = Keypair.generate().pubkey()
    result = send_token(
        SendTokenRequest(
            destination=str(destination_key),
            mint=str(mint_key),
            owner=str(owner_key),
            amount=250,
        )
    )
    sender_ata = get_associated_token_address(owner_key, mint_key)
    receiver_ata = get_associated_token_address(destination_key, mint_key)
    expected = token_transfer(sender_ata, receiver_ata, owner_key, 250)

    assert result.program_id == str(TOKEN_PROGRAM_ID)
    assert result.instruction_data == b58encode(expected.data)
    assert [(a.pubkey, a.is_signer) for a in result.accounts] == [
        (str(owner_key), False),
        (str(receiver_ata), False),
        (str(owner_key), True),
    ]


def test_send_token_data_has_transfer_tag():
    result = send_token(
        SendTokenRequest(
            destination=_address(), mint=_address(), owner=_address(), amount=42
        )
    )
    data = b58decode(result.instruction_data)
    assert data[0] == 3
    assert int.from_bytes(data[1:], "little") == 42


def test_send_token_allows_half_of_u64_max():
    result = send_token(
        SendTokenRequest(
            destination=_address(),
            mint=_address(),
            owner=_address(),
            amount=MAX_TOKEN_AMOUNT,
        )
    )
    assert int.from_bytes(b58decode(result.instruction_data)[1:], "little") == MAX_TOKEN_AMOUNT


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"mint": "m", "owner": "o", "amount": 1}, "Destination wallet address is required for this operation"),
        ({"destination": "d", "owner": "o", "amount": 1}, "Token mint address must be specified"),
        ({"destination": "d", "mint": "m", "amount": 1}, "Current token owner address is needed"),
        ({"destination": "d", "mint": "m", "owner": "o"}, "Please specify how many tokens to transfer"),
        ({"destination": "d", "mint": "m", "owner": "o", "amount": 0}, "Amount must be greater than 0"),
        (
            {"destination": "d", "mint": "m", "owner": "o", "amount": MAX_TOKEN_AMOUNT + 1},
            "The requested transfer amount is unreasonably large",
        ),
    ],
)
def test_send_token_field_errors(kwargs, message):
    with pytest.raises(RequestError) as excinfo:
        send_token(SendTokenRequest(**kwargs))
    assert excinfo.value.message == message


def test_send_token_invalid_mint():
    with pytest.raises(RequestError) as excinfo:
        send_token(
            SendTokenRequest(
                destination=_address(), mint="0" * 40, owner=_address(), amount=1
            )
        )
    assert (
        excinfo.value.message
        == "The address contains invalid characters for base58 encoding"
    )


def test_send_token_same_address():
    owner = _address()
    with pytest.raises(RequestError) as excinfo:
        send_token(
            SendTokenRequest(destination=owner, mint=_address(), owner=owner, amount=1)
        )
    assert excinfo.value.message == "Cannot transfer to the same address"


def test_send_token_system_program_rejected():
    with pytest.raises(RequestError) as excinfo:
        send_token(
            SendTokenRequest(
                destination=str(SYSTEM_PROGRAM_ID),
                mint=_address(),
                owner=_address(),
                amount=1,
            )
        )
    assert (
        excinfo.value.message
        == "Token transfers involving the system program are not allowed"
    )