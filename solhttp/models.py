"""Request and response models exchanged with HTTP clients."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")
R = TypeVar("R")


class RequestParseError(ValueError):
    """Raised when a JSON payload does not fit a request model."""


def _text(json_name: Optional[str] = None):
    return field(default=None, metadata={"kind": "str", "json": json_name})


def _uint(bits: int, json_name: Optional[str] = None):
    return field(default=None, metadata={"kind": "uint", "bits": bits, "json": json_name})


def _json_name(spec) -> str:
    return spec.metadata.get("json") or spec.name


def _convert(spec, value: Any) -> Any:
    if value is None:
        return None
    name = _json_name(spec)
    if spec.metadata["kind"] == "str":
        if not isinstance(value, str):
            raise RequestParseError(f"invalid type for {name!r}: expected a string")
        return value
    bits = spec.metadata["bits"]
    if isinstance(value, bool) or not isinstance(value, int):
        raise RequestParseError(f"invalid type for {name!r}: expected u{bits}")
    if not 0 <= value < 2**bits:
        raise RequestParseError(f"invalid value for {name!r}: expected u{bits}")
    return value


def _from_json(cls: type[R], payload: Any) -> R:
    specs = fields(cls)
    if isinstance(payload, dict):
        raw = [payload.get(_json_name(spec)) for spec in specs]
    elif isinstance(payload, list):
        if len(payload) != len(specs):
            raise RequestParseError(
                f"invalid length {len(payload)}, expected {len(specs)} elements"
            )
        raw = payload
    else:
        raise RequestParseError("expected a JSON object")
    return cls(**{spec.name: _convert(spec, value) for spec, value in zip(specs, raw)})


@dataclass(frozen=True)
class CreateTokenRequest:
    mint_authority: Optional[str] = _text("mintAuthority")
    mint: Optional[str] = _text()
    decimals: Optional[int] = _uint(8)

    @classmethod
    def from_json(cls, payload: Any) -> CreateTokenRequest:
        """Build the request from a decoded JSON object or array."""
        return _from_json(cls, payload)


@dataclass(frozen=True)
class MintTokenRequest:
    mint: Optional[str] = _text()
    destination: Optional[str] = _text()
    authority: Optional[str] = _text()
    amount: Optional[int] = _uint(64)

    @classmethod
    def from_json(cls, payload: Any) -> MintTokenRequest:
        """Build the request from a decoded JSON object or array."""
        return _from_json(cls, payload)


@dataclass(frozen=True)
class SignMessageRequest:
    message: Optional[str] = _text()
    secret: Optional[str] = _text()

    @classmethod
    def from_json(cls, payload: Any) -> SignMessageRequest:
        """Build the request from a decoded JSON object or array."""
        return _from_json(cls, payload)


@dataclass(frozen=True)
class VerifyMessageRequest:
    message: Optional[str] = _text()
    signature: Optional[str] = _text()
    pubkey: Optional[str] = _text()

    @classmethod
    def from_json(cls, payload: Any) -> VerifyMessageRequest:
        """Build the request from a decoded JSON object or array."""
        return _from_json(cls, payload)


@dataclass(frozen=True)
class SendSolRequest:
    from_: Optional[str] = _text("from")
    to: Optional[str] = _text()
    lamports: Optional[int] = _uint(64)

    @classmethod
    def from_json(cls, payload: Any) -> SendSolRequest:
        """Build the request from a decoded JSON object or array."""
        return _from_json(cls, payload)


@dataclass(frozen=True)
class SendTokenRequest:
    destination: Optional[str] = _text()
    mint: Optional[str] = _text()
    owner: Optional[str] = _text()
    amount: Optional[int] = _uint(64)

    @classmethod
    def from_json(cls, payload: Any) -> SendTokenRequest:
        """Build the request from a decoded JSON object or array."""
        return _from_json(cls, payload)


def _to_json(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return {
            spec.metadata.get("json") or spec.name: _to_json(getattr(value, spec.name))
            for spec in fields(value)
        }
    if isinstance(value, (list, tuple)):
        return [_to_json(item) for item in value]
    return value


@dataclass(frozen=True)
class ApiResponse(Generic[T]):
    """The envelope every endpoint answers with."""

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, data: T) -> ApiResponse[T]:
        return cls(True, data, None)

    @classmethod
    def failure(cls, message: str) -> ApiResponse[T]:
        return cls(False, None, message)

    def to_dict(self) -> dict:
        """JSON form, leaving out whichever of data and error is absent."""
        result: dict = {"success": self.success}
        if self.data is not None:
            result["data"] = _to_json(self.data)
        if self.error is not None:
            result["error"] = self.error
        return result


@dataclass(frozen=True)
class KeypairData:
    pubkey: str
    secret: str


@dataclass(frozen=True)
class SignMessageData:
    signature: str
    pubkey: str
    message: str


@dataclass(frozen=True)
class VerifyMessageData:
    valid: bool
    message: str
    pubkey: str


@dataclass(frozen=True)
class AccountInfo:
    pubkey: str
    is_signer: bool
    is_writable: bool


@dataclass(frozen=True)
class InstructionData:
    program_id: str
    accounts: list[AccountInfo]
    instruction_data: str


@dataclass(frozen=True)
class SolTransferData:
    program_id: str
    accounts: list[str]
    instruction_data: str


@dataclass(frozen=True)
class TokenAccountInfo:
    pubkey: str
    is_signer: bool = field(metadata={"json": "isSigner"})


@dataclass(frozen=True)
class TokenTransferData:
    program_id: str
    accounts: list[TokenAccountInfo]
    instruction_data: str