"""Opaque page token encoding for keyset pagination."""

import base64
import binascii
import logging
from datetime import date, datetime, time, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple
from uuid import UUID

from pydantic import BaseModel, Field, ValidationError

from ..errors.problem_details import TokenDecodeError


logger = logging.getLogger(__name__)

TOKEN_VERSION = 1


class PageTokenData(BaseModel):
    """Envelope serialized inside a page token."""

    v: int = Field(default=TOKEN_VERSION, description="Token format version")
    values: List[Tuple[str, Optional[Any]]] = Field(
        default_factory=list,
        description="Tagged sort key values of the last row, in sort key order"
    )


def _b64(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _unb64(text: str) -> bytes:
    padding = "=" * (-len(text) % 4)
    return base64.b64decode((text + padding).encode("ascii"), altchars=b"-_", validate=True)


def _encode_value(value: Any) -> Tuple[str, Optional[Any]]:
    """Tag a value with its type so decoding restores it exactly."""
    if value is None:
        return "null", None
    # bool before int and datetime before date: both are subclasses
    if isinstance(value, bool):
        return "bool", value
    if isinstance(value, int):
        return "int", str(int(value))
    if isinstance(value, float):
        return "float", repr(float(value))
    if isinstance(value, Decimal):
        return "decimal", str(value)
    if isinstance(value, str):
        return "str", value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return "bytes", _b64(bytes(value))
    if isinstance(value, datetime):
        return "datetime", value.isoformat()
    if isinstance(value, date):
        return "date", value.isoformat()
    if isinstance(value, time):
        return "time", value.isoformat()
    if isinstance(value, timedelta):
        return "interval", str(_interval_microseconds(value))
    if isinstance(value, UUID):
        return "uuid", str(value)
    raise TypeError(f"Cannot encode sort key value of type {type(value).__name__}")


def _interval_microseconds(value: timedelta) -> int:
    return (value.days * 86400 + value.seconds) * 1_000_000 + value.microseconds


def _decode_decimal(text: str) -> Decimal:
    try:
        return Decimal(text)
    except InvalidOperation:
        raise ValueError(f"invalid decimal {text!r}")


_DECODERS: Dict[str, Callable[[str], Any]] = {
    "int": int,
    "float": float,
    "decimal": _decode_decimal,
    "str": str,
    "bytes": _unb64,
    "datetime": datetime.fromisoformat,
    "date": date.fromisoformat,
    "time": time.fromisoformat,
    "interval": lambda text: timedelta(microseconds=int(text)),
    "uuid": UUID,
}


def _decode_value(tag: str, payload: Any) -> Any:
    if tag == "null":
        if payload is not None:
            raise ValueError("null entry carries a payload")
        return None
    if tag == "bool":
        if not isinstance(payload, bool):
            raise ValueError(f"bool entry carries {payload!r}")
        return payload
    decoder = _DECODERS.get(tag)
    if decoder is None:
        raise ValueError(f"unknown value tag {tag!r}")
    if not isinstance(payload, str):
        raise ValueError(f"{tag} entry carries {payload!r}")
    return decoder(payload)


def encode_page_token(values: Sequence[Any]) -> str:
    """Encode the sort key values of a row into a page token.

    Args:
        values: Sort key values in sort key order, NULLs as None

    Returns:
        URL-safe base64 token without padding

    Raises:
        TypeError: If a value has an unsupported type
    """
    token_data = PageTokenData(values=[_encode_value(value) for value in values])
    return _b64(token_data.model_dump_json().encode("utf-8"))


def decode_page_token(token: str) -> List[Any]:
    """Decode a page token back into sort key values.

    Args:
        token: Token produced by ``encode_page_token``

    Returns:
        Sort key values in the order they were encoded

    Raises:
        TokenDecodeError: If the token is empty or malformed
    """
    if not token:
        raise TokenDecodeError("Empty page token provided")

    try:
        raw = _unb64(token)
        token_data = PageTokenData.model_validate_json(raw)
        if token_data.v != TOKEN_VERSION:
            raise ValueError(f"unsupported token version {token_data.v}")
        return [_decode_value(tag, payload) for tag, payload in token_data.values]

    except (ValueError, TypeError, OverflowError, binascii.Error, ValidationError) as e:
        logger.warning(f"Rejected malformed page token: {e}")
        raise TokenDecodeError(f"Invalid page token format: {e}")
