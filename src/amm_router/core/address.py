"""Address validation: 20-byte hex identifiers, returned in EIP-55 checksum form."""

from __future__ import annotations

from web3 import Web3

from .exc import InvalidAddress


def validate_and_parse_address(address: str) -> str:
    """Return the checksummed form of `address`.

    Lowercase/uppercase input is accepted; mixed-case input must already carry
    a valid checksum.
    """
    if not isinstance(address, str) or not Web3.is_address(address):
        raise InvalidAddress(address)
    return Web3.to_checksum_address(address)


__all__ = ["validate_and_parse_address"]
