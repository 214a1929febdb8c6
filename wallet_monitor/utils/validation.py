"""Address validation utilities for the supported chain families.

This module knows the textual address formats of EVM networks (``0x`` hex
with optional EIP-55 checksum), Solana (base58 public keys) and TON (raw
``workchain:hex`` or the 48-character user-friendly form).
"""

import base64
import binascii
import re
from dataclasses import dataclass
from typing import Optional

from solders.pubkey import Pubkey
from web3 import Web3

# Solana public key validation pattern (base58 format)
PUBKEY_PATTERN = re.compile(r"^[1-9A-HJ-NP-Za-km-z]{32,44}$")

EVM_ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")

TON_RAW_PATTERN = re.compile(r"^(-?\d+):([0-9a-fA-F]{64})$")
TON_FRIENDLY_PATTERN = re.compile(r"^[A-Za-z0-9+/_-]{48}$")

# Tag byte flags of user-friendly TON addresses
TON_BOUNCEABLE_TAG = 0x11
TON_NON_BOUNCEABLE_TAG = 0x51
TON_TEST_ONLY_FLAG = 0x80


@dataclass(frozen=True)
class TonAddress:
    """Parsed TON account address."""
    
    workchain: int
    hash_part: bytes
    bounceable: Optional[bool] = None
    test_only: bool = False
    
    def to_raw(self) -> str:
        """Render the address in raw ``workchain:hex`` form."""
        return f"{self.workchain}:{self.hash_part.hex()}"


def is_valid_evm_address(address: str) -> bool:
    """Return True if the string is a valid EVM address.
    
    Lower and upper case hex addresses are accepted as-is; mixed case
    addresses must carry a valid EIP-55 checksum.
    """
    if not address or not isinstance(address, str):
        return False
    if not EVM_ADDRESS_PATTERN.match(address):
        return False
    hex_part = address[2:]
    if hex_part in (hex_part.lower(), hex_part.upper()):
        return True
    return Web3.is_checksum_address(address)


def validate_public_key(pubkey: str) -> bool:
    """Validate a Solana public key.
    
    Args:
        pubkey: The public key to validate
        
    Returns:
        True if the public key is valid, False otherwise
    """
    if not pubkey or not isinstance(pubkey, str):
        return False
    if not PUBKEY_PATTERN.match(pubkey):
        return False
    try:
        Pubkey.from_string(pubkey)
    except ValueError:
        return False
    return True


def parse_ton_address(address: str) -> TonAddress:
    """Parse a TON address in raw or user-friendly form.
    
    Args:
        address: Address string
        
    Returns:
        Parsed address
        
    Raises:
        ValueError: If the address is malformed or its checksum does not match
    """
    if not address or not isinstance(address, str):
        raise ValueError("TON address must be a non-empty string")
    
    raw_match = TON_RAW_PATTERN.match(address)
    if raw_match:
        return TonAddress(
            workchain=int(raw_match.group(1)),
            hash_part=bytes.fromhex(raw_match.group(2))
        )
    
    if not TON_FRIENDLY_PATTERN.match(address):
        raise ValueError(f"Unrecognised TON address format: {address}")
    
    normalized = address.replace("-", "+").replace("_", "/")
    try:
        data = base64.b64decode(normalized, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 in TON address: {e}")
    if len(data) != 36:
        raise ValueError("User-friendly TON address must decode to 36 bytes")
    
    payload, checksum = data[:34], data[34:]
    # CRC16/XMODEM over tag, workchain and hash
    if binascii.crc_hqx(payload, 0).to_bytes(2, "big") != checksum:
        raise ValueError("TON address checksum mismatch")
    
    tag = payload[0]
    test_only = bool(tag & TON_TEST_ONLY_FLAG)
    tag &= ~TON_TEST_ONLY_FLAG
    if tag not in (TON_BOUNCEABLE_TAG, TON_NON_BOUNCEABLE_TAG):
        raise ValueError(f"Unknown TON address tag: {tag:#x}")
    
    workchain = payload[1] if payload[1] < 128 else payload[1] - 256
    return TonAddress(
        workchain=workchain,
        hash_part=payload[2:],
        bounceable=tag == TON_BOUNCEABLE_TAG,
        test_only=test_only
    )


def is_valid_ton_address(address: str) -> bool:
    """Return True if the string parses as a TON address."""
    try:
        parse_ton_address(address)
    except ValueError:
        return False
    return True


def is_supported_address(address: str) -> bool:
    """Return True if the address is valid for any supported chain family."""
    return (
        is_valid_evm_address(address)
        or validate_public_key(address)
        or is_valid_ton_address(address)
    )
