from eth_utils import is_address, keccak, to_checksum_address
from web3 import Web3

from liquid.core.exceptions import ValidationError

DEFAULT_ADMIN_ROLE = "0x" + "00" * 32


def role_id(name: str) -> str:
    return "0x" + bytes(Web3.solidity_keccak(["string"], [name])).hex()


def normalize_address(address: str) -> str:
    if not isinstance(address, str) or not is_address(address):
        raise ValidationError(f"invalid address {address!r}")
    return to_checksum_address(address)


def derive_address(*parts) -> str:
    """Deterministic component address for a deployment."""
    seed = ":".join(str(p) for p in parts)
    return to_checksum_address(keccak(text=seed)[-20:])
