"""
Dispatch of raw ABI call data coming out of the vault's strategy runner.

Token contracts are served by the token ledger; any other target must be
registered with a handler that receives ``(sender, data)`` and returns the
ABI-encoded result.
"""

import logging
from typing import Callable, Dict

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from eth_utils import function_signature_to_4byte_selector

from liquid.core.exceptions import ValidationError
from liquid.utils.bytes_bitwise import to_bytes
from liquid.utils.web3_utils import normalize_address

logger = logging.getLogger(__name__)

APPROVE_SELECTOR = function_signature_to_4byte_selector("approve(address,uint256)")
TRANSFER_SELECTOR = function_signature_to_4byte_selector("transfer(address,uint256)")
TRANSFER_FROM_SELECTOR = function_signature_to_4byte_selector(
    "transferFrom(address,address,uint256)"
)

CallHandler = Callable[[str, bytes], bytes]


class ExternalCallRouter:
    def __init__(self, tokens):
        self.tokens = tokens
        self.handlers: Dict[str, CallHandler] = {}

    def register(self, target: str, handler: CallHandler) -> None:
        self.handlers[normalize_address(target)] = handler

    def unregister(self, target: str) -> None:
        self.handlers.pop(normalize_address(target), None)

    def call(self, sender: str, target: str, data) -> bytes:
        target = normalize_address(target)
        data = bytes(to_bytes(data))
        handler = self.handlers.get(target)
        if handler is not None:
            logger.info("Forwarding %s bytes from %s to %s", len(data), sender, target)
            return handler(sender, data)
        if self.tokens.is_token(target):
            return self._call_token(sender, target, data)
        raise ValidationError(f"call target {target} not supported")

    def _call_token(self, sender: str, token: str, data: bytes) -> bytes:
        selector, payload = data[:4], data[4:]
        try:
            if selector == APPROVE_SELECTOR:
                spender, amount = decode(["address", "uint256"], payload)
                ok = self.tokens.approve(token, sender, spender, amount)
            elif selector == TRANSFER_SELECTOR:
                to, amount = decode(["address", "uint256"], payload)
                ok = self.tokens.transfer(token, sender, to, amount)
            elif selector == TRANSFER_FROM_SELECTOR:
                owner, to, amount = decode(["address", "address", "uint256"], payload)
                ok = self.tokens.transfer_from(token, sender, owner, to, amount)
            else:
                raise ValidationError(f"unsupported call 0x{selector.hex()} on token {token}")
        except DecodingError as e:
            raise ValidationError(f"malformed call data: {e}")
        return encode(["bool"], [ok])
