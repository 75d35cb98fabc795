from unittest.mock import Mock

import pytest
from eth_abi import decode, encode
from eth_utils import function_signature_to_4byte_selector

from liquid.core.exceptions import (
    AccessControlUnauthorizedAccount,
    ERC20InsufficientAllowance,
    ERC20InsufficientBalance,
    InvalidInitialization,
    ValidationError,
)
from liquid.services.events import get_events
from tests.helpers import (
    BTCB,
    DEX_ROUTER,
    MANAGER,
    OWNER,
    UPDATER,
    USDC,
    USER1,
    USER2,
    parse_units,
    shares,
)

APPROVE = function_signature_to_4byte_selector("approve(address,uint256)")
TRANSFER = function_signature_to_4byte_selector("transfer(address,uint256)")
SWAP = function_signature_to_4byte_selector(
    "swapExactTokensForTokens(uint256,uint256,address[],address,uint256)"
)

WORD_ANY = "00" * 32
WORD_FIXED = "ff" * 32


def word(address: str) -> str:
    return address[2:].lower().rjust(64, "0")


def approve_call(spender, amount) -> bytes:
    return APPROVE + encode(["address", "uint256"], [spender, amount])


@pytest.fixture
def funded(priced, tokens):
    tokens.approve(BTCB, USER1, priced.vault.address, parse_units(1, 18))
    priced.cashier.deposit(USER1, BTCB, parse_units("0.1", 18))
    return priced


def test_share_token(funded, db_session):
    vault = funded.vault
    assert vault.name == "BTC Liquid Vault Share"
    assert vault.symbol == "bSHARE"
    assert vault.decimals == 18
    assert vault.total_supply() == shares(6000)

    vault.transfer(USER1, USER2, shares(1000))
    assert vault.balance_of(USER2) == shares(1000)
    with pytest.raises(ERC20InsufficientBalance):
        vault.transfer(USER2, USER1, shares(1001))

    vault.approve(USER1, USER2, shares(500))
    with pytest.raises(ERC20InsufficientAllowance):
        vault.transfer_from(USER2, USER1, USER2, shares(501))
    vault.transfer_from(USER2, USER1, USER2, shares(500))
    assert vault.allowance(USER1, USER2) == 0
    assert vault.balance_of(USER1) == shares(4500)
    assert vault.total_supply() == shares(6000)

    transfers = get_events(db_session, vault.address, "Transfer")
    assert transfers[-1].args == {"sender": USER1, "to": USER2, "value": shares(500)}


def test_wiring_is_one_shot(contracts):
    vault = contracts.vault
    assert vault.cashier == contracts.liquid.cashier_address
    assert vault.fee_splitter == contracts.liquid.fee_splitter_address
    with pytest.raises(InvalidInitialization):
        vault.set_cashier(OWNER, USER1)
    with pytest.raises(InvalidInitialization):
        vault.set_fee_splitter(OWNER, USER1)


def test_hooks_restricted(funded):
    vault = funded.vault
    with pytest.raises(ValidationError, match="LIQUID_VAULT: caller not allowed"):
        vault.mint(OWNER, OWNER, shares(1))
    with pytest.raises(ValidationError, match="LIQUID_VAULT: caller not allowed"):
        vault.burn(funded.liquid.fee_splitter_address, USER1, shares(1))
    with pytest.raises(ValidationError, match="LIQUID_VAULT: caller not allowed"):
        vault.transfer_asset(USER1, BTCB, USER1, 1)


def test_liquidity_manager(funded, tokens):
    vault = funded.vault
    with pytest.raises(AccessControlUnauthorizedAccount):
        vault.withdraw_liquidity_directly(MANAGER, BTCB, parse_units("0.05", 18))

    vault.set_liquidity_manager(OWNER, MANAGER, True)
    vault.withdraw_liquidity_directly(MANAGER, BTCB, parse_units("0.05", 18))
    assert vault.asset_balance(BTCB) == parse_units("0.05", 18)
    assert tokens.balance_of(BTCB, MANAGER) == parse_units("0.05", 18)
    with pytest.raises(ERC20InsufficientBalance):
        vault.withdraw_liquidity_directly(MANAGER, BTCB, parse_units("0.06", 18))

    tokens.approve(BTCB, MANAGER, vault.address, parse_units("0.05", 18))
    vault.deposit_liquidity_directly(MANAGER, BTCB, parse_units("0.05", 18))
    assert vault.asset_balance(BTCB) == parse_units("0.1", 18)

    vault.set_liquidity_manager(OWNER, MANAGER, False)
    with pytest.raises(AccessControlUnauthorizedAccount):
        vault.deposit_liquidity_directly(MANAGER, BTCB, 1)


def test_strategies(funded, tokens, router):
    vault = funded.vault
    vault.set_liquidity_manager(OWNER, MANAGER, True)

    approve_mask = "0x" + "ffffffff" + WORD_FIXED + WORD_ANY
    approve_restrict = "0x" + APPROVE.hex() + word(DEX_ROUTER) + WORD_ANY
    vault.add_strategy(OWNER, BTCB, approve_mask, approve_restrict, "Approve BTCB for the router")
    with pytest.raises(ValidationError, match="LIQUID_VAULT: length mismatch"):
        vault.add_strategy(OWNER, BTCB, "0xffff", "0xff", "")
    vault.add_strategy(OWNER, USDC, approve_mask, approve_restrict, "Approve USDC for the router")
    with pytest.raises(AccessControlUnauthorizedAccount):
        vault.add_strategy(MANAGER, USDC, approve_mask, approve_restrict, "")

    result = vault.execute_strategy(MANAGER, 0, approve_call(DEX_ROUTER, parse_units(1, 18)))
    assert decode(["bool"], result) == (True,)
    assert tokens.allowance(BTCB, vault.address, DEX_ROUTER) == parse_units(1, 18)

    with pytest.raises(AccessControlUnauthorizedAccount):
        vault.execute_strategy(UPDATER, 0, approve_call(DEX_ROUTER, parse_units(1, 18)))
    with pytest.raises(ValidationError, match="LIQUID_VAULT: strategy not matched"):
        vault.execute_strategy(
            MANAGER, 0, TRANSFER + encode(["address", "uint256"], [DEX_ROUTER, parse_units(1, 18)])
        )
    with pytest.raises(ValidationError, match="LIQUID_VAULT: strategy not matched"):
        vault.execute_strategy(MANAGER, 0, approve_call(USER1, parse_units(1, 18)))
    with pytest.raises(ValidationError, match="BYTES_BITWISE: length mismatch"):
        vault.execute_strategy(MANAGER, 0, approve_call(DEX_ROUTER, parse_units(1, 18)) + b"\x00")

    # swap through a router the ledger knows nothing about
    swap_mask = "0x" + "ffffffff" + WORD_ANY * 2 + WORD_FIXED * 2 + WORD_ANY + WORD_FIXED * 3
    swap_restrict = (
        "0x" + SWAP.hex() + WORD_ANY * 2 + hex(0xA0)[2:].rjust(64, "0") + word(vault.address)
        + WORD_ANY + "2".rjust(64, "0") + word(BTCB) + word(USDC)
    )
    vault.add_strategy(OWNER, DEX_ROUTER, swap_mask, swap_restrict, "Swap BTCB for USDC")
    assert vault.strategies_length() == 3

    swap_data = SWAP + encode(
        ["uint256", "uint256", "address[]", "address", "uint256"],
        [parse_units("0.1", 18), 0, [BTCB, USDC], vault.address, 1_700_000_000],
    )
    with pytest.raises(ValidationError, match="not supported"):
        vault.execute_strategy(MANAGER, 2, swap_data)

    handler = Mock(return_value=encode(["uint256[]"], [[parse_units("0.1", 18), 6000_000000]]))
    router.register(DEX_ROUTER, handler)
    vault.execute_strategy(MANAGER, 2, swap_data)
    handler.assert_called_once_with(vault.address, swap_data)

    with pytest.raises(ValidationError, match="LIQUID_VAULT: strategy not matched"):
        vault.execute_strategy(
            MANAGER, 2,
            SWAP + encode(
                ["uint256", "uint256", "address[]", "address", "uint256"],
                [parse_units("0.1", 18), 0, [BTCB, USDC], USER1, 1_700_000_000],
            ),
        )

    vault.remove_strategy(OWNER, 1)
    assert vault.strategies_length() == 2
    assert vault.strategies(1).target == DEX_ROUTER
    assert vault.strategies(0).description == "Approve BTCB for the router"
    with pytest.raises(ValidationError, match="LIQUID_VAULT: invalid index"):
        vault.strategies(2)
    assert len(get_events(vault.session, vault.address, "StrategyExecuted")) == 2
