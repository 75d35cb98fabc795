from fastapi import APIRouter, Query

from liquid import schemas
from liquid.api.api_v1.deps import CallerDep, ContractsDep

router = APIRouter()


def _completion(quote) -> schemas.CompletionQuote:
    return schemas.CompletionQuote(
        asset=quote.asset,
        shares=quote.shares,
        amount=quote.amount,
        refund=quote.refund,
        fees=schemas.FeeInfo.from_fees(quote.fees),
    )


@router.get("", response_model=schemas.CashierInfo)
async def get_cashier(contracts: ContractsDep):
    cashier = contracts.cashier
    return schemas.CashierInfo(
        paused=cashier.paused,
        high_water_mark=cashier.high_water_mark,
        last_collect_time=cashier.last_collect_time,
        parameters=cashier.parameters(),
    )


@router.get("/deposits/{holder}", response_model=schemas.DepositInfo)
async def deposit_info(holder: str, contracts: ContractsDep):
    return schemas.DepositInfo(**contracts.cashier.deposit_info(holder)._asdict())


@router.get("/withdrawals/{holder}", response_model=schemas.PendingInfo)
async def pending_info(holder: str, contracts: ContractsDep):
    return schemas.PendingInfo(**contracts.cashier.pending_info(holder)._asdict())


@router.get("/fees", response_model=schemas.FeeInfo)
async def calculate_fees(
    contracts: ContractsDep,
    value: int,
    holder: str,
    instant: bool = Query(False),
):
    return schemas.FeeInfo.from_fees(contracts.cashier.calculate_fees(value, holder, instant))


@router.post("/deposit", response_model=schemas.DepositResult)
async def deposit(body: schemas.DepositRequest, contracts: ContractsDep, caller: CallerDep):
    shares = contracts.cashier.deposit(caller, body.asset, body.amount)
    return schemas.DepositResult(asset=body.asset, amount=body.amount, shares=shares)


@router.post("/withdrawals", response_model=schemas.PendingInfo)
async def request_withdraw(body: schemas.WithdrawRequest, contracts: ContractsDep, caller: CallerDep):
    contracts.cashier.request_withdraw(caller, body.asset, body.shares)
    return await pending_info(caller, contracts)


@router.post("/withdrawals/instant", response_model=schemas.WithdrawQuote)
async def instant_withdraw(body: schemas.WithdrawRequest, contracts: ContractsDep, caller: CallerDep):
    quote = contracts.cashier.instant_withdraw(caller, body.asset, body.shares)
    return schemas.WithdrawQuote.from_quote(quote)


@router.post("/withdrawals/complete", response_model=schemas.CompletionQuote)
async def complete_withdraw(contracts: ContractsDep, caller: CallerDep):
    return _completion(contracts.cashier.complete_withdraw(caller))


@router.get("/simulate/deposit", response_model=schemas.DepositResult)
async def simulate_deposit(asset: str, amount: int, contracts: ContractsDep):
    shares = contracts.cashier.simulate_deposit(asset, amount)
    return schemas.DepositResult(asset=asset, amount=amount, shares=shares)


@router.get("/simulate/request-withdraw", response_model=schemas.WithdrawQuote)
async def simulate_request_withdraw(holder: str, asset: str, shares: int, contracts: ContractsDep):
    quote = contracts.cashier.simulate_request_withdraw(holder, asset, shares)
    return schemas.WithdrawQuote.from_quote(quote)


@router.get("/simulate/instant-withdraw", response_model=schemas.WithdrawQuote)
async def simulate_instant_withdraw(holder: str, asset: str, shares: int, contracts: ContractsDep):
    quote = contracts.cashier.simulate_instant_withdraw(holder, asset, shares)
    return schemas.WithdrawQuote.from_quote(quote)


@router.get("/simulate/complete-withdraw", response_model=schemas.CompletionQuote)
async def simulate_complete_withdraw(holder: str, contracts: ContractsDep):
    return _completion(contracts.cashier.simulate_complete_withdraw(holder))


@router.post("/collect-fees", response_model=schemas.FeeInfo)
async def collect_fees(contracts: ContractsDep, caller: CallerDep):
    return schemas.FeeInfo.from_fees(contracts.cashier.collect_fees(caller))


@router.post("/parameters", response_model=schemas.CashierInfo)
async def set_parameter(body: schemas.ParameterUpdate, contracts: ContractsDep, caller: CallerDep):
    contracts.cashier.set_parameter(caller, body.key, body.value)
    return await get_cashier(contracts)


@router.post("/pause", response_model=schemas.CashierInfo)
async def pause(contracts: ContractsDep, caller: CallerDep):
    contracts.cashier.pause(caller)
    return await get_cashier(contracts)


@router.post("/unpause", response_model=schemas.CashierInfo)
async def unpause(contracts: ContractsDep, caller: CallerDep):
    contracts.cashier.unpause(caller)
    return await get_cashier(contracts)


@router.post("/fee-managers", response_model=bool)
async def set_fee_manager(body: schemas.RoleUpdate, contracts: ContractsDep, caller: CallerDep):
    return contracts.cashier.set_fee_manager(caller, body.account, body.enabled)
