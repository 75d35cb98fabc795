import logging
import uuid
from typing import List

from sqlmodel import Session, select

from liquid.models import LiquidEvent

logger = logging.getLogger(__name__)


def _encode(value):
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, (list, tuple)):
        return [_encode(v) for v in value]
    return value


def emit_event(session: Session, contract: str, name: str, block_timestamp: int, **args) -> LiquidEvent:
    event = LiquidEvent(
        contract=contract,
        name=name,
        args={k: _encode(v) for k, v in args.items()},
        block_timestamp=block_timestamp,
    )
    session.add(event)
    logger.info("%s emitted %s %s", contract, name, event.args)
    return event


def get_events(session: Session, contract: str | None = None, name: str | None = None) -> List[LiquidEvent]:
    statement = select(LiquidEvent)
    if contract is not None:
        statement = statement.where(LiquidEvent.contract == contract)
    if name is not None:
        statement = statement.where(LiquidEvent.name == name)
    return session.exec(statement.order_by(LiquidEvent.id.asc())).all()
