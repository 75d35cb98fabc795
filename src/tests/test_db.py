import pytest
from sqlmodel import Session, select

from liquid.core.db import transactional, unit_of_work
from liquid.core.exceptions import ValidationError
from liquid.models import Token


class Recorder:
    def __init__(self, session):
        self.session = session

    @transactional
    def add(self, symbol, fail=False):
        self.session.add(Token(address=f"0x{symbol}", name=symbol, symbol=symbol, decimals=18))
        if fail:
            raise ValidationError("boom")

    @transactional
    def add_pair(self, first, second, fail=False):
        self.add(first)
        self.add(second, fail=fail)


def symbols(engine):
    with Session(engine) as session:
        return sorted(token.symbol for token in session.exec(select(Token)).all())


def test_commit_on_success(engine, db_session):
    Recorder(db_session).add("AAA")
    assert symbols(engine) == ["AAA"]


def test_rollback_on_error(engine, db_session):
    with pytest.raises(ValidationError, match="boom"):
        Recorder(db_session).add("AAA", fail=True)
    assert symbols(engine) == []


def test_nested_calls_join_outer_unit(engine, db_session):
    recorder = Recorder(db_session)
    with pytest.raises(ValidationError):
        recorder.add_pair("AAA", "BBB", fail=True)
    assert symbols(engine) == []

    recorder.add_pair("AAA", "BBB")
    assert symbols(engine) == ["AAA", "BBB"]


def test_unit_of_work_block(engine, db_session):
    with pytest.raises(ValidationError):
        with unit_of_work(db_session):
            Recorder(db_session).add("AAA")
            raise ValidationError("late failure")
    assert symbols(engine) == []
    assert not db_session.info["liquid_unit_of_work"]
