import pytest

from specmatch.core.values import ContractEvent, sc_address, sc_i64, sc_symbol
from specmatch.decoding.specs import DataFormat, EventSpec, ParamLocation, SpecParam, SpecType, SpecTypeDef

ADDRESS = SpecTypeDef.scalar(SpecType.ADDRESS)
I64 = SpecTypeDef.scalar(SpecType.I64)
U32 = SpecTypeDef.scalar(SpecType.U32)
SYMBOL = SpecTypeDef.scalar(SpecType.SYMBOL)


def topic(name: str, type_: SpecTypeDef) -> SpecParam:
    return SpecParam(name, type_, ParamLocation.TOPIC_LIST)


def data(name: str, type_: SpecTypeDef) -> SpecParam:
    return SpecParam(name, type_, ParamLocation.DATA)


def make_spec(
    prefix: tuple[str, ...],
    params: list[SpecParam],
    data_format: DataFormat = DataFormat.SINGLE_VALUE,
    name: str = "TestEvent",
) -> EventSpec:
    return EventSpec(name=name, prefix_topics=prefix, params=tuple(params), data_format=data_format)


@pytest.fixture
def transfer_event() -> ContractEvent:
    return ContractEvent(
        contract_id="CCONTRACT",
        topics=(sc_symbol("transfer"), sc_address("GABC")),
        data=sc_i64(500),
    )


@pytest.fixture
def transfer_spec() -> EventSpec:
    return make_spec(("transfer",), [topic("to", ADDRESS), data("amount", I64)], name="Transfer")
