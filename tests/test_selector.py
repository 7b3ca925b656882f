from conftest import ADDRESS, I64, U32, data, make_spec, topic

from specmatch.core.values import ContractEvent
from specmatch.decoding.selector import explain_all, first_matching, select_spec
from specmatch.decoding.specs import EventSpec


def _deposit() -> EventSpec:
    return make_spec(("deposit",), [topic("to", ADDRESS), data("amount", I64)], name="Deposit")


def _wrong_types() -> EventSpec:
    return make_spec(("transfer",), [topic("to", U32), data("amount", I64)], name="TransferU32")


def test_select_first_match(transfer_event: ContractEvent, transfer_spec: EventSpec) -> None:
    assert select_spec(transfer_event, [_deposit(), transfer_spec]) is transfer_spec


def test_select_none(transfer_event: ContractEvent) -> None:
    assert select_spec(transfer_event, [_deposit(), _wrong_types()]) is None
    assert select_spec(transfer_event, []) is None


def test_first_in_input_order_wins(transfer_event: ContractEvent, transfer_spec: EventSpec) -> None:
    twin = make_spec(transfer_spec.prefix_topics, list(transfer_spec.params), name="Twin")
    assert select_spec(transfer_event, [transfer_spec, twin]) is transfer_spec
    assert select_spec(transfer_event, [twin, transfer_spec]) is twin


def test_reordering_non_matching_specs(transfer_event: ContractEvent, transfer_spec: EventSpec) -> None:
    a, b = _deposit(), _wrong_types()
    assert select_spec(transfer_event, [a, b, transfer_spec]) is transfer_spec
    assert select_spec(transfer_event, [b, transfer_spec, a]) is transfer_spec


def test_explain_all_keeps_order(transfer_event: ContractEvent, transfer_spec: EventSpec) -> None:
    outcomes = explain_all(transfer_event, [_deposit(), transfer_spec, _wrong_types()])

    assert [o.spec_name for o in outcomes] == ["Deposit", "Transfer", "TransferU32"]
    assert [o.matched for o in outcomes] == [False, True, False]
    assert all(o.reason for o in outcomes if not o.matched)

    hit = first_matching(outcomes)
    assert hit is not None and hit.spec_name == "Transfer"
    assert first_matching([outcomes[0], outcomes[2]]) is None
