from specmatch.core.models import Column
from specmatch.core.values import ScVal, ValType, sc_address, sc_bool, sc_bytes, sc_map, sc_symbol, sc_u32, sc_vec


def test_column_aligns_dynamic_columns() -> None:
    col = Column()
    col.append_projection(spec_name="Transfer", contract_id="C1", values={"to": sc_address("G1")})
    col.append_projection(
        spec_name="Mint",
        contract_id="C2",
        values={"amount": ScVal(ValType.I128, -(2**100)), "to": sc_address("G2")},
    )

    assert col.size() == 2
    assert col.dyn["to"] == ["G1", "G2"]
    assert col.dyn["amount"] == [None, str(-(2**100))]


def test_to_arrow_table_keeps_big_ints_exact() -> None:
    col = Column()
    big = 2**255 - 1
    col.append_projection(spec_name="E", contract_id=None, values={"v": ScVal(ValType.U256, big)})

    table = col.to_arrow_table()

    assert table.column_names == ["contract_id", "event", "v"]
    assert table.to_pydict() == {"contract_id": [None], "event": ["E"], "v": [str(big)]}


def test_base_column_collision_is_prefixed() -> None:
    col = Column()
    col.append_projection(spec_name="E", contract_id="C", values={"event": sc_symbol("x")})
    assert col.to_arrow_table().column_names == ["contract_id", "event", "param_event"]


def test_rendering_of_containers() -> None:
    col = Column()
    col.append_projection(
        spec_name="E",
        contract_id="C",
        values={
            "v": sc_vec([sc_u32(1), sc_bool(True)]),
            "m": sc_map([(sc_symbol("k"), sc_bytes(b"\x0a"))]),
            "none": sc_vec(None),
        },
    )
    assert col.dyn["v"] == ["[1, true]"]
    assert col.dyn["m"] == ["{k: 0a}"]
    assert col.dyn["none"] == ["null"]
