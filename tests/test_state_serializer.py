from __future__ import annotations

import math

import orjson
import pytest

from tws_bridge.core.dto.io.market import INT64_MAX, INT64_MIN, InstrumentState
from tws_bridge.infra.messaging.serializers.state_serializer import (
    STATE_KEY_SCHEMA,
    STATE_SCHEMA_VERSION,
    StateSerializer,
    build_state_document,
    serialize_state,
)
from tests.factory_builders import build_state


def test_full_state_contains_instrument_and_prices() -> None:
    json_text = serialize_state(build_state())

    assert json_text
    assert '"instrument":"AAPL"' in json_text
    assert '"bid":171.55' in json_text
    assert '"ask":171.57' in json_text
    assert '"last":171.56' in json_text


def test_full_state_exact_document() -> None:
    json_text = serialize_state(build_state())

    assert json_text == (
        '{"instrument":"AAPL","conId":265598,"tickerId":1001,"timestamp":1700000000500,'
        '"price":{"bid":171.55,"ask":171.57,"last":171.56},'
        '"size":{"bid":100,"ask":200,"last":50},'
        '"timestamps":{"quote":1700000000000,"trade":1700000000500},'
        '"hasQuote":true,"hasTrade":true,"exchange":"NASDAQ",'
        '"tickAttrib":{"pastLimit":false}}'
    )


def test_default_state_serializes_with_symbol() -> None:
    json_text = serialize_state(InstrumentState(symbol="TEST"))

    assert json_text
    assert '"instrument":"TEST"' in json_text

    document = orjson.loads(json_text)
    assert document["price"] == {"bid": 0.0, "ask": 0.0, "last": 0.0}
    assert document["size"] == {"bid": 0, "ask": 0, "last": 0}
    assert document["timestamp"] == 0
    assert document["exchange"] == ""
    assert document["hasQuote"] is False
    assert document["hasTrade"] is False


def test_empty_symbol_does_not_raise() -> None:
    json_text = serialize_state(InstrumentState(symbol=""))

    assert '"instrument":""' in json_text


def test_serialization_is_idempotent() -> None:
    state = build_state()

    assert serialize_state(state) == serialize_state(state)


def test_integer_fields_render_without_decimal_point() -> None:
    json_text = serialize_state(build_state())

    assert '"size":{"bid":100,"ask":200,"last":50}' in json_text
    assert '"conId":265598' in json_text


def test_flags_false_do_not_suppress_price_fields() -> None:
    state = build_state(has_quote=False, has_trade=False, past_limit=True)

    document = orjson.loads(serialize_state(state))

    assert document["price"]["bid"] == 171.55
    assert document["size"]["last"] == 50
    assert document["timestamps"]["trade"] == 1700000000500
    assert document["tickAttrib"]["pastLimit"] is True


def test_timestamp_uses_most_recent_of_quote_and_trade() -> None:
    state = build_state(quote_timestamp=1700000009000, trade_timestamp=1700000000500)

    document = orjson.loads(serialize_state(state))

    assert document["timestamp"] == 1700000009000


def test_non_finite_prices_emit_null() -> None:
    state = build_state(bid_price=math.nan, ask_price=math.inf)

    document = orjson.loads(serialize_state(state))

    assert document["price"]["bid"] is None
    assert document["price"]["ask"] is None
    assert document["price"]["last"] == 171.56


def test_shortest_round_trip_float_formatting() -> None:
    state = build_state(bid_price=0.1 + 0.2, last_price=100.0)

    json_text = serialize_state(state)

    assert '"bid":0.30000000000000004' in json_text
    assert '"last":100.0' in json_text


def test_non_ascii_symbol_is_preserved() -> None:
    json_text = serialize_state(InstrumentState(symbol="삼성전자"))

    assert orjson.loads(json_text)["instrument"] == "삼성전자"


def test_schema_table_key_order() -> None:
    paths = [".".join(path) for path, _ in STATE_KEY_SCHEMA]

    assert STATE_SCHEMA_VERSION == 1
    assert paths == [
        "instrument",
        "conId",
        "tickerId",
        "timestamp",
        "price.bid",
        "price.ask",
        "price.last",
        "size.bid",
        "size.ask",
        "size.last",
        "timestamps.quote",
        "timestamps.trade",
        "hasQuote",
        "hasTrade",
        "exchange",
        "tickAttrib.pastLimit",
    ]


def test_schema_covers_every_state_field() -> None:
    state = build_state()
    document = build_state_document(state)

    assert document["instrument"] == state.symbol
    assert document["conId"] == state.con_id
    assert document["tickerId"] == state.ticker_id
    assert document["price"] == {
        "bid": state.bid_price,
        "ask": state.ask_price,
        "last": state.last_price,
    }
    assert document["size"] == {
        "bid": state.bid_size,
        "ask": state.ask_size,
        "last": state.last_size,
    }
    assert document["timestamps"] == {
        "quote": state.quote_timestamp,
        "trade": state.trade_timestamp,
    }
    assert document["hasQuote"] is state.has_quote
    assert document["hasTrade"] is state.has_trade
    assert document["exchange"] == state.exchange
    assert document["tickAttrib"] == {"pastLimit": state.past_limit}
    assert "time" not in document


def test_serializer_iso_time_option() -> None:
    serializer = StateSerializer(include_iso_time=True)

    json_text = serializer(build_state())

    assert json_text.endswith('"time":"2023-11-14T22:13:20.500Z"}')


def test_serializer_iso_time_out_of_range_is_null() -> None:
    serializer = StateSerializer(include_iso_time=True)
    state = build_state(quote_timestamp=10**17, trade_timestamp=0)

    document = orjson.loads(serializer(state))

    assert document["time"] is None


def test_serializer_to_bytes_matches_text() -> None:
    serializer = StateSerializer(include_iso_time=False)
    state = build_state(symbol="SPY")

    assert serializer.to_bytes(state) == serializer(state).encode("utf-8")
    assert serializer(state) == serialize_state(state)


def test_serializer_does_not_mutate_state() -> None:
    state = build_state()
    before = state.model_dump()

    serialize_state(state)

    assert state.model_dump() == before


@pytest.mark.parametrize("bound", [INT64_MIN, INT64_MAX])
def test_int64_bounds_serialize_as_json_object(bound: int) -> None:
    state = build_state(
        con_id=bound,
        ticker_id=bound,
        bid_size=bound,
        ask_size=bound,
        last_size=bound,
        quote_timestamp=bound,
        trade_timestamp=bound,
    )

    json_text = serialize_state(state)
    document = orjson.loads(json_text)

    assert isinstance(document, dict)
    assert '"instrument":"AAPL"' in json_text
    assert document["conId"] == bound
    assert document["size"] == {"bid": bound, "ask": bound, "last": bound}
    assert document["timestamp"] == bound


@pytest.mark.parametrize(
    ("symbol", "exchange"),
    [
        ("BRK B", "NYSE"),
        ('A"B\\C', "IEX\n"),
        ("\u0000\u001f", " "),
        ("😀", "東証"),
    ],
)
def test_unusual_text_serializes_as_json_object(symbol: str, exchange: str) -> None:
    document = orjson.loads(serialize_state(InstrumentState(symbol=symbol, exchange=exchange)))

    assert isinstance(document, dict)
    assert document["instrument"] == symbol
    assert document["exchange"] == exchange
