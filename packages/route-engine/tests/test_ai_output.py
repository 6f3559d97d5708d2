import pytest

from route_engine.ai_output import (
    UnparseableModelOutput,
    build_route_prompt,
    coerce_route_fields,
    parse_model_output,
    strip_code_fences,
)
from route_engine.errors import InvalidComputation
from route_engine.models import EstimateMethod, TripCategory

ANSWER = '{"distance": 120.5, "hours": 2.25, "isLocal": false, "isOutStation": true, "approxPrice": "750.00"}'


def test_prompt_names_both_codes_and_fields() -> None:
    prompt = build_route_prompt("560001", "400001")
    assert "fromPin: 560001" in prompt
    assert "toPin: 400001" in prompt
    for key in ("distance", "hours", "isLocal", "isOutStation", "approxPrice"):
        assert f'"{key}"' in prompt


def test_fenced_answer_parses_like_bare_json() -> None:
    fenced = f"```json\n{ANSWER}\n```"
    assert parse_model_output(fenced) == parse_model_output(ANSWER)


def test_strip_code_fences_without_language_tag() -> None:
    assert strip_code_fences(f"```\n{ANSWER}\n```") == ANSWER


@pytest.mark.parametrize("raw", ["not json", "", "   ", "[1, 2]", None])
def test_unparseable_answers_raise(raw) -> None:
    with pytest.raises(UnparseableModelOutput):
        parse_model_output(raw)


def test_coerce_accepts_string_price() -> None:
    fields = coerce_route_fields(parse_model_output(ANSWER))
    assert fields.distance_km == 120.5
    assert fields.hours == 2.25
    assert fields.approx_price == 750.0
    assert fields.is_local is False
    assert fields.is_outstation is True


def test_coerce_accepts_numeric_price_and_string_booleans() -> None:
    fields = coerce_route_fields(
        {"distance": "12.345", "hours": 0.5, "isLocal": "true", "isOutStation": "false", "approxPrice": 320}
    )
    assert fields.distance_km == 12.35
    assert fields.approx_price == 320.0
    assert fields.is_local is True
    assert fields.is_outstation is False


@pytest.mark.parametrize("key", ["distance", "hours", "approxPrice"])
def test_negative_values_are_invalid_computation(key: str) -> None:
    payload = {"distance": 10, "hours": 1, "isLocal": True, "isOutStation": False, "approxPrice": "100.00"}
    payload[key] = -1
    with pytest.raises(InvalidComputation):
        coerce_route_fields(payload)


def test_missing_numeric_field_is_unparseable() -> None:
    with pytest.raises(UnparseableModelOutput):
        coerce_route_fields({"hours": 1, "approxPrice": "100.00"})


def test_model_fields_become_ai_estimate() -> None:
    estimate = coerce_route_fields(parse_model_output(ANSWER)).to_estimate()
    assert estimate.method is EstimateMethod.AI_MODEL
    assert estimate.category is TripCategory.SHORT_OUTSTATION
