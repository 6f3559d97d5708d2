"""Prompt construction and parsing of model answers for AI route estimates.

A model answer goes through two gates. :func:`parse_model_output` turns raw
text into a JSON object and raises :class:`UnparseableModelOutput` when it
cannot; callers fall back to the heuristic on that error. :func:`coerce_route_fields`
then normalises types and raises :class:`~route_engine.errors.InvalidComputation`
when a parsed answer carries negative values, which callers must surface.
"""

from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass
from typing import Any

from route_engine.classification import classify_trip
from route_engine.distance import round_half_away
from route_engine.errors import InvalidComputation, RouteEngineError
from route_engine.models import EstimateMethod, RouteEstimate, TripClassification

SYSTEM_INSTRUCTION = (
    "You are a precise route calculation API. You MUST respond with valid JSON only, "
    "no markdown formatting, no explanations. Just pure JSON."
)

ROUTE_PROMPT_TEMPLATE = """You are a backend pricing engine for a cab platform.
Your task is to compute route and pricing information between two Indian PIN codes.

Input you will receive (from the system, not the user):
fromPin: {from_code}
toPin: {to_code}

Your output MUST follow these rules exactly:

1. Respond with valid JSON only, with no explanations or extra text.

2. The JSON must contain exactly these keys and types:
   - "distance": number (kilometers), use up to 2 decimal places. Example: 12.50
   - "hours": number (total travel time in hours as a decimal).
     Example: 1 hour 30 minutes -> 1.50
     Example: 2 hours 15 minutes -> 2.25
   - "isLocal": boolean (true if it is a local trip, false otherwise).
   - "isOutStation": boolean (true if it is an outstation trip, false otherwise).
   - "approxPrice": string, always formatted with 2 decimal places (no currency symbol).
     Example: "100.00", "275.50".

3. Do not add any other fields.
4. Do not wrap the JSON in markdown (no ```json).
5. If you are uncertain, make a reasonable estimate, but still return all fields with the correct types and formats.

Base pricing logic for reference:
- Local trips (< 50km): INR 10-15/km base rate
- Short outstation (50-150km): INR 12-18/km
- Medium outstation (150-400km): INR 10-15/km
- Long outstation (> 400km): INR 8-12/km
Add reasonable base fare (INR 50-100) and consider time charges (INR 2-3/minute for waiting).

Output format example (structure only):
{{
  "distance": 120.50,
  "hours": 2.25,
  "isLocal": false,
  "isOutStation": true,
  "approxPrice": "750.00"
}}"""

_CODE_FENCE = re.compile(r"```(?:json)?[ \t]*\n?", re.IGNORECASE)


class UnparseableModelOutput(RouteEngineError):
    code = "UNPARSEABLE_MODEL_OUTPUT"


@dataclass(frozen=True)
class ModelRouteFields:
    distance_km: float
    hours: float
    is_local: bool
    is_outstation: bool
    approx_price: float

    def to_estimate(self) -> RouteEstimate:
        category = classify_trip(self.distance_km).category
        return RouteEstimate(
            distance_km=self.distance_km,
            hours=self.hours,
            classification=TripClassification(
                is_local=self.is_local,
                is_outstation=self.is_outstation,
                category=category,
            ),
            approx_price=self.approx_price,
            method=EstimateMethod.AI_MODEL,
        )


def build_route_prompt(from_code: str, to_code: str) -> str:
    return ROUTE_PROMPT_TEMPLATE.format(from_code=from_code, to_code=to_code)


def strip_code_fences(text: str) -> str:
    return _CODE_FENCE.sub("", text).strip()


def parse_model_output(text: str | None) -> dict[str, Any]:
    if not text or not text.strip():
        raise UnparseableModelOutput("model returned an empty answer")
    try:
        payload = json.loads(strip_code_fences(text))
    except json.JSONDecodeError as exc:
        raise UnparseableModelOutput(f"model answer is not JSON: {exc.msg}") from exc
    if not isinstance(payload, dict):
        raise UnparseableModelOutput("model answer is not a JSON object")
    return payload


def coerce_route_fields(payload: dict[str, Any]) -> ModelRouteFields:
    distance = _coerce_number(payload, "distance")
    hours = _coerce_number(payload, "hours")
    approx_price = _coerce_number(payload, "approxPrice")
    if distance < 0 or hours < 0 or approx_price < 0:
        raise InvalidComputation("Invalid calculation result from AI")
    return ModelRouteFields(
        distance_km=round_half_away(distance, 2),
        hours=round_half_away(hours, 2),
        is_local=_coerce_bool(payload.get("isLocal")),
        is_outstation=_coerce_bool(payload.get("isOutStation")),
        approx_price=round_half_away(approx_price, 2),
    )


def _coerce_number(payload: dict[str, Any], key: str) -> float:
    raw = payload.get(key)
    if isinstance(raw, bool) or raw is None:
        raise UnparseableModelOutput(f"{key} is missing or not numeric")
    if isinstance(raw, str):
        raw = raw.strip().replace(",", "")
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        raise UnparseableModelOutput(f"{key} is not numeric") from exc
    if not math.isfinite(value):
        raise UnparseableModelOutput(f"{key} is not finite")
    return value


def _coerce_bool(raw: Any) -> bool:
    if isinstance(raw, str):
        return raw.strip().lower() in {"true", "yes", "1"}
    return bool(raw)
