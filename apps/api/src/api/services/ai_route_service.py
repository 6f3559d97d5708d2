"""Model-backed route estimates with a region heuristic behind them.

A request walks REQUESTED -> RESPONDED -> PARSED -> VALIDATED -> SUCCESS, or
leaves that path at FALLBACK_TRIGGERED. Either way it ends in DONE. The model
is asked at most once per request.

Fallback covers an unconfigured client, transport failures, an open circuit
and answers that are not a JSON object with numeric fields. A parsed answer
with negative values is an :class:`InvalidComputation` and is raised.
"""

from __future__ import annotations

import logging
import re
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from route_engine.ai_output import (
    SYSTEM_INSTRUCTION,
    UnparseableModelOutput,
    build_route_prompt,
    coerce_route_fields,
    parse_model_output,
)
from route_engine.errors import InvalidComputation, UpstreamUnavailable, ValidationError
from route_engine.fallback import RegionHeuristicEstimator
from route_engine.models import RouteEstimate

from api.circuit_breaker import CircuitBreaker, CircuitOpenError
from api.clients.completion_client import CompletionClient

logger = logging.getLogger(__name__)

_PINCODE_PATTERN = re.compile(r"^[0-9]{6}$")


class AIEstimateState(str, Enum):
    REQUESTED = "requested"
    RESPONDED = "responded"
    PARSED = "parsed"
    VALIDATED = "validated"
    SUCCESS = "success"
    FALLBACK_TRIGGERED = "fallback_triggered"
    DONE = "done"


@dataclass
class AIEstimateTrace:
    from_code: str
    to_code: str
    states: list[AIEstimateState] = field(default_factory=lambda: [AIEstimateState.REQUESTED])
    fallback_reason: str | None = None

    @property
    def state(self) -> AIEstimateState:
        return self.states[-1]

    @property
    def fell_back(self) -> bool:
        return AIEstimateState.FALLBACK_TRIGGERED in self.states

    def advance(self, state: AIEstimateState) -> None:
        self.states.append(state)


class AIRouteService:
    def __init__(
        self,
        client: CompletionClient | None,
        fallback: RegionHeuristicEstimator | None = None,
        circuit_breaker: CircuitBreaker | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._client = client
        self._fallback = fallback or RegionHeuristicEstimator()
        self._circuit_breaker = circuit_breaker
        self._clock = clock

    async def estimate(self, from_code: str, to_code: str) -> RouteEstimate:
        estimate, _ = await self.estimate_with_trace(from_code, to_code)
        return estimate

    async def estimate_with_trace(self, from_code: str, to_code: str) -> tuple[RouteEstimate, AIEstimateTrace]:
        for code in (from_code, to_code):
            if not _PINCODE_PATTERN.match(code):
                raise ValidationError("Pincode must be exactly 6 digits")

        trace = AIEstimateTrace(from_code=from_code, to_code=to_code)
        client = self._client
        if client is None:
            return self._fall_back(trace, "completion_client_not_configured"), trace

        try:
            text = await self._ask_model(client, build_route_prompt(from_code, to_code))
        except CircuitOpenError:
            return self._fall_back(trace, "circuit_open"), trace
        except UpstreamUnavailable as exc:
            return self._fall_back(trace, exc.code.lower()), trace
        trace.advance(AIEstimateState.RESPONDED)

        try:
            payload = parse_model_output(text)
            trace.advance(AIEstimateState.PARSED)
            fields = coerce_route_fields(payload)
        except UnparseableModelOutput as exc:
            logger.warning("ai_estimate_unparseable", extra={"detail": exc.message})
            return self._fall_back(trace, "unparseable_output"), trace
        except InvalidComputation:
            logger.error(
                "ai_estimate_invalid",
                extra={"from_code": from_code, "to_code": to_code, "states": self._state_names(trace)},
            )
            raise

        trace.advance(AIEstimateState.VALIDATED)
        estimate = fields.to_estimate()
        trace.advance(AIEstimateState.SUCCESS)
        trace.advance(AIEstimateState.DONE)
        logger.info(
            "ai_estimate_success",
            extra={
                "from_code": from_code,
                "to_code": to_code,
                "distance_km": estimate.distance_km,
                "states": self._state_names(trace),
            },
        )
        return estimate, trace

    async def _ask_model(self, client: CompletionClient, prompt: str) -> str:
        if self._circuit_breaker is None:
            return await client.complete(SYSTEM_INSTRUCTION, prompt)
        return await self._circuit_breaker.call(
            lambda: client.complete(SYSTEM_INSTRUCTION, prompt),
            now_seconds=self._clock(),
        )

    def _fall_back(self, trace: AIEstimateTrace, reason: str) -> RouteEstimate:
        trace.fallback_reason = reason
        trace.advance(AIEstimateState.FALLBACK_TRIGGERED)
        estimate = self._fallback.estimate(trace.from_code, trace.to_code)
        trace.advance(AIEstimateState.DONE)
        logger.warning(
            "ai_estimate_fallback",
            extra={
                "from_code": trace.from_code,
                "to_code": trace.to_code,
                "reason": reason,
                "distance_km": estimate.distance_km,
                "states": self._state_names(trace),
            },
        )
        return estimate

    @staticmethod
    def _state_names(trace: AIEstimateTrace) -> str:
        return ">".join(state.value for state in trace.states)
