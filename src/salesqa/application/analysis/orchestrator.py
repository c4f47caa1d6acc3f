"""High-level orchestrator for the question answering pipeline."""

from __future__ import annotations

import logging
from typing import Sequence

from salesqa.application.analysis.errors import ExecutionError, PlanGenerationError
from salesqa.application.analysis.schemas import ResponseBundle
from salesqa.domain.value_objects import Query, intent_to_dict
from salesqa.shared.logging import log_event

__all__ = ["AnalysisOrchestrator", "NOT_UNDERSTOOD_MESSAGE", "EXECUTION_FAILED_MESSAGE"]

LOGGER = logging.getLogger(__name__)

NOT_UNDERSTOOD_MESSAGE = (
    "I'm having trouble understanding your question. "
    "Could you rephrase it or provide more specific details?"
)
EXECUTION_FAILED_MESSAGE = (
    "I encountered an error when trying to analyze the data: {message}. "
    "Could you try asking in a different way?"
)


class AnalysisOrchestrator:
    """classify -> plan -> execute -> compose, one request at a time."""

    def __init__(
        self,
        intent_classifier,
        query_planner,
        data_retriever,
        response_composer,
    ) -> None:
        self._intent_classifier = intent_classifier
        self._query_planner = query_planner
        self._data_retriever = data_retriever
        self._response_composer = response_composer

    def answer_question(self, text: str, history: Sequence[dict] | None = None) -> ResponseBundle:
        if history:
            log_event(LOGGER, "debug", message="Conversation history ignored", history_length=len(history))

        intent = self._intent_classifier.classify(Query(text))
        log_event(LOGGER, "info", message="Classified question", intent=intent_to_dict(intent))

        try:
            plan = self._query_planner.create_plan(intent)
        except PlanGenerationError as exc:
            log_event(LOGGER, "warning", message="Plan generation failed", intent_kind=intent.kind, error=str(exc))
            return ResponseBundle(narrative=NOT_UNDERSTOOD_MESSAGE, error="plan_generation")
        log_event(LOGGER, "debug", message="Generated plan", intent_kind=intent.kind, sql=plan.sql)

        try:
            frame = self._data_retriever.execute(plan)
        except ExecutionError as exc:
            log_event(LOGGER, "error", message="Query execution failed", intent_kind=intent.kind, error=exc.message)
            return ResponseBundle(
                narrative=EXECUTION_FAILED_MESSAGE.format(message=exc.message),
                sql=plan.sql,
                error="execution",
            )
        log_event(LOGGER, "info", message="Retrieved rows", intent_kind=intent.kind, rows=len(frame))

        bundle = self._response_composer.compose(intent, frame)
        return bundle.model_copy(update={"sql": plan.sql})
