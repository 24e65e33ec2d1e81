"""Use case for collecting post-incident feedback."""
from __future__ import annotations

from typing import Protocol

from src.core.entities import MAX_RATING, MIN_RATING, NO_COMMENTS, RATING_SKIPPED, FeedbackRecord
from src.core.errors import PersistenceError
from src.core.ports import TextChannel
from src.utils.logger import logger
from src.utils.text_cleaning import parse_whole_number


class FeedbackRepository(Protocol):
    def save_feedback(self, feedback: FeedbackRecord) -> None:
        ...


class CollectFeedbackUseCase:
    """Ask for a 1-5 rating (blank skips) and an optional comment, then persist."""

    def __init__(self, repository: FeedbackRepository) -> None:
        self._repository = repository

    def execute(self, channel: TextChannel, incident_id: str) -> FeedbackRecord:
        if not incident_id:
            raise ValueError("Feedback requires the identifier of a persisted incident.")

        channel.write("\n--- Solicitud de Feedback ---")
        rating = self._ask_rating(channel)
        comments = channel.read_line("¿Tienes algún comentario adicional? ").strip() or NO_COMMENTS

        feedback = FeedbackRecord(
            incident_id=incident_id, satisfaction_rating=rating, comments=comments
        )
        try:
            self._repository.save_feedback(feedback)
        except PersistenceError as error:
            logger.error("Feedback for incident {} was not saved: {}", incident_id, error)
            channel.warn(f"❌ Error al registrar feedback: {error}")
        else:
            channel.write("¡Gracias por su opinión!")
        return feedback

    @staticmethod
    def _ask_rating(channel: TextChannel) -> int:
        prompt = (
            f"¿Cómo fue tu experiencia? ({MIN_RATING}-{MAX_RATING}, donde {MAX_RATING} es excelente, "
            "Enter para omitir): "
        )
        while True:
            answer = channel.read_line(prompt).strip()
            if not answer:
                return RATING_SKIPPED
            rating = parse_whole_number(answer)
            if rating is None:
                channel.warn("⚠️  Entrada inválida. Intente nuevamente.")
                continue

            if MIN_RATING <= rating <= MAX_RATING:
                return rating
            channel.warn(f"⚠️  Por favor, ingrese un valor entre {MIN_RATING} y {MAX_RATING}.")


__all__ = ["CollectFeedbackUseCase", "FeedbackRepository"]
