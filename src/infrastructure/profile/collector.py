"""Guided collection of the reporting user's profile."""
from __future__ import annotations

from src.core.entities import MEDICAL_INFO_NOT_SPECIFIED, Profile
from src.core.ports import TextChannel
from src.utils.logger import logger
from src.utils.text_cleaning import is_valid_phone


class ProfileCollector:
    """Prompt for identity, phone, medical and contact data until valid."""

    def collect(self, channel: TextChannel) -> Profile:
        channel.write("\n=== REGISTRO DE DATOS DE USUARIO ===")

        full_name = self._prompt_non_empty(channel, "Ingrese su nombre completo: ")
        phone_number = self._prompt_phone(channel)

        medical_info = channel.read_line(
            "Ingrese información médica relevante (alergias, etc.) [opcional]: "
        ).strip()
        if not medical_info:
            medical_info = MEDICAL_INFO_NOT_SPECIFIED

        emergency_contact = self._prompt_non_empty(
            channel, "Ingrese nombre y teléfono de contacto de emergencia: "
        )

        channel.write("\n✅ ¡Gracias! Sus datos han sido registrados correctamente.")
        channel.write("=" * 42)
        logger.info("Profile collected for {}", full_name)
        return Profile(
            full_name=full_name,
            phone_number=phone_number,
            medical_info=medical_info,
            emergency_contact=emergency_contact,
        )

    @staticmethod
    def _prompt_non_empty(channel: TextChannel, prompt: str) -> str:
        while True:
            answer = channel.read_line(prompt).strip()
            if answer:
                return answer
            channel.warn("⚠️  Error: Este campo no puede estar vacío. Intente nuevamente.")

    @staticmethod
    def _prompt_phone(channel: TextChannel) -> str:
        while True:
            answer = channel.read_line("Ingrese su número de teléfono (mínimo 9 dígitos): ").strip()
            if is_valid_phone(answer):
                return answer
            logger.debug("Rejected phone number input '{}'", answer)
            channel.warn("⚠️  Error: El teléfono debe contener al menos 9 dígitos. Intente nuevamente.")


__all__ = ["ProfileCollector"]
