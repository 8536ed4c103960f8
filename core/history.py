"""
core/history.py - Consultation Session History
==============================================

Each consultation session owns an append-only list of messages, starting
with the seed greeting. Only the orchestrator appends to it.
"""

from typing import Optional

from config import SEED_GREETING
from core.models import Message, Role

SEED_MESSAGE_ID = "0"


class ConsultationSession:
    """
    Ordered, append-only message log for one user session.

    Usage:
        session = ConsultationSession()
        message = await service.submit_query("I can't sleep", session)
        session.messages[-1] is message  # True
    """

    def __init__(self, greeting: Optional[str] = SEED_GREETING):
        self._messages: list[Message] = []
        if greeting:
            self._messages.append(
                Message(role=Role.ASSISTANT, text=greeting, id=SEED_MESSAGE_ID)
            )

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def append(self, message: Message) -> None:
        self._messages.append(message)

    def remote_history(self, exclude_last: int = 0) -> list[dict]:
        """
        Format prior messages for the remote model.

        The seed greeting is never included.

        Args:
            exclude_last: Number of trailing messages to leave out (the
                current turn's user message is sent separately)

        Returns:
            list[dict]: [{"role": "user"|"assistant", "content": str}, ...]
        """
        end = len(self._messages) - exclude_last
        return [
            {"role": m.role.value, "content": m.text}
            for m in self._messages[:end]
            if m.id != SEED_MESSAGE_ID
        ]
