"""
Client-side transcript for a single chat session.

The Conversation class holds the ordered list of turns shown in the chat
window. Turns are only ever appended, so the list is always in chronological
order. Nothing is persisted; the transcript lives as long as the UI session.
"""

from typing import Iterator, List, Optional

from voicebot.models.chat_schemas import ConversationTurn


class Conversation:
    """
    Append-only list of user and bot turns.

    An optional greeting is added as the first bot turn when the
    conversation is created.
    """

    def __init__(self, greeting: Optional[str] = None):
        self._turns: List[ConversationTurn] = []
        if greeting:
            self.add_turn("bot", greeting)

    def add_turn(self, speaker: str, text: str) -> ConversationTurn:
        """
        Append a turn to the transcript.

        Args:
            speaker: Either "user" or "bot"
            text: The message text

        Returns:
            The newly appended turn
        """
        turn = ConversationTurn(speaker=speaker, text=text)
        self._turns.append(turn)
        return turn

    @property
    def turns(self) -> List[ConversationTurn]:
        """A copy of the turns, oldest first."""
        return list(self._turns)

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self) -> Iterator[ConversationTurn]:
        return iter(list(self._turns))
