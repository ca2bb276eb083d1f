import unittest

from pydantic import ValidationError

from voicebot.models.conversation import Conversation


class TestConversation(unittest.TestCase):

    def setUp(self):
        self.conversation = Conversation(greeting="Hello! How can I help you today?")

    def test_starts_with_greeting(self):
        self.assertEqual(len(self.conversation), 1)
        first = self.conversation.turns[0]
        self.assertEqual(first.speaker, "bot")
        self.assertEqual(first.text, "Hello! How can I help you today?")

    def test_without_greeting_is_empty(self):
        self.assertEqual(len(Conversation()), 0)

    def test_turns_appended_in_order(self):
        self.conversation.add_turn("user", "book a flight")
        self.conversation.add_turn("bot", "Where to?")
        self.conversation.add_turn("user", "Lisbon")

        self.assertEqual(
            [(t.speaker, t.text) for t in self.conversation],
            [
                ("bot", "Hello! How can I help you today?"),
                ("user", "book a flight"),
                ("bot", "Where to?"),
                ("user", "Lisbon"),
            ],
        )
        self.assertEqual(self.conversation.turns[-1].text, "Lisbon")

    def test_turns_returns_copy(self):
        turns = self.conversation.turns
        turns.clear()
        self.assertEqual(len(self.conversation), 1)

    def test_unknown_speaker_rejected(self):
        with self.assertRaises(ValidationError):
            self.conversation.add_turn("system", "nope")
        self.assertEqual(len(self.conversation), 1)


if __name__ == "__main__":
    unittest.main()
