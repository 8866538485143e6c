"""Tests for chat document models and turn building."""

from apps.chats.models import Part, Turn, build_turns, chat_title, turn_to_document


class TestChatTitle:
    """Tests for chat_title."""

    def test_long_text_cut_at_40(self):
        """Test long text keeps exactly 40 characters, no ellipsis."""
        assert chat_title("a" * 50) == "a" * 40

    def test_short_text_unchanged(self):
        """Test short text is used as-is."""
        assert chat_title("Hello") == "Hello"

    def test_no_reencoding(self):
        """Test non-ASCII text is cut by characters."""
        text = "สวัสดี" * 10
        assert chat_title(text) == text[:40]


class TestBuildTurns:
    """Tests for build_turns."""

    def test_answer_only(self):
        """Test answer alone yields one model turn."""
        turns = build_turns("hi")

        assert turns == [Turn(role="model", parts=[Part(text="hi")])]

    def test_question_and_answer(self):
        """Test user turn precedes model turn."""
        turns = build_turns("a", question="q")

        assert [t.role for t in turns] == ["user", "model"]
        assert turns[0].parts[0].img is None

    def test_image_on_user_part(self):
        """Test image reference rides on the user turn only."""
        turns = build_turns("a", question="q", img="ref")

        assert turns[0].parts == [Part(text="q", img="ref")]
        assert turns[1].parts == [Part(text="a")]

    def test_image_without_question_dropped(self):
        """Test image without question has nowhere to go."""
        turns = build_turns("a", img="ref")

        assert len(turns) == 1
        assert turns[0].parts[0].img is None

    def test_empty_image_omitted(self):
        """Test empty image reference is not stored."""
        turns = build_turns("a", question="q", img="")
        assert turns[0].parts[0].img is None


class TestTurnToDocument:
    """Tests for turn_to_document."""

    def test_without_image(self):
        """Test absent image is left out of the document."""
        doc = turn_to_document(Turn(role="user", parts=[Part(text="hello")]))
        assert doc == {"role": "user", "parts": [{"text": "hello"}]}

    def test_with_image(self):
        """Test image is stored on the part."""
        doc = turn_to_document(Turn(role="user", parts=[Part(text="q", img="ref")]))
        assert doc == {"role": "user", "parts": [{"text": "q", "img": "ref"}]}
