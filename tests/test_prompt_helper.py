"""
Tests for system prompt assembly.
"""

from prompt_helper import FALLBACK_SENTENCE, SECTION_CHAR_LIMIT, build_system_prompt
from site_cache import Selection

SHIPPING_URL = "https://shop.test/policies/shipping-policy"


class TestBuildSystemPrompt:
    """Test build_system_prompt()."""

    def test_preamble_and_context(self):
        """Persona first, business context verbatim under its heading."""
        out = build_system_prompt("We sell tea.\nOpen 9-5.", None, assistant="Ana", business="Tea Shop")
        assert out.startswith("You are Ana, the customer support assistant for Tea Shop.")
        assert "Answer ONLY using the information supplied below" in out
        assert "concise" in out
        assert "--- General business context ---\nWe sell tea.\nOpen 9-5." in out

    def test_empty_context(self):
        out = build_system_prompt("", None)
        assert "--- General business context ---\n" in out
        out_none = build_system_prompt(None, None)
        assert out_none == out

    def test_no_selection_uses_fallback(self):
        out = build_system_prompt("ctx", None)
        assert FALLBACK_SENTENCE in out
        assert "Website section" not in out

    def test_empty_selection_text_uses_fallback(self):
        """A topic that was never fetched behaves like no selection."""
        out = build_system_prompt("ctx", Selection("shipping", "", SHIPPING_URL))
        assert FALLBACK_SENTENCE in out
        assert SHIPPING_URL not in out

    def test_fallback_sentence_exact(self):
        assert FALLBACK_SENTENCE == "I'm sorry — the website does not provide this information."

    def test_selection_section(self):
        """Label, source URL, text and citation instruction are present."""
        out = build_system_prompt("ctx", Selection("shipping", "Ships in 3 days.", SHIPPING_URL))
        assert "--- Website section: Shipping policy ---" in out
        assert f"Source: {SHIPPING_URL}" in out
        assert "Ships in 3 days." in out
        assert f"end it with the source link: {SHIPPING_URL}" in out
        assert FALLBACK_SENTENCE not in out

    def test_selection_text_truncated(self):
        """Hard cap at 6000 characters, no word-boundary trimming."""
        text = "ab" * 5000
        out = build_system_prompt("", Selection("terms", text, "https://shop.test/t"))
        assert SECTION_CHAR_LIMIT == 6000
        assert text[:6000] in out
        assert text[:6001] not in out

    def test_context_before_section(self):
        out = build_system_prompt("BASE", Selection("refund", "RET", "https://shop.test/r"))
        assert out.index("BASE") < out.index("RET") < out.rindex("https://shop.test/r")
