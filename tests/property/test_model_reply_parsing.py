"""
Property-based tests for model reply parsing.
"""

import json

from hypothesis import given, strategies as st

from ai_review_action.llm.generator import load_model_json, parse_findings, sanitize_comment
from ai_review_action.models.review import ReviewFinding


# Control characters that are not JSON whitespace
STRAY_CONTROL = st.sampled_from(
    [chr(c) for c in range(0x00, 0x20) if chr(c) not in '\t\n\r'] + [chr(c) for c in range(0x7f, 0xa0)]
)

nested_digits = st.recursive(
    st.integers(min_value=0, max_value=9),
    lambda children: st.lists(children, max_size=4),
    max_leaves=10,
)


class TestModelReplyProperties:
    """Property tests for reply recovery and finding extraction."""

    @given(text=st.text())
    def test_sanitize_comment_is_identity_on_text(self, text):
        """
        Property: the JSON round-trip keeps comment text unchanged.
        """
        assert sanitize_comment(text) == text
        assert sanitize_comment(sanitize_comment(text)) == text

    @given(value=nested_digits, data=st.data())
    def test_recovery_ignores_stray_control_characters(self, value, data):
        """
        Property: for quote-free JSON, inserting control characters does
        not change the recovered value.
        """
        encoded = json.dumps(value)
        position = data.draw(st.integers(min_value=0, max_value=len(encoded)))
        noise = data.draw(STRAY_CONTROL)

        assert load_model_json(encoded[:position] + noise + encoded[position:]) == value

    @given(records=st.lists(
        st.tuples(st.integers(min_value=1, max_value=10000), st.text(max_size=50)),
        max_size=5,
    ))
    def test_valid_records_are_all_returned(self, records):
        """
        Property: every well-formed record becomes a finding, in order.
        """
        reply = json.dumps({'reviews': [
            {'lineNumber': line, 'reviewComment': comment} for line, comment in records
        ]})

        assert parse_findings(reply) == [
            ReviewFinding(line_number=str(line), review_comment=comment) for line, comment in records
        ]
