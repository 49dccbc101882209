"""
Unit tests for the Anthropic Messages API client.
"""

import pytest
import requests
from unittest.mock import Mock

from ai_review_action.llm.client import AnthropicClient, LLMError


def make_response(ok=True, status_code=200, payload=None, text=''):
    response = Mock()
    response.ok = ok
    response.status_code = status_code
    response.text = text
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


def make_client(response=None, error=None, base_url='https://api.anthropic.com'):
    session = Mock()
    if error is not None:
        session.post.side_effect = error
    else:
        session.post.return_value = response
    return AnthropicClient('secret', base_url=base_url, timeout=5, session=session), session


MESSAGES = [{'role': 'user', 'content': 'hi'}]


class TestAnthropicClient:
    """Unit tests for AnthropicClient."""

    def test_requires_api_key(self):
        with pytest.raises(ValueError):
            AnthropicClient('')

    def test_complete_sends_messages_request(self):
        response = make_response(payload={'content': [{'type': 'text', 'text': '{"reviews": []}'}]})
        client, session = make_client(response)

        text = client.complete('claude-test', MESSAGES, temperature=0.2, max_tokens=700)

        assert text == '{"reviews": []}'
        args, kwargs = session.post.call_args
        assert args[0] == 'https://api.anthropic.com/v1/messages'
        assert kwargs['json'] == {
            'model': 'claude-test',
            'messages': MESSAGES,
            'temperature': 0.2,
            'max_tokens': 700,
        }
        assert kwargs['headers']['x-api-key'] == 'secret'
        assert kwargs['headers']['anthropic-version'] == '2023-06-01'
        assert kwargs['timeout'] == 5

    def test_base_url_with_version_suffix(self):
        response = make_response(payload={'content': [{'type': 'text', 'text': 'ok'}]})
        client, session = make_client(response, base_url='https://proxy.local/v1/')

        client.complete('m', MESSAGES, 0.2, 10)

        assert session.post.call_args[0][0] == 'https://proxy.local/v1/messages'

    def test_non_text_first_block_returns_empty(self):
        response = make_response(payload={'content': [{'type': 'tool_use', 'id': 'x'}]})
        client, _ = make_client(response)

        assert client.complete('m', MESSAGES, 0.2, 10) == ''

    def test_http_error(self):
        client, _ = make_client(make_response(ok=False, status_code=529, text='overloaded'))

        with pytest.raises(LLMError) as exc_info:
            client.complete('m', MESSAGES, 0.2, 10)

        assert exc_info.value.status_code == 529

    def test_transport_error(self):
        client, _ = make_client(error=requests.ConnectionError('down'))

        with pytest.raises(LLMError):
            client.complete('m', MESSAGES, 0.2, 10)

    @pytest.mark.parametrize("payload", [
        ValueError('bad json'),
        {'content': []},
        {'content': 'text'},
        {'error': 'nope'},
    ])
    def test_malformed_payload(self, payload):
        client, _ = make_client(make_response(payload=payload))

        with pytest.raises(LLMError):
            client.complete('m', MESSAGES, 0.2, 10)
