import json

import httpx
import pytest

from code_modules.chat_completion_client import (
    ChatCompletionClient,
    LLMInferenceError,
    LLMTimeoutError,
    UnexpectedShapeError,
    create_llm_client,
)
from config_loader import LLMConfig


# -----------------------------
# Fixtures
# -----------------------------

@pytest.fixture
def llm_config():
    return LLMConfig(
        endpoint="https://llm.example/v1/chat/completions",
        api_key="secret-key",
        model="test-model",
        temperature=0.2,
        max_tokens=256,
        timeout_seconds=15,
    )


def make_client(llm_config, handler):
    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    return ChatCompletionClient(llm_config, http_client=http_client)


def reply(text):
    return httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": text}}]})


# -----------------------------
# Request shape
# -----------------------------

def test_request_body_and_headers(llm_config):
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("Authorization")
        seen["body"] = json.loads(request.content)
        return reply("Hello there")

    client = make_client(llm_config, handler)
    result = client.inference_simple("Hi", system_prompt="Be brief")

    assert result == "Hello there"
    assert seen["url"] == "https://llm.example/v1/chat/completions"
    assert seen["auth"] == "Bearer secret-key"
    assert seen["body"] == {
        "model": "test-model",
        "messages": [
            {"role": "system", "content": "Be brief"},
            {"role": "user", "content": "Hi"},
        ],
        "temperature": 0.2,
        "max_tokens": 256,
    }


def test_blank_messages_are_skipped(llm_config):
    seen = {}

    def handler(request):
        seen["messages"] = json.loads(request.content)["messages"]
        return reply("ok")

    client = make_client(llm_config, handler)
    client.complete([
        {"role": "USER", "message": "Hi"},
        {"role": "ASSISTANT", "message": "  "},
        {"role": "unknown", "message": "again"},
    ])

    assert seen["messages"] == [
        {"role": "user", "content": "Hi"},
        {"role": "user", "content": "again"},
    ]


def test_empty_history_raises(llm_config):
    client = make_client(llm_config, lambda request: reply("unused"))

    with pytest.raises(ValueError):
        client.complete([{"role": "USER", "message": " "}])


def test_no_authorization_header_without_key(llm_config):
    llm_config.api_key = ""
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("Authorization")
        return reply("ok")

    make_client(llm_config, handler).inference_simple("Hi")

    assert seen["auth"] is None


# -----------------------------
# Failures
# -----------------------------

def test_timeout_raises_timeout_error(llm_config):
    def handler(request):
        raise httpx.ReadTimeout("too slow", request=request)

    client = make_client(llm_config, handler)

    with pytest.raises(LLMTimeoutError) as exc:
        client.inference_simple("Hi")

    assert "timed out" in str(exc.value)
    assert isinstance(exc.value.__cause__, httpx.TimeoutException)


def test_network_failure_is_not_a_timeout(llm_config):
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    client = make_client(llm_config, handler)

    with pytest.raises(LLMInferenceError) as exc:
        client.inference_simple("Hi")

    assert not isinstance(exc.value, LLMTimeoutError)


def test_non_2xx_status(llm_config):
    client = make_client(llm_config, lambda request: httpx.Response(500, json={"error": "boom"}))

    with pytest.raises(LLMInferenceError) as exc:
        client.inference_simple("Hi")

    assert "HTTP 500" in str(exc.value)


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"choices": []},
        {"choices": [{"message": {}}]},
        {"choices": [{"message": {"content": None}}]},
        ["not", "a", "dict"],
    ],
)
def test_malformed_body(llm_config, body):
    client = make_client(llm_config, lambda request: httpx.Response(200, json=body))

    with pytest.raises(UnexpectedShapeError):
        client.inference_simple("Hi")


def test_non_json_body(llm_config):
    client = make_client(llm_config, lambda request: httpx.Response(200, text="<html>"))

    with pytest.raises(UnexpectedShapeError):
        client.inference_simple("Hi")


def test_create_llm_client(llm_config):
    client = create_llm_client(llm_config)

    assert isinstance(client, ChatCompletionClient)
    assert client.config is llm_config
