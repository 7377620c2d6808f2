"""
Chat-completion client used by the AI suggestion endpoints.

Forwards a structured prompt to an OpenAI-compatible chat-completion endpoint
and returns the generated text.

Request body:
    {"model": ..., "messages": [{"role": ..., "content": ...}],
     "temperature": ..., "max_tokens": ...}

Expected reply:
    {"choices": [{"message": {"content": "<text>"}}]}

Every failure is raised, never swallowed:
- the call exceeded the timeout         -> LLMTimeoutError
- transport failure or a non-2xx status -> LLMInferenceError
- a body without the expected fields    -> UnexpectedShapeError

Dependencies:
- httpx
"""
import logging
from typing import Dict, List, Optional

import httpx

from config_loader import LLMConfig
from code_modules.llm_response_extractor import extract_reply_text

logger = logging.getLogger(__name__)


class LLMInferenceError(RuntimeError):
    """Raised when LLM inference fails."""


class LLMTimeoutError(LLMInferenceError):
    """Raised when the endpoint does not answer within the timeout."""


class UnexpectedShapeError(LLMInferenceError):
    """Raised when the reply is missing ``choices[0].message.content``."""


class ChatCompletionClient:
    """
    Thin synchronous client around a chat-completion endpoint.

    Args:
        config (LLMConfig): Endpoint, credentials and sampling settings.
        http_client (httpx.Client, optional): Pre-built client, mainly for
            tests with ``httpx.MockTransport``.
    """

    def __init__(self, config: LLMConfig, http_client: Optional[httpx.Client] = None):
        self.config = config
        self.http_client = http_client or httpx.Client(timeout=config.timeout_seconds)

    @staticmethod
    def _convert_message(role: str, message: str) -> Dict[str, str]:
        """
        Convert a (role, message) pair to the wire format.

        Unknown roles are sent as ``user``.
        """
        role_mapping = {
            "USER": "user",
            "ASSISTANT": "assistant",
            "SYSTEM": "system",
        }
        return {"role": role_mapping.get(role.upper(), "user"), "content": message}

    def _build_payload(self, messages: List[Dict[str, str]]) -> Dict[str, object]:
        return {
            "model": self.config.model,
            "messages": messages,
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_tokens,
        }

    def complete(self, chat_history: List[Dict[str, str]]) -> str:
        """
        Generate a reply from a chat history.

        Args:
            chat_history (List[Dict]): Format: [{"role": "USER", "message": "Hello"}].
                Blank messages are skipped.

        Returns:
            str: The generated reply text.
        """
        messages = [
            self._convert_message(msg.get("role", "USER"), msg.get("message", ""))
            for msg in chat_history
            if msg.get("message", "").strip()
        ]
        if not messages:
            raise ValueError("No valid messages to send")

        headers = {"Content-Type": "application/json"}
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"

        try:
            response = self.http_client.post(
                self.config.endpoint,
                json=self._build_payload(messages),
                headers=headers,
                timeout=self.config.timeout_seconds,
            )
        except httpx.TimeoutException as e:
            logger.error("Chat completion timed out after %ss", self.config.timeout_seconds)
            raise LLMTimeoutError("The AI request timed out. Please try again.") from e
        except httpx.HTTPError as e:
            logger.error(f"Chat completion request failed: {str(e)}")
            raise LLMInferenceError("Failed to reach the AI service.") from e

        if not response.is_success:
            logger.error("Chat completion returned HTTP %d", response.status_code)
            raise LLMInferenceError(f"The AI service returned an error (HTTP {response.status_code}).")

        try:
            body = response.json()
        except ValueError as e:
            raise UnexpectedShapeError("The AI service returned an unexpected response.") from e

        text = extract_reply_text(body)
        if text is None:
            logger.error("Chat completion response structure unexpected")
            raise UnexpectedShapeError("The AI service returned an unexpected response.")

        logger.info(f"LLM inference successful, response length: {len(text)}")
        return text

    def inference_simple(self, user_message: str, system_prompt: Optional[str] = None) -> str:
        """
        Single-turn inference with an optional system prompt.
        """
        chat_history = []
        if system_prompt:
            chat_history.append({"role": "SYSTEM", "message": system_prompt})
        chat_history.append({"role": "USER", "message": user_message})
        return self.complete(chat_history)


def create_llm_client(config: LLMConfig) -> ChatCompletionClient:
    """
    Factory function to create and return an LLM client.
    """
    return ChatCompletionClient(config)
