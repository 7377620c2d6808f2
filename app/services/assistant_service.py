"""
AI suggestion service for the Buyer and Investor dashboards.

Builds the dashboard prompts and forwards them to the chat-completion
endpoint. Errors from the endpoint propagate unchanged so that the HTTP
layer can tell a timeout from any other failure.
"""
import logging
from typing import Mapping, Optional

from app.exceptions.auth_exceptions import ValidationError
from code_modules.prompt_generator import PromptGenerator

logger = logging.getLogger(__name__)


class AssistantService:
    """
    Args:
        llm_client: Object exposing ``inference_simple(user_message, system_prompt)``
            (typically ``ChatCompletionClient``).
        prompt_generator (PromptGenerator, optional): Prompt builder.
    """

    def __init__(self, llm_client, prompt_generator: Optional[PromptGenerator] = None):
        self.llm_client = llm_client
        self.prompt_generator = prompt_generator or PromptGenerator()

    def recommend_suburbs(self, user_id: int, prompt: str, preferences: Optional[Mapping[str, str]] = None) -> str:
        """
        Suggest suburbs for a buyer's request and saved preferences.

        Raises:
            ValidationError: ``prompt`` is blank.
            LLMInferenceError: The endpoint failed (see ``chat_completion_client``).
        """
        if not prompt or not prompt.strip():
            raise ValidationError({"prompt": ["Please enter a prompt for the AI recommendation."]})

        user_prompt = self.prompt_generator.generate_recommendation_prompt(prompt.strip(), preferences)
        logger.info("Requesting suburb recommendation for user %s", user_id)
        return self.llm_client.inference_simple(user_prompt, self.prompt_generator.generate_system_prompt())

    def suggest_strategy(self, user_id: int, investment_goal: str) -> str:
        """
        Suggest an investment strategy for an investor's goals.
        """
        if not investment_goal or not investment_goal.strip():
            raise ValidationError(
                {"investment_goal": ["Please describe your investment goals to get a suggestion."]}
            )

        user_prompt = self.prompt_generator.generate_strategy_prompt(investment_goal.strip())
        logger.info("Requesting strategy suggestion for user %s", user_id)
        return self.llm_client.inference_simple(user_prompt, self.prompt_generator.generate_system_prompt())
