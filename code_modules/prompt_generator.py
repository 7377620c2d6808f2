"""
Prompt generation utilities for the RealEstateConnect AI suggestions.

This module is responsible for constructing all LLM prompts used by the system,
including:
- The shared system prompt
- Buyer suburb recommendation prompts
- Investor strategy suggestion prompts

Prompts are loaded from template files in the ``prompts/`` directory and
populated with the user's request.
"""
from pathlib import Path
from typing import Mapping, Optional

PROMPTS_DIR = Path(__file__).resolve().parent.parent / "prompts"

INVESTMENT_STRATEGIES = (
    "Low Risk + Discounted",
    "High Cashflow Rental",
    "Renovate & Rent/Sell",
    "Buy & Hold (Long-Term Growth)",
    "Development",
)


class PromptGenerator:
    """
    Generates the prompts sent to the chat-completion endpoint.

    Args:
        prompts_dir (Path, optional): Directory holding the templates.
    """

    def __init__(self, prompts_dir: Optional[Path] = None):
        self.prompts_dir = Path(prompts_dir) if prompts_dir else PROMPTS_DIR

    def _template(self, name: str) -> str:
        return (self.prompts_dir / name).read_text(encoding="utf-8").strip()

    def generate_system_prompt(self) -> str:
        """
        Load and return the system prompt shared by every assistant call.
        """
        return self._template("assistant_system.txt")

    def generate_recommendation_prompt(self, user_request: str, preferences: Optional[Mapping[str, str]] = None) -> str:
        """
        Generate the buyer suburb recommendation prompt.

        Missing or blank preferences are rendered as ``N/A``.

        Args:
            user_request (str): What the buyer is looking for.
            preferences (Mapping, optional): Keys ``location``, ``propertyType``,
                ``budget`` and ``lifestyle``.

        Returns:
            str: A formatted prompt ready for inference.
        """
        preferences = preferences or {}

        def pick(key):
            value = preferences.get(key)
            return value if value else "N/A"

        return self._template("buyer_recommendation.txt").format(
            location=pick("location"),
            property_type=pick("propertyType"),
            budget=pick("budget"),
            lifestyle=pick("lifestyle"),
            user_request=user_request,
        )

    def generate_strategy_prompt(self, investment_goal: str) -> str:
        """
        Generate the investor strategy prompt listing every known strategy.
        """
        return self._template("investor_strategy.txt").format(
            investment_goal=investment_goal,
            strategies=", ".join(INVESTMENT_STRATEGIES),
        )
