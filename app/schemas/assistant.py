"""
Schemas for the AI suggestion endpoints.
"""
from typing import Dict, Optional

from pydantic import BaseModel


class RecommendationRequest(BaseModel):
    """
    Buyer suburb recommendation request.
    """
    prompt: str
    preferences: Optional[Dict[str, Optional[str]]] = None


class StrategyRequest(BaseModel):
    """
    Investor strategy suggestion request.
    """
    investment_goal: str
