"""
AI suggestion API routes.

Server-side proxy to the chat-completion endpoint for the Buyer and
Investor dashboards. Timeouts answer 504, other upstream failures 502
(see the exception handlers in ``app.main``).
"""
from fastapi import APIRouter, Depends, Request

from app.api.dependencies import require_identity
from app.schemas.assistant import RecommendationRequest, StrategyRequest
from app.services.assistant_service import AssistantService
from app.services.session_service import Identity

router = APIRouter()


def get_assistant_service(request: Request) -> AssistantService:
    return request.app.state.assistant_service


@router.post("/recommendation")
def recommendation(
    body: RecommendationRequest,
    identity: Identity = Depends(require_identity),
    service: AssistantService = Depends(get_assistant_service),
):
    """
    Suggest suburbs for the buyer's request and preferences.
    """
    text = service.recommend_suburbs(identity.user.id, body.prompt, body.preferences)
    return {"message": "AI recommendation generated!", "response": text}


@router.post("/strategy")
def strategy(
    body: StrategyRequest,
    identity: Identity = Depends(require_identity),
    service: AssistantService = Depends(get_assistant_service),
):
    """
    Suggest an investment strategy for the investor's goals.
    """
    text = service.suggest_strategy(identity.user.id, body.investment_goal)
    return {"message": "Investment strategy suggested!", "response": text}
