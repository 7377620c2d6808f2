from code_modules.chat_completion_client import (
    LLMInferenceError,
    LLMTimeoutError,
    UnexpectedShapeError,
)


def test_recommendation_requires_session(client, llm_client):
    response = client.post("/ai/recommendation", json={"prompt": "3 bedrooms"})

    assert response.status_code == 401
    llm_client.inference_simple.assert_not_called()


def test_recommendation_success(client, alice, llm_client):
    response = client.post(
        "/ai/recommendation",
        json={"prompt": "Family home near schools", "preferences": {"location": "Downtown"}},
    )

    assert response.status_code == 200
    assert response.json() == {
        "message": "AI recommendation generated!",
        "response": "Try Maplewood and Greenview.",
    }
    user_prompt, system_prompt = llm_client.inference_simple.call_args.args
    assert "Family home near schools" in user_prompt
    assert "Location: Downtown" in user_prompt
    assert "Budget: N/A" in user_prompt
    assert system_prompt


def test_recommendation_blank_prompt(client, alice, llm_client):
    response = client.post("/ai/recommendation", json={"prompt": "   "})

    assert response.status_code == 422
    assert response.json()["errors"] == {"prompt": ["Please enter a prompt for the AI recommendation."]}
    llm_client.inference_simple.assert_not_called()


def test_strategy_success(client, alice, llm_client):
    llm_client.inference_simple.return_value = "Buy & Hold suits you."

    response = client.post("/ai/strategy", json={"investment_goal": "Long term growth"})

    assert response.status_code == 200
    assert response.json()["response"] == "Buy & Hold suits you."
    user_prompt = llm_client.inference_simple.call_args.args[0]
    assert "Long term growth" in user_prompt
    assert "High Cashflow Rental" in user_prompt


def test_timeout_is_distinct_from_other_failures(client, alice, llm_client):
    llm_client.inference_simple.side_effect = LLMTimeoutError("The AI request timed out. Please try again.")
    timed_out = client.post("/ai/strategy", json={"investment_goal": "growth"})

    llm_client.inference_simple.side_effect = LLMInferenceError("Failed to reach the AI service.")
    failed = client.post("/ai/strategy", json={"investment_goal": "growth"})

    assert timed_out.status_code == 504
    assert timed_out.json() == {"message": "The AI request timed out. Please try again.", "error": "timeout"}
    assert failed.status_code == 502
    assert failed.json()["error"] == "upstream"
    assert "timed out" not in failed.json()["message"]


def test_unexpected_shape_is_surfaced(client, alice, llm_client):
    llm_client.inference_simple.side_effect = UnexpectedShapeError(
        "The AI service returned an unexpected response."
    )

    response = client.post("/ai/recommendation", json={"prompt": "anything"})

    assert response.status_code == 502
    assert response.json()["message"] == "The AI service returned an unexpected response."
