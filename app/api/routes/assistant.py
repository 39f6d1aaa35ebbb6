"""
Assistant API Routes

POST /api/assistant/ask - Ask the AI assistant a question
"""

from fastapi import APIRouter, Depends
import logging

from app.api.dependencies import get_actions
from app.models.api_responses import ActionResponse, AskRequest
from app.services.actions import DashboardActions

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/ask",
    response_model=ActionResponse[str],
    response_model_exclude_none=True,
)
async def ask(request: AskRequest, actions: DashboardActions = Depends(get_actions)):
    """
    Ask the AI assistant a question.

    Example request body:
    ```json
    {
        "question": "What is our refund policy?"
    }
    ```

    Example response:
    ```json
    {
        "success": true,
        "data": "Refunds are issued within 30 days of purchase..."
    }
    ```
    """
    question_length = len(request.question) if isinstance(request.question, str) else 0
    logger.info(f"Ask request: question_length={question_length}")
    return await actions.ask_assistant(request.question)
