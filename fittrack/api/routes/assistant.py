from fastapi import APIRouter, Depends
from pydantic import BaseModel

from fittrack.api.deps import get_assistant_service
from fittrack.engine.knowledge import TipCategory
from fittrack.services.assistant import AssistantService, AssistantTopic

router = APIRouter()


class AssistantRequest(BaseModel):
    topic: AssistantTopic
    tip_category: TipCategory = TipCategory.GENERAL


@router.get("/topics")
async def list_topics():
    return {
        "topics": [topic.value for topic in AssistantTopic],
        "tip_categories": [category.value for category in TipCategory],
    }


@router.post("/{subject_id}")
def ask(
    subject_id: int,
    data: AssistantRequest,
    assistant: AssistantService = Depends(get_assistant_service),
):
    response = assistant.respond(subject_id, data.topic, tip_category=data.tip_category)
    return {"topic": data.topic.value, "response": response}
