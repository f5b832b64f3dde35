# persona_api/models/test_runs.py
import time
from datetime import datetime
from typing import List, Dict, Any, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


def now_ms() -> int:
    return int(time.time() * 1000)


class ApiModel(BaseModel):
    """Base model that accepts snake_case or camelCase and dumps camelCase."""

    model_config = ConfigDict(populate_by_name=True)


class Event(ApiModel):
    name: str
    timestamp: Union[int, float] = Field(default_factory=now_ms)  # epoch milliseconds
    data: Any = Field(default_factory=dict)  # stored as sent


class SurveyResponse(ApiModel):
    question: str
    answer: str


class AudioChunk(ApiModel):
    size: int
    timestamp: int = Field(default_factory=now_ms)
    content_type: str = Field("application/octet-stream", alias="contentType")
    content: bytes = Field(b"", exclude=True)


class TestRun(ApiModel):
    id: str
    user_id: str = Field(alias="userId")
    events: List[Event] = Field(default_factory=list)
    transcript: str = ""
    survey_responses: List[SurveyResponse] = Field(
        default_factory=list, alias="surveyResponses"
    )
    audio_chunks: List[AudioChunk] = Field(default_factory=list, alias="audioChunks")
    finalized: bool = False
    suite_id: Optional[str] = Field(None, alias="suiteId")
    metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=datetime.now, alias="createdAt")
    updated_at: datetime = Field(default_factory=datetime.now, alias="updatedAt")
    end_time: Optional[int] = Field(None, alias="endTime")

    def state(self) -> Dict[str, Any]:
        """Client-facing snapshot used to resume an interrupted run."""
        return {
            "runId": self.id,
            "suiteId": self.suite_id,
            "events": [event.model_dump(by_alias=True) for event in self.events],
            "transcriptSoFar": self.transcript,
            "surveyResponsesSoFar": [
                response.model_dump(by_alias=True)
                for response in self.survey_responses
            ],
            "audioChunkCount": len(self.audio_chunks),
            "startTime": self.created_at,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "finalized": self.finalized,
        }


# Request bodies


class EventRequest(ApiModel):
    run_id: Optional[str] = Field(None, alias="runId")
    event_name: Optional[str] = Field(None, alias="eventName")
    timestamp: Optional[Union[int, float]] = None
    data: Any = None


class TranscriptRequest(ApiModel):
    run_id: Optional[str] = Field(None, alias="runId")
    chunk: Optional[str] = None
    timestamp: Optional[int] = None


class SurveyRequest(ApiModel):
    run_id: Optional[str] = Field(None, alias="runId")
    question: Optional[str] = None
    answer: Optional[str] = None
    responses: List[SurveyResponse] = Field(default_factory=list)

    def all_responses(self) -> List[SurveyResponse]:
        responses = list(self.responses)
        if self.question and self.answer:
            responses.append(SurveyResponse(question=self.question, answer=self.answer))
        return responses


class FinalizeRequest(ApiModel):
    run_id: Optional[str] = Field(None, alias="runId")
    suite_id: Optional[str] = Field(None, alias="suiteId")
    metadata: Optional[Dict[str, Any]] = None
