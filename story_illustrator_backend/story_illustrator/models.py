from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Literal, Optional

Genre = Literal["fantasy", "sci-fi", "mystery", "adventure", "comedy", "drama", "horror", "romance"]
Tone = Literal["lighthearted", "dark", "epic", "mysterious", "adventurous", "romantic", "peaceful", "intense"]
Audience = Literal["kids", "teens", "adults"]

class StoryRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    idea: str
    genre: Genre = "adventure"
    tone: Tone = "lighthearted"
    audience: Audience = "kids"

    @field_validator("idea")
    @classmethod
    def _idea_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("idea must not be empty")
        return v

class Scene(BaseModel):
    id: int
    title: str
    text: str
    image_url: Optional[str] = None
    image_prompt: Optional[str] = None

class ImageGenerationRequest(BaseModel):
    prompt: str = ""
    width: int = 1024
    height: int = 768

class ImageGenerationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    prompt: Optional[str] = None
    error: Optional[str] = None
    details: Optional[str] = None

class StoryResponse(BaseModel):
    request: StoryRequest
    scenes: List[Scene]

class SceneRegenerateRequest(BaseModel):
    story: StoryRequest
    scene_id: int

class JobProgress(BaseModel):
    completed: int = 0
    total: int = 0
    fraction: float = 0.0

class JobStatus(BaseModel):
    job_id: str
    status: str
    error: Optional[str] = None
    progress: JobProgress = Field(default_factory=JobProgress)
    scenes: List[Scene] = Field(default_factory=list)

class StoryState(BaseModel):
    job_id: str
    request: StoryRequest
    scenes: List[Scene] = Field(default_factory=list)
