from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
import logging
import uuid
import asyncio
from typing import Dict, List, Optional

# Ensure .env is loaded before importing modules that initialize API clients
from .settings import has_image_key, ALLOWED_ORIGINS, MAX_JOBS
from .models import (
    ImageGenerationRequest,
    JobProgress,
    JobStatus,
    Scene,
    SceneRegenerateRequest,
    StoryRequest,
    StoryResponse,
)
from .orchestrator import run_pipeline
from .templates import build_scenes
from .illustrations import ImageGenerationProgress, regenerate_scene_image
from .stability_client import generate_image

logger = logging.getLogger(__name__)

app = FastAPI(title="Story Illustrator Backend")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS or ["*"],
    allow_credentials=True,
    allow_methods=["POST", "GET", "OPTIONS"],
    allow_headers=["*"],
)

@app.get("/health")
def health():
    key_ok = has_image_key()
    logger.info(f"Health check: image API key present = {key_ok}")
    return {"ok": True, "has_image_key": key_ok}

@app.post("/api/image-generation")
async def image_generation(req: ImageGenerationRequest):
    if not req.prompt:
        return JSONResponse({"success": False, "error": "Missing prompt"}, status_code=400)
    resp = await generate_image(req.prompt, req.width, req.height)
    status_code = 200 if resp.success else 500
    return JSONResponse(resp.model_dump(by_alias=True, exclude_none=True), status_code=status_code)

@app.post("/v1/story/scenes")
def story_scenes(req: StoryRequest) -> List[Scene]:
    return build_scenes(req)

@app.post("/v1/story:generate")
async def generate_story(req: StoryRequest) -> StoryResponse:
    logger.info(f"Generating illustrated story for idea: {req.idea[:50]}...")
    final_state = await run_pipeline(req)
    return StoryResponse(request=req, scenes=final_state.scenes)

@app.post("/v1/story/scenes:regenerate")
async def regenerate_scene(body: SceneRegenerateRequest) -> Scene:
    scene = await regenerate_scene_image(body.scene_id, build_scenes(body.story), body.story)
    if scene is None:
        raise HTTPException(404, "scene not found")
    return scene

# --- In-memory job registry for the async workflow ---
JOBS: Dict[str, "JobRecord"] = {}

class JobRecord:
    def __init__(self, job_id: str):
        self.job_id = job_id
        self.status = "queued"
        self.error: Optional[str] = None
        self.progress = ImageGenerationProgress()
        self.scenes: List[Scene] = []

    def to_status(self) -> JobStatus:
        return JobStatus(
            job_id=self.job_id,
            status=self.status,
            error=self.error,
            progress=JobProgress(
                completed=self.progress.completed,
                total=self.progress.total,
                fraction=self.progress.fraction,
            ),
            scenes=self.scenes,
        )

def _register_job(job: JobRecord, max_jobs: int = MAX_JOBS):
    JOBS[job.job_id] = job
    finished = [jid for jid, j in JOBS.items() if j.status in ("succeeded", "failed")]
    while len(JOBS) > max_jobs and finished:
        JOBS.pop(finished.pop(0), None)

async def _background_generate(job: JobRecord, req: StoryRequest):
    try:
        logger.info(f"Starting background generation for job {job.job_id}")
        job.status = "running"
        final_state = await run_pipeline(req, job_id=job.job_id, progress=job.progress)
        job.scenes = final_state.scenes
        job.status = "succeeded"
        logger.info(f"Background generation completed for job {job.job_id}")
    except Exception as e:
        logger.exception(f"Background generation failed for job {job.job_id}")
        job.error = str(e)
        job.status = "failed"

@app.post("/v1/story:start")
async def start_job(req: StoryRequest):
    logger.info(f"Starting job for idea: {req.idea[:50]}...")
    job_id = str(uuid.uuid4())
    job = JobRecord(job_id)
    _register_job(job)
    asyncio.create_task(_background_generate(job, req))
    return {"job_id": job_id, "status": job.status}

@app.get("/v1/jobs/{job_id}")
def job_status(job_id: str) -> JobStatus:
    job = JOBS.get(job_id)
    if not job:
        raise HTTPException(404, "job not found")
    return job.to_status()
