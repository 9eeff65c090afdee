import uuid, logging
from typing import Optional
from langchain_core.runnables import RunnableConfig
from langgraph.graph import StateGraph, END
from .models import StoryState, StoryRequest
from .templates import build_scenes
from .illustrations import ImageGenerationProgress, ImageGenerator, generate_scene_images
from .settings import SCENE_DELAY_S, OPTIMIZE_PROMPTS, PROGRESS_RESET_S

logger = logging.getLogger(__name__)

def _mk_state(req: StoryRequest, job_id: Optional[str] = None) -> StoryState:
    return StoryState(job_id=job_id or str(uuid.uuid4()), request=req)

def _configurable(config: Optional[RunnableConfig]) -> dict:
    return (config or {}).get("configurable", {})

async def node_scenes(state: StoryState) -> dict:
    logger.info(f"Building scenes for job {state.job_id}")
    scenes = build_scenes(state.request)
    logger.info(f"Built {len(scenes)} scenes for job {state.job_id}")
    return {"scenes": scenes}

async def node_illustrations(state: StoryState, config: RunnableConfig) -> dict:
    opts = _configurable(config)
    logger.info(f"Illustrating {len(state.scenes)} scenes for job {state.job_id}")
    scenes = await generate_scene_images(
        state.scenes,
        state.request,
        generator=opts.get("generator"),
        progress=opts.get("progress"),
        delay=opts.get("delay", SCENE_DELAY_S),
        optimize=opts.get("optimize", OPTIMIZE_PROMPTS),
        reset_after=opts.get("reset_after", PROGRESS_RESET_S),
    )
    return {"scenes": scenes}

def build_graph():
    g = StateGraph(StoryState)
    g.add_node("scenes", node_scenes)
    g.add_node("illustrations", node_illustrations)
    g.set_entry_point("scenes")
    g.add_edge("scenes", "illustrations")
    g.add_edge("illustrations", END)
    return g.compile()

GRAPH = build_graph()

async def run_pipeline(
    req: StoryRequest,
    job_id: Optional[str] = None,
    generator: Optional[ImageGenerator] = None,
    progress: Optional[ImageGenerationProgress] = None,
    **options,
) -> StoryState:
    state = _mk_state(req, job_id)
    logger.info(f"Starting pipeline for job {state.job_id}")
    configurable = {"generator": generator, "progress": progress, **options}
    final_state = await GRAPH.ainvoke(state, config={"configurable": configurable})

    # LangGraph hands back a dict of channel values
    if isinstance(final_state, StoryState):
        result_state = final_state
    else:
        result_state = StoryState(
            job_id=final_state.get("job_id", state.job_id),
            request=final_state.get("request", state.request),
            scenes=final_state.get("scenes", []),
        )
    logger.info(f"Pipeline completed for job {result_state.job_id} with {len(result_state.scenes)} scenes")
    return result_state
