from .secretenv import init_secrets
from dotenv import load_dotenv

init_secrets()
load_dotenv()

from fastapi import FastAPI
from contextlib import asynccontextmanager
from .singleton import vidyanav
from fastapi.middleware.cors import CORSMiddleware
from .routers import (
    assistant,          # free-form requests, backend picks the intent
    classify,           # classify an already-fetched backend response
    health,
    instant_knowledge,  # textbook-grounded answers
    visual_aid,         # generated teaching images
    worksheet,          # grade-wise worksheets from a textbook page
)
import logging


logging.basicConfig(level=logging.INFO)
log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    try:
        await vidyanav.connect()
        yield # Application runs here
    except Exception as e:
        log.error(f"FastAPI startup error during init setup: {e}", exc_info=True)
        raise
    finally:
        await vidyanav.disconnect()
        log.info("FastAPI shutdown: Cleaning up resources...")


app = FastAPI(lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # the teacher UI is served from a different origin
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


app.include_router(health.router)
app.include_router(assistant.router)
app.include_router(worksheet.router)
app.include_router(instant_knowledge.router)
app.include_router(visual_aid.router)
app.include_router(classify.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
