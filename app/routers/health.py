from fastapi import APIRouter, Depends
from app.services.ai import VidyaNavClient
from app.singleton import get_vidyanav
import time
from datetime import datetime

router = APIRouter(prefix="/api/health")
start_time = time.time()


@router.get("")
async def health(vidyanav: VidyaNavClient = Depends(get_vidyanav)):
    uptime = time.time() - start_time
    return {
        "status": "OK",
        "uptime": round(uptime, 3),
        "backend": vidyanav.base_url,
        "date": datetime.now()
    }
