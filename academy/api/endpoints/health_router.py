from fastapi import APIRouter, Depends

from academy.api.dependencies import get_settings
from academy.core.config import Settings
from academy.core.utils import utcnow

router = APIRouter()


@router.get("/health")
def health_check(config: Settings = Depends(get_settings)):
    return {"status": "OK", "timestamp": utcnow().isoformat() + "Z", "version": config.VERSION}


@router.get("/connection-status")
def connection_status():
    return {
        "status": "online",
        "online": True,
        "timestamp": utcnow().isoformat() + "Z",
        "message": "Server is online and ready to serve requests",
    }
