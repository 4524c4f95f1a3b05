import sys

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from config import settings
from auth.service import auth_events
from auth.router import router as auth_router
from assistant.router import router as assistant_router
from calculator.registry import registry
from calculator.router import router as calculator_router
from instruments.router import router as instruments_router

logger.remove()
logger.add(sys.stderr, level=settings.LOG_LEVEL)

app = FastAPI(title="Lot Calculator Backend")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(instruments_router)
app.include_router(calculator_router)
app.include_router(auth_router)
app.include_router(assistant_router)

# Sign-in imports saved settings, sign-out stops syncing
auth_events.subscribe(registry.on_auth_event)


@app.get("/")
def root():
    return {"status": "Backend running"}


if __name__ == "__main__":
    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT, reload=False)
