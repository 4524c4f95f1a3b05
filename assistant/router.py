from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from assistant.service import GREETING, ask

router = APIRouter(prefix="/api/assistant", tags=["Assistant"])


class Question(BaseModel):
    question: str


class Answer(BaseModel):
    role: str = "model"
    text: str


@router.get("/greeting", response_model=Answer)
def greeting():
    return Answer(text=GREETING)


@router.post("/ask", response_model=Answer)
def ask_api(data: Question):
    try:
        return Answer(text=ask(data.question))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RuntimeError as e:
        raise HTTPException(status_code=503, detail=str(e))
