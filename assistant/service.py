import requests
from loguru import logger

from config import settings

GREETING = (
    "Hello! I am your Risk Analyst AI. Ask me about lot sizes, leverage, "
    "or how to calculate risk for crypto assets."
)

FALLBACK_ANSWER = "I'm having trouble connecting to the network right now."

DOMAIN_CONTEXT = """You are an expert crypto trading risk manager.
You are embedded in a "Lot Size Calculator" app.
The user inputs "Risk Amount ($)" and "Stop Loss Distance ($)".
The formula used is Lots = Risk / Distance.

Answer the user's question briefly and professionally.
If they ask about specific coins (BTC, ETH, SOL, ADA, AVAX, LINK, AAVE), assume they are trading the pairs with USD."""


def build_prompt(question: str) -> str:
    return f"{DOMAIN_CONTEXT}\n\nUser question: {question}"


def _extract_text(payload: dict) -> str:
    parts = payload["candidates"][0]["content"]["parts"]
    text = "".join(p.get("text", "") for p in parts).strip()
    if not text:
        raise ValueError("empty model response")
    return text


def ask(question: str) -> str:
    """
    Send a question plus the calculator context to the hosted model.

    Raises ValueError for a blank question and RuntimeError when no API key
    is configured; transport or response failures return FALLBACK_ANSWER.
    """
    question = (question or "").strip()
    if not question:
        raise ValueError("Question is empty")

    if not settings.GEMINI_API_KEY:
        raise RuntimeError("GEMINI_API_KEY missing")

    url = f"{settings.ASSISTANT_BASE_URL}/{settings.ASSISTANT_MODEL}:generateContent"
    body = {"contents": [{"parts": [{"text": build_prompt(question)}]}]}

    try:
        res = requests.post(
            url,
            json=body,
            headers={"x-goog-api-key": settings.GEMINI_API_KEY},
            timeout=settings.ASSISTANT_TIMEOUT_SECONDS,
        )
        res.raise_for_status()
        return _extract_text(res.json())
    except (requests.RequestException, ValueError, KeyError, IndexError, TypeError) as e:
        logger.error(f"Assistant request failed: {e}")
        return FALLBACK_ANSWER
