import json
import logging
import re
from flask import current_app
from langchain_google_genai import ChatGoogleGenerativeAI

logger = logging.getLogger(__name__)

DEFAULT_QUALITY_SCORE = 5.0
MIN_SCORE = 1.0
MAX_SCORE = 10.0

PROMPT_TEMPLATE = (
    'Rate the following work description on a scale of 1-10: "{description}"\n'
    'Respond only with JSON of the form {{"score": <number>}}.'
)


def _build_llm():
    return ChatGoogleGenerativeAI(
        model=current_app.config.get("GEMINI_MODEL", "gemini-2.5-flash"),
        google_api_key=current_app.config["GEMINI_API_KEY"],
        temperature=0,
    )


def parse_score(text):
    """Pull the score out of a model reply such as ``{"score": 7}``.

    Returns None when the reply holds no usable score.
    """
    if not text:
        return None
    match = re.search(r"\{.*?\}", text, re.DOTALL)
    if not match:
        return None
    try:
        parsed = json.loads(match.group(0))
    except ValueError:
        return None
    score = parsed.get("score") if isinstance(parsed, dict) else None
    if isinstance(score, bool) or not isinstance(score, (int, float)) or not score:
        return None
    return float(min(MAX_SCORE, max(MIN_SCORE, score)))


def score_description(description):
    """
    Grade a work description from 1 to 10 using the Gemini chat model.

    Args:
        description (str): The activity description to grade

    Returns:
        float: The score, or DEFAULT_QUALITY_SCORE if grading is unavailable
    """
    if not current_app.config.get("GEMINI_API_KEY"):
        return DEFAULT_QUALITY_SCORE

    try:
        llm = _build_llm()
        reply = llm.invoke(PROMPT_TEMPLATE.format(description=description))
        content = reply.content if hasattr(reply, "content") else str(reply)
        if isinstance(content, list):
            content = "".join(
                part.get("text", "") if isinstance(part, dict) else str(part) for part in content
            )
        score = parse_score(content)
    except Exception as e:
        logger.warning(f"AI scoring unavailable: {e}")
        return DEFAULT_QUALITY_SCORE

    if score is None:
        logger.warning("AI scoring returned no usable score")
        return DEFAULT_QUALITY_SCORE
    return score
