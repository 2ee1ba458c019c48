"""
Structured score extraction from free-form evaluator output.

LLMs often wrap JSON in markdown fences or surround it with commentary even when
told not to. This module pulls the embedded score object out of such text and
validates it, failing explicitly when nothing usable is found.
"""

import json
import re

from pydantic import ValidationError

from analyzers.models import QualitativeScore
from exceptions import EvaluatorParseFailure

FENCED_JSON = re.compile(r"```json\s*\n(.*?)\n\s*```", re.DOTALL)
SCORE_OBJECT = re.compile(
    r"\{\s*\"(?:technical_sophistication|message_appropriateness)\".*?\}", re.DOTALL
)


def find_json_block(text: str) -> str:
    """
    Locate the JSON object carrying the scores.

    A fenced ```json block wins; otherwise the first object whose first key is
    one of the score keys is used.

    Args:
        text (str): Raw evaluator output

    Returns:
        str: The candidate JSON text

    Raises:
        EvaluatorParseFailure: If no candidate is found
    """
    match = FENCED_JSON.search(text or "")
    if match:
        return match.group(1).strip()

    match = SCORE_OBJECT.search(text or "")
    if match:
        return match.group(0).strip()

    raise EvaluatorParseFailure("no JSON score object found in evaluator output", raw=text)


def extract_score(text: str) -> QualitativeScore:
    """
    Extract and validate the qualitative score from evaluator output.

    Args:
        text (str): Raw evaluator output

    Returns:
        QualitativeScore: Validated scores

    Raises:
        EvaluatorParseFailure: If no score object is found, it is not valid
            JSON, or a field is missing or outside [0, 10]
    """
    candidate = find_json_block(text)
    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as e:
        raise EvaluatorParseFailure(f"invalid JSON in evaluator output: {e}", raw=text) from e

    if not isinstance(data, dict):
        raise EvaluatorParseFailure("evaluator JSON is not an object", raw=text)

    try:
        return QualitativeScore.model_validate(data)
    except ValidationError as e:
        raise EvaluatorParseFailure(f"invalid score in evaluator output: {e}", raw=text) from e
