"""Schema-checked parsing of the extraction collaborator's raw response."""

import json
import logging

from pydantic import ValidationError

from models.schemas.skill_set import ExtractedCandidates
from services.errors import MalformedExtractionOutput

logger = logging.getLogger(__name__)


def _strip_code_fences(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else text[3:]
        if text.endswith("```"):
            text = text[:-3]
        text = text.strip()
    return text


def _load_object(text: str) -> dict:
    data = json.loads(text)
    if not isinstance(data, dict):
        raise MalformedExtractionOutput(f"expected a JSON object, got {type(data).__name__}")
    return data


def parse_extraction_output(raw: str | dict | None) -> ExtractedCandidates:
    """Parse and validate the category -> candidates object.

    Tries the text as-is, then the span from the first ``{`` to the last
    ``}``. Raises MalformedExtractionOutput if neither yields an object
    that matches the schema.
    """
    if raw is None:
        raise MalformedExtractionOutput("no extraction output")

    if isinstance(raw, dict):
        data = raw
    else:
        text = _strip_code_fences(raw)
        try:
            data = _load_object(text)
        except (json.JSONDecodeError, MalformedExtractionOutput) as first_error:
            start, end = text.find("{"), text.rfind("}")
            if start == -1 or end <= start:
                raise MalformedExtractionOutput(
                    f"response does not contain a JSON object: {first_error}"
                ) from first_error
            try:
                data = _load_object(text[start:end + 1])
            except json.JSONDecodeError as e:
                raise MalformedExtractionOutput(f"unparseable JSON object: {e}") from e
            logger.info("Recovered JSON object from surrounding text")

    try:
        return ExtractedCandidates.model_validate(data)
    except ValidationError as e:
        raise MalformedExtractionOutput(f"extraction output failed schema validation: {e}") from e
