import json
import logging
import re
import json5
import demjson3

from analyzer.errors import MalformedCritique

logger = logging.getLogger(__name__)

# Greedy on purpose: first "{" to last "}" so commentary around the object is dropped
_OBJECT_PATTERN = re.compile(r"\{.*\}", re.DOTALL)


def extract_json_object(response_text: str) -> str:
    """
    Pull the JSON-looking object out of a model response.

    Handles markdown fences and leading/trailing commentary. Nested braces
    inside string values or several separate objects are not handled:
    everything between the first "{" and the last "}" is returned.

    Raises:
        MalformedCritique: If the text holds no "{...}" span at all
    """
    match = _OBJECT_PATTERN.search(response_text or "")
    if not match:
        raise MalformedCritique()
    return match.group(0)


def _clean_common_mistakes(text: str) -> str:
    # Remove single-line comments (// ...) that are not part of a URL
    cleaned = re.sub(r"(?<!:)//[^\n]*", "", text)

    # Remove multi-line comments (/* ... */)
    cleaned = re.sub(r"/\*.*?\*/", "", cleaned, flags=re.DOTALL)

    # Remove trailing commas before closing braces/brackets
    cleaned = re.sub(r",(\s*[}\]])", r"\1", cleaned)
    return cleaned


# JSON Repair and Parsing Function
def repair_and_parse_json(response_text: str) -> dict:
    """
    Multi-layered JSON parsing with auto-repair capabilities.

    Attempts to parse JSON through multiple strategies:
    1. Standard json.loads()
    2. Clean common issues (trailing commas, comments)
    3. json5 parser (tolerates comments, single quotes, trailing commas)
    4. demjson3 parser (auto-repairs many errors)

    Args:
        response_text: JSON object text, usually from extract_json_object()

    Returns:
        Parsed dictionary

    Raises:
        MalformedCritique: If every layer fails or the result is not an object
    """
    errors = []
    result = None
    parsed = False

    layers = (
        ("Standard JSON", json.loads, response_text),
        ("Cleaned JSON", json.loads, _clean_common_mistakes(response_text)),
        ("JSON5", json5.loads, response_text),
        ("DemJSON", demjson3.decode, response_text),
    )

    for index, (name, parse, text) in enumerate(layers, 1):
        try:
            result = parse(text)
            parsed = True
            if index > 1:
                logger.info(f"✅ Layer {index}: {name} parsing succeeded after repair")
            break
        except Exception as e:
            errors.append(f"{name}: {str(e)}")
            logger.debug(f"❌ Layer {index} ({name}) failed: {str(e)}")

    if not parsed:
        logger.warning(f"⚠️  All JSON parsers failed: {'; '.join(errors)}")
        logger.debug(f"Response preview: {response_text[:200]}...")
        raise MalformedCritique(
            f"Model returned malformed JSON: {'; '.join(errors[:2])}"
        )

    if not isinstance(result, dict):
        raise MalformedCritique(
            f"Model returned JSON {type(result).__name__}, expected an object"
        )

    return result
