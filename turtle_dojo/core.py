# turtle_dojo/core.py
import json
import logging
import os
from typing import Any, Dict, Optional

import requests

from .domains.turtle.engine import execute
from .domains.turtle.result import ExecutionResult
from .levels import Level, get_level

logger = logging.getLogger(__name__)

# --- Configuration ---
class AppConfig:
    """Centralized configuration for the application."""
    LLM_API_URL = os.environ.get("TURTLE_DOJO_LLM_URL", "http://localhost:11434/api/generate")
    DEFAULT_MODEL = os.environ.get("TURTLE_DOJO_MODEL", "llama3:8b")
    REQUEST_TIMEOUT = float(os.environ.get("TURTLE_DOJO_LLM_TIMEOUT", "30"))

    FALLBACK_HINT = "Don't give up, you're nearly there! Check your loop count and your angles."
    OFFLINE_HINT = "The hint helper could not be reached. Check your connection and try again."

# --- Core LLM Interaction ---
def _chunk_text(chunk) -> str:
    """Extracts the text of one streamed JSON line."""
    chunk_data = json.loads(chunk)
    if not isinstance(chunk_data, dict) or not isinstance(chunk_data.get('response', ''), str):
        raise ValueError(f"Malformed LLM stream chunk: {chunk!r}")
    return chunk_data.get('response', '')

def _execute_llm_request(prompt: str, model_name: str) -> str:
    """Handles the request to the local LLM API."""
    try:
        payload = {"model": model_name, "prompt": prompt, "stream": True}

        api_response_stream = requests.post(
            AppConfig.LLM_API_URL, json=payload, stream=True, timeout=AppConfig.REQUEST_TIMEOUT
        )
        api_response_stream.raise_for_status()

        llm_raw_output = "".join(_chunk_text(chunk) for chunk in api_response_stream.iter_lines() if chunk)

        if not llm_raw_output.strip():
            raise ValueError("The LLM returned an empty response.")
        return llm_raw_output
    except requests.exceptions.RequestException as e:
        raise ConnectionError(f"API request failed: {e}") from e

def build_hint_prompt(level: Level, script: str, error: Optional[str]) -> str:
    """Builds the tutoring prompt for a failed attempt."""
    outcome = f"The script stopped with this error: {error}" if error else \
        "The script ran, but the drawing does not match the target shape."
    return f"""You are a kind teacher helping a beginner learn Python with turtle graphics.
The learner is working on this exercise: "{level.description}"

The learner's current code:
```python
{script}
```

{outcome}

Give a short, encouraging hint of at most two sentences.
Do not give the answer or write the code for them.
Focus on the logic, the geometry, or the syntax that needs fixing."""

def request_hint(level: Level, script: str, error: Optional[str] = None, model_name: str = AppConfig.DEFAULT_MODEL) -> str:
    """Asks the LLM for a hint. Never raises: failures produce a canned message."""
    prompt = build_hint_prompt(level, script, error)
    try:
        return _execute_llm_request(prompt, model_name).strip()
    except ConnectionError as e:
        logger.warning("Hint request failed: %s", e)
        return AppConfig.OFFLINE_HINT
    except ValueError as e:
        # Covers empty replies and undecodable stream chunks.
        logger.warning("Hint response unusable: %s", e)
        return AppConfig.FALLBACK_HINT

# --- Level Evaluation ---
def preview_level(level: Level) -> ExecutionResult:
    """Runs the level's solution script to obtain the target trace."""
    return execute(level.solution_script)

def evaluate_attempt(level: Level, script: str) -> Dict[str, Any]:
    """Runs the learner's script and applies the level's success check."""
    result = execute(script)
    # A run that stopped on an error is never a success, whatever its metrics.
    success = result.ok and level.check_success(result.final_state, result.path_length, result.total_turns)
    return {"success": success, "result": result}

def process_attempt(level_id: int, script: str, with_hint: bool = False, model_name: str = AppConfig.DEFAULT_MODEL) -> Dict[str, Any]:
    """Evaluates one attempt at a level and, on failure, optionally asks for a hint."""
    try:
        level = get_level(level_id)
    except LookupError as e:
        return {"status": "error", "message": str(e)}

    evaluation = evaluate_attempt(level, script)
    result = evaluation["result"]
    response = {
        "status": "success" if evaluation["success"] else "failure",
        "level": level.id,
        "interpreter_result": result.to_dict(),
    }
    if result.error:
        response["message"] = result.error
    if not evaluation["success"] and with_hint:
        response["hint"] = request_hint(level, script, result.error, model_name)
    return response
