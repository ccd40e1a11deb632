"""
Gemini adapters.

Two calls leave the process:
- parse_raw_schedule: pasted spreadsheet text -> list of ScheduleEntry
- get_lecturer_advice: a lecturer's matched sessions -> short summary text

Both convert every failure into a soft result ([] or "") so the callers
never see an exception from the remote service.
"""

from __future__ import annotations

import json
import logging
import os
import time
from typing import Any, Optional

from google import genai
from google.genai import types

from schedulehub.model import ScheduleEntry

logger = logging.getLogger(__name__)

API_KEY_ENV_VAR = "GEMINI_API_KEY"
MODEL = os.environ.get("SCHEDULEHUB_MODEL", "gemini-3-flash-preview")
TIMEOUT_MS = 30_000
# summary requests give up sooner than schedule parsing
ADVICE_TIMEOUT_MS = 10_000

SCHEDULE_SCHEMA: dict[str, Any] = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "studentName": {"type": "string"},
            "supervisor": {"type": "string"},
            "examiner1": {"type": "string"},
            "examiner2": {"type": "string"},
            "date": {"type": "string"},
            "startTime": {"type": "string"},
            "endTime": {"type": "string"},
            "location": {"type": "string"},
            "projectTitle": {"type": "string"},
        },
        "required": ["studentName", "supervisor", "examiner1", "date", "startTime", "location"],
    },
}


def make_client(timeout_ms: int = TIMEOUT_MS) -> Optional[genai.Client]:
    """
    Build a Gemini client from GEMINI_API_KEY, or None if the key is not set.
    """
    api_key = os.environ.get(API_KEY_ENV_VAR)
    if not api_key:
        logger.warning("%s not set, Gemini calls are disabled", API_KEY_ENV_VAR)
        return None
    return genai.Client(api_key=api_key, http_options={"timeout": timeout_ms})


def _build_parse_prompt(raw_text: str) -> str:
    return f"""Parse the following raw text from an Excel or Google Sheets schedule into a structured JSON array.
Look for columns like Student Name, Supervisor, Examiners (1 and 2), Date, Time, and Location/Venue.

Raw Text:
{raw_text}"""


def assign_ids(items: list[dict[str, Any]], now_ms: Optional[int] = None) -> list[ScheduleEntry]:
    """
    Turn parsed rows into entries with ids "parsed-<index>-<epoch ms>".
    """
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    out: list[ScheduleEntry] = []
    for index, item in enumerate(items):
        entry = ScheduleEntry.from_dict(item)
        entry.id = f"parsed-{index}-{stamp}"
        out.append(entry)
    return out


def parse_raw_schedule(raw_text: str, client: Any = None) -> list[ScheduleEntry]:
    """
    Ask Gemini to extract schedule rows from pasted text.

    Returns [] if the key is missing, the call fails or the answer is not a
    JSON array of objects.
    """
    if client is None:
        client = make_client()
        if client is None:
            return []

    try:
        response = client.models.generate_content(
            model=MODEL,
            contents=_build_parse_prompt(raw_text),
            config=types.GenerateContentConfig(
                temperature=0.0,
                response_mime_type="application/json",
                response_json_schema=SCHEDULE_SCHEMA,
            ),
        )
        data = json.loads((response.text or "[]").strip())
    except Exception as e:
        logger.warning("Failed to parse schedule with Gemini: %s", e)
        return []

    if not isinstance(data, list):
        logger.warning("Gemini returned %s instead of a list", type(data).__name__)
        return []

    rows = [item for item in data if isinstance(item, dict)]
    entries = assign_ids(rows)
    logger.info("Gemini extracted %d schedule entries", len(entries))
    return entries


def _summarize(entries: list[ScheduleEntry]) -> str:
    return ", ".join(f"{e.date} at {e.start_time} in {e.location} with student {e.student_name}" for e in entries)


def get_lecturer_advice(initials: str, entries: list[ScheduleEntry], client: Any = None) -> str:
    """
    Ask Gemini for a short (max 3 sentences) summary of the lecturer's day.

    Returns "" on any failure; the dashboard then simply has no advice panel.
    """
    if client is None:
        client = make_client(ADVICE_TIMEOUT_MS)
        if client is None:
            return ""

    prompt = (
        f'The lecturer with initials "{initials}" has the following schedule for research proposal '
        f"presentations: {_summarize(entries)}.\n"
        "Provide a very brief (max 3 sentences) professional summary/encouragement for their busy day. "
        "Mention if they have back-to-back sessions."
    )

    try:
        response = client.models.generate_content(model=MODEL, contents=prompt)
        return (response.text or "").strip()
    except Exception as e:
        logger.warning("Failed to get lecturer advice from Gemini: %s", e)
        return ""
