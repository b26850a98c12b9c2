"""HTTP client for the hosted AI gateway functions.

The backend delegates ALL model-driven work:
  - generate-roadmap: learning roadmap for a target role's skill gaps
  - ai-career-coach:  coaching chat replies, streamed as server-sent events
  - analyze-github:   GitHub profile scoring and skill detection

Prompts and model selection live in the gateway. This client only builds
the request payloads and validates the replies.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any

import httpx

from shared.models import CoachRequest, CoachResponse, RoadmapRequest
from app.core.config import settings

logger = logging.getLogger(__name__)

_SSE_PREFIX = "data: "
_SSE_DONE = "[DONE]"


def _check_in_band_error(path: str, data: Any) -> None:
    # Gateway functions report their own failures in-band
    if isinstance(data, dict) and data.get("error"):
        raise RuntimeError(f"AI gateway {path} failed: {data['error']}")


async def _post(path: str, payload: dict[str, Any]) -> dict[str, Any]:
    url = f"{settings.AI_GATEWAY_URL}/{path}"
    start = time.perf_counter()

    async with httpx.AsyncClient(timeout=settings.GATEWAY_TIMEOUT) as client:
        resp = await client.post(url, json=payload)
        resp.raise_for_status()

    latency_ms = (time.perf_counter() - start) * 1000
    logger.info("AI gateway %s latency=%.1f ms", path, latency_ms, extra={"latency_ms": latency_ms})

    data = resp.json()
    _check_in_band_error(path, data)
    return data


async def generate_roadmap(request: RoadmapRequest) -> dict[str, Any]:
    """Ask the gateway for a learning roadmap covering the given skill gaps.

    Returns:
        The roadmap object as produced by the gateway.
    """
    data = await _post("generate-roadmap", request.to_payload())
    roadmap = data.get("roadmap")
    if not isinstance(roadmap, dict):
        raise RuntimeError("AI gateway generate-roadmap returned no roadmap")
    logger.info(
        "Roadmap generated for %s (%d gaps)", request.target_role, len(request.skill_gaps),
        extra={"skill_count": len(request.skill_gaps)},
    )
    return roadmap


async def analyze_github(username: str) -> dict[str, Any]:
    """Run the gateway's GitHub profile analysis.

    Returns:
        The analysis object, including ``detected_skills``.
    """
    data = await _post("analyze-github", {"username": username})
    analysis = data.get("analysis")
    if not isinstance(analysis, dict):
        raise RuntimeError("AI gateway analyze-github returned no analysis")
    return analysis


def _delta_content(data: str) -> str:
    """Extract choices[0].delta.content from one event payload."""
    try:
        parsed = json.loads(data)
    except json.JSONDecodeError:
        logger.debug("Skipping non-JSON coach event: %.80s", data)
        return ""
    if not isinstance(parsed, dict):
        return ""
    choices = parsed.get("choices") or [{}]
    delta = choices[0].get("delta") or {}
    return delta.get("content") or ""


async def coach_chat(request: CoachRequest) -> CoachResponse:
    """Send the conversation to the coach function and collect its reply.

    The coach streams ``data: {...}`` events until ``data: [DONE]``; the
    deltas are concatenated into a single reply. A JSON body instead of a
    stream is only expected for in-band errors.
    """
    path = "ai-career-coach"
    url = f"{settings.AI_GATEWAY_URL}/{path}"
    start = time.perf_counter()
    parts: list[str] = []

    async with httpx.AsyncClient(timeout=settings.GATEWAY_TIMEOUT) as client:
        async with client.stream("POST", url, json=request.to_payload()) as resp:
            resp.raise_for_status()

            if "text/event-stream" not in resp.headers.get("content-type", ""):
                await resp.aread()
                _check_in_band_error(path, resp.json())
                raise RuntimeError(f"AI gateway {path} returned no event stream")

            async for line in resp.aiter_lines():
                line = line.strip()
                if not line.startswith(_SSE_PREFIX):
                    continue
                data = line[len(_SSE_PREFIX):]
                if data == _SSE_DONE:
                    break
                parts.append(_delta_content(data))

    latency_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "AI gateway %s mode=%s latency=%.1f ms", path, request.mode, latency_ms,
        extra={"latency_ms": latency_ms},
    )
    return CoachResponse(reply="".join(parts))
