from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import requests

from ..core.exceptions import ReportGenerationError
from .generator import ReportGenerator, StudentReportInput

logger = logging.getLogger(__name__)

PROMPT = (
    "You are a school administrator. Write a short, friendly narrative summary of the "
    "attendance of {name} (class {class_id}) for their parents. Mention the number of days "
    "present, absent and excused, any visible pattern, and end with one suggestion.\n\n"
    "Records (date: status):\n{lines}"
)


@dataclass
class ReportConfig:
    endpoint: str
    api_key: Optional[str] = None
    timeout: float = 30


class HttpReportGenerator(ReportGenerator):
    """Posts the prompt + structured input to a text-generation endpoint.

    The endpoint is expected to answer ``{"text": "..."}``.
    """

    def __init__(self, config: ReportConfig, *, session: Optional[requests.Session] = None):
        self._config = config
        self._session = session or requests.Session()

    def _prompt(self, report_input: StudentReportInput) -> str:
        lines = "\n".join(f"{e.date}: {e.status}" for e in report_input.attendance) or "(no records)"
        return PROMPT.format(name=report_input.name, class_id=report_input.class_id, lines=lines)

    def generate(self, report_input: StudentReportInput) -> str:
        headers = {"Content-Type": "application/json"}
        if self._config.api_key:
            headers["Authorization"] = f"Bearer {self._config.api_key}"

        payload = {"prompt": self._prompt(report_input), "input": report_input.as_payload()}
        try:
            response = self._session.post(
                self._config.endpoint,
                json=payload,
                headers=headers,
                timeout=self._config.timeout,
            )
            response.raise_for_status()
            text = (response.json() or {}).get("text")
        except (requests.RequestException, ValueError) as e:
            logger.error("Report generator call failed: %s", e)
            raise ReportGenerationError(str(e)) from e

        if not text:
            raise ReportGenerationError("Report generator returned no text")
        return str(text).strip()
