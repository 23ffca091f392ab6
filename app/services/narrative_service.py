"""
Narrative report service for projection results.

This service turns the three scenario results into a prompt for the Google
Generative Language API and returns the model's prose summary. It never raises
for a missing credential or a failed request; callers get a sentinel string
they can show to the user instead.
"""

import logging
from datetime import date
from typing import Any, Dict, Iterable, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from app.config import Settings
from app.models.profile import FinancialProfile
from app.models.scenario import ScenarioType
from app.models.simulation.result import SimulationResult
from app.models.time_grid import CurrencyFormatter

logger = logging.getLogger(__name__)

MISSING_API_KEY_MESSAGE = "API Key is missing. Please configure the environment variable."
INSUFFICIENT_DATA_MESSAGE = "Insufficient simulation data."
UNAVAILABLE_MESSAGE = "Unable to generate analysis at this time."
EMPTY_RESPONSE_MESSAGE = "Analysis generated no text."

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.5-flash"


def build_analysis_prompt(
    results: Dict[ScenarioType, SimulationResult],
    profile: FinancialProfile,
    today: Optional[date] = None,
) -> str:
    """
    Build the analyst prompt from the scenario metrics.

    Args:
        results: BASE, WORST and BEST results keyed by scenario
        profile: Profile the results were computed from
        today: Date used for the client's current age (defaults to today)

    Returns:
        Prompt text
    """
    fmt = CurrencyFormatter(decimal_places=0).format_currency
    today = today or date.today()

    base = results[ScenarioType.BASE]
    worst = results[ScenarioType.WORST]
    best = results[ScenarioType.BEST]

    current_age = today.year - profile.personal.birthday.year
    initial_net_worth = base.data[0].net_worth if base.data else 0

    def ruin(result: SimulationResult) -> str:
        return "YES" if result.metrics.ruin_probability > 0 else "NO"

    return f"""
Act as a senior institutional portfolio manager and risk analyst.
Analyze the following retirement stress test simulation for a client.

**Client Profile:**
- Current Age: {current_age}
- Life Expectancy: {profile.personal.life_expectancy}
- Initial Net Worth: {fmt(initial_net_worth)}

**Simulation Results (Nominal):**

1. **Base Case**:
   - Ending Wealth: {fmt(base.metrics.ending_net_worth)}
   - Lowest Point: {fmt(base.metrics.lowest_point)}
   - Ruin: {ruin(base)}

2. **Worst Case (-1.5 SD, High Inflation)**:
   - Ending Wealth: {fmt(worst.metrics.ending_net_worth)}
   - Lowest Point: {fmt(worst.metrics.lowest_point)}
   - Ruin: {ruin(worst)}

3. **Best Case (+1.0 SD, Low Inflation)**:
   - Ending Wealth: {fmt(best.metrics.ending_net_worth)}

**Instructions:**
- Provide a "Board Room" style summary. Concise, analytical, no fluff.
- Focus on the probability of ruin in the worst-case scenario.
- If there is a shortfall, precisely identify the age at which liquidity dries up.
- Suggest 2 specific, high-level strategic adjustments if the worst case fails (e.g., specific reduction in spending or increased contribution).
- Tone: Serious, institutional, disciplined.
- Limit response to 2 paragraphs maximum.
"""


def extract_text(payload: Dict[str, Any]) -> str:
    """Join the text parts of the first candidate in a generateContent response."""
    if not isinstance(payload, dict):
        return ""
    candidates = payload.get("candidates") or []
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(part.get("text", "") for part in parts).strip()


class NarrativeReportService:
    """Service for generating prose summaries of projection results."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: int = 30,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize the narrative report service.

        Args:
            api_key: Generative Language API key (None disables the service)
            model: Model name
            base_url: API base URL
            timeout: Request timeout in seconds
            session: Preconfigured requests session (one with retries is created otherwise)
        """
        self.logger = logging.getLogger(__name__)
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or self._create_session()

    @classmethod
    def from_settings(cls, settings: Settings) -> "NarrativeReportService":
        """Create a service from application settings."""
        return cls(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            base_url=settings.gemini_base_url,
            timeout=settings.gemini_timeout,
        )

    def _create_session(self) -> requests.Session:
        """Create a requests session with retry strategy."""
        session = requests.Session()

        retry_strategy = Retry(
            total=3,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["POST"],
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        return session

    def generate(
        self,
        results: Iterable[SimulationResult],
        profile: FinancialProfile,
        today: Optional[date] = None,
    ) -> str:
        """
        Generate a narrative analysis of the scenario results.

        Args:
            results: Results for BASE, WORST and BEST
            profile: Profile the results were computed from
            today: Date used for the client's current age

        Returns:
            Analysis text, or one of the sentinel messages
        """
        if not self.api_key:
            return MISSING_API_KEY_MESSAGE

        by_scenario = {result.scenario: result for result in results}
        if any(scenario not in by_scenario for scenario in ScenarioType):
            return INSUFFICIENT_DATA_MESSAGE

        prompt = build_analysis_prompt(by_scenario, profile, today)
        url = f"{self.base_url}/models/{self.model}:generateContent"

        try:
            response = self.session.post(
                url,
                headers={"x-goog-api-key": self.api_key},
                json={"contents": [{"parts": [{"text": prompt}]}]},
                timeout=self.timeout,
            )
            response.raise_for_status()
            text = extract_text(response.json())
        except (requests.RequestException, ValueError) as e:
            self.logger.error(f"Narrative report request failed: {e}")
            return UNAVAILABLE_MESSAGE

        if not text:
            return EMPTY_RESPONSE_MESSAGE

        self.logger.info(f"Generated narrative report with model {self.model}")
        return text
