import asyncio
from typing import Optional

import aiohttp
import orjson

from config.settings import settings
from governance.errors import TransportFailure
from governance.models.results import ProposalAnalysis
from utils.logger_utils import get_logger

logger = get_logger("Analysis Client")


class AnalysisClient(object):
    """
    Client for the HTTP endpoint that produces the AI summary and sentiment
    stored with a new proposal. The returned text is not interpreted.
    """

    def __init__(self, api_url: Optional[str] = None, timeout: Optional[int] = None):
        self.api_url = api_url or settings.analysis.api_url
        self.timeout = aiohttp.ClientTimeout(total=timeout or settings.analysis.timeout)
        self.session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        self.session = aiohttp.ClientSession(
            timeout=self.timeout,
            headers={"User-Agent": f"{settings.app.name}/1.0"},
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.session:
            await self.session.close()

    async def analyze(self, proposal_text: str) -> ProposalAnalysis:
        if self.session is None:
            raise RuntimeError("AnalysisClient must be used as an async context manager")

        logger.info(f"Requesting analysis for proposal ({len(proposal_text)} chars)...")
        try:
            async with self.session.post(self.api_url, json={"proposal": proposal_text}) as response:
                if response.status != 200:
                    logger.error(f"Analysis request failed. Status: {response.status}, Reason: {response.reason}")
                    raise TransportFailure("analyze", f"HTTP {response.status}", code=response.status)
                data = await response.json(loads=orjson.loads, content_type=None)
        except aiohttp.ClientError as e:
            logger.error(f"Error requesting analysis: {e}")
            raise TransportFailure("analyze", str(e)) from e
        except asyncio.TimeoutError as e:
            raise TransportFailure("analyze", "request timed out") from e

        # Empty or missing values fall back to the model defaults
        fields = {key: data[key] for key in ("summary", "sentiment") if isinstance(data, dict) and data.get(key)}
        return ProposalAnalysis(**fields)
