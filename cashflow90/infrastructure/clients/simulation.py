"""Scenario simulation webhook client (fire-and-forget trigger)"""

import asyncio
import logging
import httpx
from typing import Any, Dict
from cashflow90.config import settings
from cashflow90.domain.exceptions import SimulationTriggerError
from cashflow90.infrastructure.observability.metrics import simulation_latency_histogram, simulation_failure_counter

logger = logging.getLogger(__name__)


class SimulationClient:
    """Client for submitting scenario runs to the external automation runner"""

    def __init__(
        self,
        webhook_url: str | None = None,
        timeout: float | None = None,
        local_delay_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.webhook_url = webhook_url or settings.simulation_webhook_url
        self.timeout = timeout or settings.http_timeout_seconds
        self.local_delay_seconds = (
            settings.simulation_delay_seconds if local_delay_seconds is None else local_delay_seconds
        )
        self.transport = transport

    async def _submit(self, payload: Dict[str, Any]) -> None:
        """
        POST the payload once.

        Raises:
            SimulationTriggerError: On timeout, malformed URL, network failure or non-2xx response
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                with simulation_latency_histogram.time():
                    response = await client.post(self.webhook_url, json=payload)
                    response.raise_for_status()
            except httpx.TimeoutException as e:
                raise SimulationTriggerError(f"Simulation runner timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise SimulationTriggerError(f"Simulation runner error: {e.response.status_code}") from e
            except (httpx.RequestError, httpx.InvalidURL) as e:
                raise SimulationTriggerError(f"Simulation runner unreachable: {e}") from e

    async def trigger(self, name: str, growth_adjustment: float, payroll_adjustment: float) -> bool:
        """
        Submit a scenario run. Reports whether the submission was accepted,
        not whether the simulation succeeded. No retries.

        Without a configured webhook the trigger is accepted locally.
        """
        payload = {
            "name": name,
            "growth_adjustment": growth_adjustment,
            "payroll_adjustment": payroll_adjustment,
        }

        if not self.webhook_url:
            logger.info("No simulation webhook configured, accepting locally", extra={"scenario_name": name})
            if self.local_delay_seconds > 0:
                await asyncio.sleep(self.local_delay_seconds)
            return True

        try:
            await self._submit(payload)
        except SimulationTriggerError as e:
            simulation_failure_counter.inc()
            logger.error(f"Simulation trigger failed: {e}", extra={"scenario_name": name})
            return False

        logger.info("Simulation triggered", extra={"scenario_name": name})
        return True
