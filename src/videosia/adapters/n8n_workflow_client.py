"""n8n webhook client for the generation workflow."""

from dataclasses import dataclass

import httpx

from videosia.services.workflow import WorkflowClient, WorkflowRejectedError


@dataclass
class HttpxWorkflowClient(WorkflowClient):
    """Workflow client posting to an n8n webhook with httpx."""

    webhook_url: str
    http_client: httpx.AsyncClient
    timeout: float = 120

    @classmethod
    def create(cls, webhook_url: str) -> "HttpxWorkflowClient":
        """Create a workflow client with a managed httpx session."""
        return cls(webhook_url=webhook_url, http_client=httpx.AsyncClient())

    async def trigger(self, payload: dict[str, object]) -> dict[str, object]:
        """Post the payload to the webhook and return its JSON answer."""
        response = await self.http_client.post(
            self.webhook_url, json=payload, timeout=self.timeout
        )
        if response.is_error:
            raise WorkflowRejectedError(response.status_code, response.text)
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
