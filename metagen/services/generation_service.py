import logging
from typing import Any, Optional

import httpx

from ..config import Settings, settings as default_settings
from ..models.generation import GenerationTask
from .errors import (
    AuthError,
    GenerationTimeout,
    MissingCredential,
    ModelWarming,
    PipelineError,
    ProviderError,
    UnknownGenerationError,
)
from .prompts import build_prompt, clean_generated_text, get_task_spec

logger = logging.getLogger(__name__)

MODEL_LOADING_SIGNAL = "is currently loading"


def _error_payload(response: httpx.Response) -> Optional[str]:
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict) and data.get("error"):
        error = data["error"]
        return error if isinstance(error, str) else str(error)
    return None


def _classify_failure(response: httpx.Response, task: GenerationTask) -> PipelineError:
    if response.status_code == 401:
        return AuthError()

    error = _error_payload(response)
    if error and MODEL_LOADING_SIGNAL in error:
        return ModelWarming()
    if error:
        return ProviderError(error)
    return UnknownGenerationError(task.value)


def _first_candidate(data: Any) -> Optional[str]:
    if isinstance(data, list) and data and isinstance(data[0], dict):
        text = data[0].get("generated_text")
        if isinstance(text, str):
            return text
    return None


class GenerationClient:
    """Thin async client for the Hugging Face text-generation endpoint.

    One instance holds the endpoint, model and credential for the lifetime of
    the process. Each call issues exactly one request with no retries; every
    failure comes back as a :class:`PipelineError` subclass.
    """

    def __init__(
        self,
        api_key: str,
        api_base: str = default_settings.hf_api_base,
        model: str = default_settings.hf_model,
        timeout: float = default_settings.generation_timeout,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise MissingCredential()
        self.api_key = api_key
        self.endpoint = f"{api_base.rstrip('/')}/{model}"
        self.model = model
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        config: Settings = default_settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "GenerationClient":
        return cls(
            api_key=config.hf_api_key,
            api_base=config.hf_api_base,
            model=config.hf_model,
            timeout=config.generation_timeout,
            transport=transport,
        )

    async def generate(self, content: str, task: GenerationTask) -> str:
        spec = get_task_spec(task)
        payload = {
            "inputs": build_prompt(content, task),
            "parameters": {
                "max_new_tokens": spec.max_new_tokens,
                "return_full_text": False,
            },
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.endpoint, json=payload, headers=headers)
        except httpx.TimeoutException as exc:
            logger.warning("Generation of %s with %s timed out after %ss", task.value, self.model, self.timeout)
            raise GenerationTimeout() from exc
        except httpx.HTTPError as exc:
            logger.warning("Generation of %s with %s failed in transport: %s", task.value, self.model, exc)
            raise UnknownGenerationError(task.value) from exc

        if response.is_error:
            error = _classify_failure(response, task)
            logger.warning(
                "Generation of %s with %s failed (%s, HTTP %s): %s",
                task.value, self.model, error.kind, response.status_code, response.text[:500],
            )
            raise error

        try:
            data = response.json()
        except ValueError as exc:
            logger.warning("Generation of %s returned a non-JSON body", task.value)
            raise UnknownGenerationError(task.value) from exc

        text = _first_candidate(data)
        if text is None:
            # Some deployments answer 200 with an error object instead of candidates.
            error = _classify_failure(response, task)
            logger.warning("Generation of %s returned no candidates (%s): %r", task.value, error.kind, data)
            raise error

        return clean_generated_text(text)
