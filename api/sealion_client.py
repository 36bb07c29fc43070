"""SEA-LION client for Southeast Asian cultural context.

SEA-LION's API is OpenAI-compatible, so the OpenAI SDK is used with a custom
base URL.
"""

import httpx
import openai

from orchestrator.prompts import sea_lion_prompt
from utils.logger import get_logger

logger = get_logger(__name__)

SEALION_BASE_URL = "https://api.sea-lion.ai/v1"
SEALION_MODEL = "aisingapore/Llama-SEA-LION-v3.5-8B-R"


class SeaLionClient:
    """
    Cultural-context enhancer backed by SEA-LION.

    Enhancement is best-effort: ``enhance`` returns None instead of raising,
    and an unconfigured client never touches the network.
    """

    def __init__(
        self,
        api_key: str | None,
        *,
        base_url: str = SEALION_BASE_URL,
        model_name: str = SEALION_MODEL,
        timeout_s: float = 20.0,
        max_tokens: int = 500,
        temperature: float = 0.7,
        http_client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the SEA-LION client.

        Args:
            api_key: SEA-LION API key; None or empty disables enhancement
            base_url: OpenAI-compatible API root
            model_name: Model used for the cultural-context completion
            timeout_s: Request timeout in seconds
            max_tokens: Completion budget
            temperature: Sampling temperature
            http_client: Optional httpx client handed to the SDK (tests)
        """
        self.api_key = api_key
        self.model_name = model_name
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.client = None

        if api_key:
            self.client = openai.AsyncOpenAI(
                api_key=api_key,
                base_url=base_url,
                timeout=timeout_s,
                max_retries=0,
                http_client=http_client,
            )

    @property
    def enabled(self) -> bool:
        return self.client is not None

    async def enhance(self, message: str, user_context: str | None = None) -> str | None:
        """
        Ask SEA-LION for cultural and linguistic context on a message.

        Args:
            message: Sanitized user message
            user_context: Optional verified profile text

        Returns:
            Advisory text, or None when disabled, failed or empty
        """
        if not self.enabled:
            logger.info("SEALION_API_KEY not configured, skipping SEA-LION enhancement")
            return None

        logger.info("Calling SEA-LION for cultural context enhancement")

        try:
            response = await self.client.chat.completions.create(
                model=self.model_name,
                messages=[{"role": "user", "content": sea_lion_prompt(message, user_context)}],
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except openai.APIStatusError as e:
            logger.warning(
                "SEA-LION API error",
                extra={"extra_fields": {"status": e.status_code, "error": str(e)[:500]}},
            )
            return None
        except openai.OpenAIError as e:
            logger.warning(
                "SEA-LION enhancement failed",
                extra={"extra_fields": {"error": str(e), "error_type": type(e).__name__}},
            )
            return None

        choices = getattr(response, "choices", None) or []
        content = choices[0].message.content if choices and choices[0].message else None
        if not content:
            return None

        logger.info(
            "SEA-LION cultural context retrieved",
            extra={"extra_fields": {"length": len(content)}},
        )
        return content
