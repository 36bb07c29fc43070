"""
LifeGuideOrchestrator - Core business logic layer for SG Life Guide.

Key guarantees:
- CLI/API layers stay thin (no provider imports there)
- Retrieval, cultural enhancement and preference extraction only degrade,
  they never fail a request
- The gateway status is known before a GuideReply is returned, so callers
  either get an error or a stream, never both
"""

import asyncio
from datetime import datetime

from api.gateway_client import ChatGatewayClient
from api.sealion_client import SeaLionClient
from config.config import Config
from models.conversation import SanitizedRequest
from models.errors import ConfigurationError
from models.guide_reply import GuideReply
from models.preferences import PreferenceSignals
from orchestrator.preference_extractor import HeuristicPreferenceExtractor, PreferenceExtractor
from orchestrator.prompts import compose_system_prompt
from tools.web import MultiTierRetriever, RetrievedContext, build_retrieved_context, create_retriever_from_env
from utils.logger import get_logger

logger = get_logger(__name__)


class LifeGuideOrchestrator:
    def __init__(
        self,
        retriever: MultiTierRetriever,
        enhancer: SeaLionClient,
        gateway: ChatGatewayClient,
        extractor: PreferenceExtractor | None = None,
    ):
        self.retriever = retriever
        self.enhancer = enhancer
        self.gateway = gateway
        self.extractor = extractor or HeuristicPreferenceExtractor()

    @classmethod
    def from_config(cls, config: Config | None = None) -> "LifeGuideOrchestrator":
        """Wire retriever, enhancer and gateway from environment configuration."""
        config = config or Config()
        return cls(
            retriever=create_retriever_from_env(config),
            enhancer=SeaLionClient(
                config.SEALION_API_KEY,
                base_url=config.SEALION_BASE_URL,
                model_name=config.SEALION_MODEL,
                timeout_s=config.SEALION_TIMEOUT_S,
            ),
            gateway=ChatGatewayClient(
                config.LOVABLE_API_KEY,
                url=config.GATEWAY_URL,
                model_name=config.GATEWAY_MODEL,
                timeout_s=config.GATEWAY_TIMEOUT_S,
            ),
        )

    async def answer(self, request: SanitizedRequest, now: datetime | None = None) -> GuideReply:
        """
        Compose one grounded answer.

        Args:
            request: Validated request
            now: Clock override for the weekday hint (tests)

        Returns:
            GuideReply with the gateway stream and the preference signals

        Raises:
            ConfigurationError: gateway key missing (checked before any upstream call)
            GatewayError: gateway rejected the completion
        """
        if not self.gateway.configured:
            raise ConfigurationError("LOVABLE_API_KEY is not configured")

        signals = self._preference_signals(request)
        if signals.missing_preference:
            logger.info(
                "Detected missing preference",
                extra={"extra_fields": {"category": signals.missing_preference}},
            )
        if signals.inferred_preferences:
            logger.info(
                "Inferred preferences from message",
                extra={"extra_fields": {"keys": [p.key for p in signals.inferred_preferences]}},
            )

        retrieved, cultural_context = await asyncio.gather(
            self._retrieve(request.message),
            self._enhance(request.message, request.user_context),
        )

        system_prompt = compose_system_prompt(
            retrieved_context=build_retrieved_context(retrieved),
            user_context=request.user_context,
            cultural_context=cultural_context,
            preferences_context=request.preferences_context,
            now=now,
        )

        messages = [{"role": "system", "content": system_prompt}]
        messages.extend(turn.to_dict() for turn in request.history)
        messages.append({"role": "user", "content": request.message})

        logger.info(
            "Composed prompt",
            extra={
                "extra_fields": {
                    "history_turns": len(request.history),
                    "has_user_context": bool(request.user_context),
                    "has_cultural_context": bool(cultural_context),
                    "has_preferences": bool(request.preferences_context),
                    **retrieved.counts(),
                }
            },
        )

        stream = await self.gateway.stream_chat(messages)
        return GuideReply(stream=stream, signals=signals)

    def _preference_signals(self, request: SanitizedRequest) -> PreferenceSignals:
        try:
            return PreferenceSignals(
                missing_preference=self.extractor.detect_missing(
                    request.message, request.preferences_context
                ),
                inferred_preferences=list(self.extractor.infer(request.message)),
            )
        except Exception as e:
            logger.error(f"❌ Preference extraction failed: {e}", exc_info=True)
            return PreferenceSignals()

    async def _retrieve(self, query: str) -> RetrievedContext:
        try:
            return await self.retriever.retrieve_information(query)
        except Exception as e:
            logger.error(f"❌ Retrieval failed: {e}", exc_info=True)
            return RetrievedContext()

    async def _enhance(self, message: str, user_context: str | None) -> str | None:
        try:
            return await self.enhancer.enhance(message, user_context)
        except Exception as e:
            logger.error(f"❌ Cultural enhancement failed: {e}", exc_info=True)
            return None
