from __future__ import annotations

import logging
from typing import Sequence

from groq import Groq
from pydantic import ValidationError as PydanticValidationError

from ..errors import (
    LLMUnavailableError,
    MalformedResponseError,
    ProfilingError,
    VerificationError,
)
from ..export_ingestion.config import DEFAULT_EXPORT_CONFIG
from ..recommendations.models import (
    PlaceDetails,
    Recommendation,
    UserProfile,
    VerificationResult,
)
from ..recommendations.orchestrator import RequestParameters
from .config import DEFAULT_LLM_CONFIG, LLMConfig
from .parsing import extract_json_payload
from .prompts import (
    DYNAMIC_PURPOSES_PROMPT,
    PLACE_DETAILS_PROMPT,
    PLACE_QUESTION_PROMPT,
    PROFILE_PROMPT,
    RECOMMENDATION_PROMPT,
    VERIFY_LOCATION_PROMPT,
)

logger = logging.getLogger(__name__)

INVALID_LOCATION_MESSAGE = "The location could not be found. Please try again."
VERIFY_FAILED_MESSAGE = "An error occurred while checking the location."
QUESTION_FALLBACK = "Sorry, we could not get that information."


def _ensure_enabled(config: LLMConfig) -> None:
    if not config.enabled or not config.api_key:
        raise LLMUnavailableError()


def _complete(
    messages: list[dict[str, str]],
    config: LLMConfig,
    model: str | None = None,
    json_mode: bool = False,
    max_tokens: int | None = None,
    temperature: float = 0.3,
) -> str:
    client = Groq(api_key=config.api_key, timeout=config.timeout)
    kwargs: dict = {
        "model": model or config.model,
        "messages": messages,
        "max_tokens": max_tokens or config.max_tokens,
        "temperature": temperature,
    }
    if json_mode:
        kwargs["response_format"] = {"type": "json_object"}
    response = client.chat.completions.create(**kwargs)
    return response.choices[0].message.content or ""


def _build_recommendation_prompt(params: RequestParameters, language: str) -> str:
    request = params.request
    ins = params.instructions
    return RECOMMENDATION_PROMPT.format(
        profile=ins.profile,
        destination=request.destination,
        purposes=", ".join(request.purposes),
        include_reviews="Yes" if request.include_reviews else "No",
        notes=request.additional_info or "None",
        exclusion=ins.exclusion,
        refinement=ins.refinement,
        lookup=ins.lookup,
        search=ins.search,
        review=ins.review,
        review_field=ins.review_field,
        language=language,
        language_upper=language.upper(),
    )


# ---------------------------------------------------------------------------
# Destination verification
# ---------------------------------------------------------------------------


def verify_location(
    destination: str,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> VerificationResult:
    """
    Check that ``destination`` names a real, unambiguous place.

    Invalid places come back as ``valid=False`` with the model's
    explanation; an unusable upstream reply raises VerificationError.
    """
    _ensure_enabled(config)

    try:
        content = _complete(
            [
                {"role": "system", "content": VERIFY_LOCATION_PROMPT.format(language=config.language)},
                {"role": "user", "content": f'The location is: "{destination}"'},
            ],
            config,
            json_mode=True,
            max_tokens=256,
            temperature=0.0,
        )
        parsed = extract_json_payload(content)
    except Exception as exc:
        logger.warning("Location verification failed for %r", destination, exc_info=True)
        raise VerificationError(VERIFY_FAILED_MESSAGE) from exc

    if parsed.get("isValid") is True:
        corrected = parsed.get("correctedDestination")
        if not isinstance(corrected, str) or not corrected.strip():
            corrected = destination
        return VerificationResult(valid=True, corrected_name=corrected.strip())

    error = parsed.get("error")
    return VerificationResult(
        valid=False,
        corrected_name=destination,
        error=error if isinstance(error, str) and error.strip() else INVALID_LOCATION_MESSAGE,
    )


# ---------------------------------------------------------------------------
# Profiling
# ---------------------------------------------------------------------------


def analyze_user_preferences(
    place_names: Sequence[str],
    config: LLMConfig = DEFAULT_LLM_CONFIG,
    max_names: int = DEFAULT_EXPORT_CONFIG.max_profile_names,
) -> UserProfile:
    """Summarize saved places into preference tags and a persona description."""
    _ensure_enabled(config)

    try:
        content = _complete(
            [
                {"role": "system", "content": PROFILE_PROMPT.format(language=config.language)},
                {"role": "user", "content": "Place list:\n" + ", ".join(place_names[:max_names])},
            ],
            config,
            json_mode=True,
            temperature=0.5,
        )
        profile = UserProfile.model_validate(extract_json_payload(content))
    except Exception as exc:
        logger.warning("Preference analysis failed", exc_info=True)
        raise ProfilingError() from exc

    if not profile.tags and not profile.description.strip():
        raise ProfilingError()
    return profile


# ---------------------------------------------------------------------------
# Recommendations
# ---------------------------------------------------------------------------


def get_recommendations(
    params: RequestParameters,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> Recommendation:
    """
    Run one completion request and parse its places.

    Web search capable requests go to ``config.search_model``. The reply
    may wrap its JSON in prose or code fences.
    """
    _ensure_enabled(config)

    model = config.search_model if params.uses_web_search else config.model
    prompt = _build_recommendation_prompt(params, config.language)

    try:
        content = _complete([{"role": "user", "content": prompt}], config, model=model)
    except Exception as exc:
        logger.warning("Recommendation call to %s failed", model, exc_info=True)
        raise MalformedResponseError() from exc

    try:
        return Recommendation.model_validate(extract_json_payload(content))
    except (MalformedResponseError, PydanticValidationError) as exc:
        logger.warning("Failed to parse recommendation JSON. Raw response was: %s", content)
        raise MalformedResponseError() from exc


# ---------------------------------------------------------------------------
# Place extras
# ---------------------------------------------------------------------------


def get_dynamic_purposes(
    destination: str,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> list[str]:
    """Suggest visit purposes for a destination. Returns [] on any failure."""
    if not destination.strip():
        return []
    if not config.enabled or not config.api_key:
        return []

    try:
        content = _complete(
            [{
                "role": "user",
                "content": DYNAMIC_PURPOSES_PROMPT.format(
                    destination=destination, language=config.language,
                ),
            }],
            config,
            model=config.fast_model,
            max_tokens=256,
            temperature=0.7,
        )
        parsed = extract_json_payload(content, expect=list)
    except Exception:
        logger.warning("Dynamic purpose generation failed for %r", destination, exc_info=True)
        return []

    if all(isinstance(item, str) for item in parsed):
        return parsed
    return []


def get_place_details(
    place_name: str,
    destination: str,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> PlaceDetails:
    _ensure_enabled(config)

    try:
        content = _complete(
            [{
                "role": "user",
                "content": PLACE_DETAILS_PROMPT.format(
                    place_name=place_name, destination=destination, language=config.language,
                ),
            }],
            config,
            json_mode=True,
            max_tokens=512,
        )
        return PlaceDetails.model_validate(extract_json_payload(content))
    except Exception as exc:
        logger.warning("Place details failed for %r", place_name, exc_info=True)
        raise MalformedResponseError("Failed to get details for this place.") from exc


def answer_place_question(
    place_name: str,
    destination: str,
    question: str,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> str:
    if not config.enabled or not config.api_key:
        return QUESTION_FALLBACK

    try:
        content = _complete(
            [{
                "role": "user",
                "content": PLACE_QUESTION_PROMPT.format(
                    place_name=place_name,
                    destination=destination,
                    question=question,
                    language=config.language,
                ),
            }],
            config,
            max_tokens=256,
        )
    except Exception:
        logger.warning("Place question failed for %r", place_name, exc_info=True)
        return QUESTION_FALLBACK

    return content.strip() or QUESTION_FALLBACK
