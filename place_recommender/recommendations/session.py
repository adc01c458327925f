from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Sequence

from ..errors import SessionBusyError, ValidationError, VerificationError
from ..export_ingestion.config import DEFAULT_EXPORT_CONFIG, ExportConfig
from ..export_ingestion.loader import load_place_names
from .models import (
    Recommendation,
    RecommendationRequest,
    RecommendedPlace,
    SessionPhase,
    SessionSummary,
    UserProfile,
    VerificationResult,
)
from .orchestrator import (
    RequestParameters,
    build_request_parameters,
    exclusion_list,
    merge_results,
)
from .purposes import collect_purposes

logger = logging.getLogger(__name__)

Analyzer = Callable[[Sequence[str]], UserProfile]
Verifier = Callable[[str], VerificationResult]
Suggester = Callable[[str], list[str]]
Completer = Callable[[RequestParameters], Recommendation]

DEFAULT_PROFILE_DESCRIPTION = (
    "No personal preferences were provided. "
    "Recommendations follow the requested purposes."
)
MIN_DESTINATION_LENGTH = 2


class RecommendationSession:
    """
    State of one user's recommendation session.

    Moves from ``no_request`` to ``requested`` on the first successful
    submit and to ``accumulating`` on each successful "load more". A failed
    call leaves profile, request and results exactly as they were.
    """

    def __init__(self, export_config: ExportConfig = DEFAULT_EXPORT_CONFIG) -> None:
        self._export_config = export_config
        self._busy = threading.Lock()
        self._generation = 0
        self._clear()

    def _clear(self) -> None:
        self.profile: UserProfile | None = None
        self.destination_input = ""
        self.verified_destination: str | None = None
        self.verification_error: str | None = None
        self.suggested_purposes: list[str] = []
        self.last_request: RecommendationRequest | None = None
        self.results: list[RecommendedPlace] = []
        self.phase = SessionPhase.no_request

    @property
    def is_busy(self) -> bool:
        return self._busy.locked()

    @contextmanager
    def _busy_guard(self) -> Iterator[None]:
        if not self._busy.acquire(blocking=False):
            raise SessionBusyError()
        try:
            yield
        finally:
            self._busy.release()

    # ── Profile ──────────────────────────────────────────────────────────

    def build_profile(self, document: bytes | str | Any, analyzer: Analyzer) -> UserProfile | None:
        """Profile the export's usable place names. Returns None if reset meanwhile."""
        names = load_place_names(document, self._export_config)
        generation = self._generation
        profile = analyzer(names[: self._export_config.max_profile_names])
        if generation != self._generation:
            logger.info("Session was reset during profiling; discarding profile")
            return None
        self.profile = profile
        return profile

    def set_profile(self, profile: UserProfile) -> None:
        self.profile = profile

    def skip_profiling(self) -> UserProfile:
        self.profile = UserProfile(tags=[], description=DEFAULT_PROFILE_DESCRIPTION)
        return self.profile

    # ── Destination ──────────────────────────────────────────────────────

    def edit_destination(self, text: str) -> None:
        self.destination_input = text
        self.verified_destination = None
        self.verification_error = None
        self.suggested_purposes = []

    def verify_destination(
        self,
        verifier: Verifier,
        suggester: Suggester | None = None,
    ) -> str | None:
        """
        Verify the current destination text.

        Returns the corrected destination, or None when the text was edited
        while the check was running and the outcome no longer applies.
        """
        text = self.destination_input
        if len(text.strip()) < MIN_DESTINATION_LENGTH:
            raise ValidationError("Enter a destination to verify.", field="destination")
        if self.verified_destination is not None and self.verified_destination == text:
            return self.verified_destination

        try:
            result = verifier(text)
        except VerificationError as exc:
            if self.destination_input == text:
                self.verification_error = exc.message
            raise

        if self.destination_input != text:
            logger.info("Discarding stale verification for %r", text)
            return None

        if not result.valid:
            error = VerificationError(result.error)
            self.verification_error = error.message
            raise error

        self.destination_input = result.corrected_name
        self.verified_destination = result.corrected_name
        self.verification_error = None
        self.suggested_purposes = suggester(result.corrected_name) if suggester else []
        return self.verified_destination

    # ── Recommendations ──────────────────────────────────────────────────

    def submit(
        self,
        purposes: Sequence[str],
        completer: Completer,
        include_reviews: bool = False,
        additional_info: str = "",
        custom_purpose: str = "",
    ) -> list[RecommendedPlace]:
        """Start a new result set for a fresh request."""
        with self._busy_guard():
            if not self.verified_destination or self.verified_destination != self.destination_input:
                raise ValidationError(
                    self.verification_error or "Enter a valid destination and verify it first.",
                    field="destination",
                )
            if self.profile is None:
                raise ValidationError(
                    "Upload your saved places or skip profiling first.", field="profile",
                )
            final_purposes = collect_purposes(custom_purpose, purposes)
            if not final_purposes:
                raise ValidationError(
                    "Select or enter at least one purpose.", field="purposes",
                )

            request = RecommendationRequest(
                destination=self.verified_destination,
                purposes=final_purposes,
                include_reviews=include_reviews,
                additional_info=additional_info,
            )
            generation = self._generation
            page = completer(build_request_parameters(self.profile, request))
            if generation != self._generation:
                logger.info("Session was reset during the request; dropping results")
                return []

            self.last_request = request
            self.results = merge_results([], page.places)
            self.phase = SessionPhase.requested
            return list(self.results)

    def load_more(self, completer: Completer) -> list[RecommendedPlace]:
        """Fetch another page for the last request. Returns only the added places."""
        with self._busy_guard():
            if self.last_request is None or self.profile is None:
                raise ValidationError(
                    "Submit a recommendation request first.", field="request",
                )

            params = build_request_parameters(
                self.profile, self.last_request, exclusion_list(self.results),
            )
            generation = self._generation
            page = completer(params)
            if generation != self._generation:
                logger.info("Session was reset during the request; dropping results")
                return []

            before = len(self.results)
            self.results = merge_results(self.results, page.places)
            self.phase = SessionPhase.accumulating
            return self.results[before:]

    def reset(self) -> None:
        """Start over: forget profile, destination, request and results."""
        self._generation += 1
        self._clear()

    def summary(self) -> SessionSummary:
        return SessionSummary(
            phase=self.phase,
            is_busy=self.is_busy,
            profile=self.profile,
            destination_input=self.destination_input,
            verified_destination=self.verified_destination,
            suggested_purposes=self.suggested_purposes,
            last_request=self.last_request,
            places=self.results,
        )
