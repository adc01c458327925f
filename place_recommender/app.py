from __future__ import annotations

import os
from urllib.parse import quote

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.concurrency import run_in_threadpool
from starlette.middleware.sessions import SessionMiddleware

from .errors import RecommenderError, ValidationError
from .llm.groq_client import (
    analyze_user_preferences,
    answer_place_question,
    get_dynamic_purposes,
    get_place_details,
    get_recommendations,
    verify_location,
)
from .recommendations.export import export_filename, render_markdown
from .recommendations.models import (
    DestinationBody,
    PlaceDetails,
    PlaceDetailsBody,
    PlaceQuestionBody,
    ResultsResponse,
    SessionSummary,
    SubmitBody,
    UserProfile,
)
from .recommendations.purposes import PLACE_PURPOSES, suggest_purposes
from .recommendations.session import RecommendationSession
from .recommendations.session_store import get_session, new_session_id

app = FastAPI(title="Saved Places Recommender API", version="1.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "place-recommender-secret-change-in-production"),
)


@app.exception_handler(RecommenderError)
async def recommender_error_handler(request: Request, exc: RecommenderError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": type(exc).__name__,
            "message": exc.message,
            "field": getattr(exc, "field", None),
        },
    )


def current_session(request: Request) -> RecommendationSession:
    """Resolve the caller's recommendation session, issuing an id on first visit."""
    session_id = request.session.get("sid")
    if not session_id:
        session_id = new_session_id()
        request.session["sid"] = session_id
    return get_session(session_id)


def _results(session: RecommendationSession, added: int) -> ResultsResponse:
    request = session.last_request
    return ResultsResponse(
        destination=request.destination if request else "",
        purposes=request.purposes if request else [],
        places=session.results,
        added=added,
    )


def _current_destination(session: RecommendationSession) -> str:
    if session.last_request is not None:
        return session.last_request.destination
    if session.verified_destination:
        return session.verified_destination
    raise ValidationError("Enter a valid destination and verify it first.", field="destination")


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/purposes")
def purposes(
    q: str = "",
    selected: list[str] = Query(default=[]),
    session: RecommendationSession = Depends(current_session),
) -> dict:
    return {
        "catalogue": list(PLACE_PURPOSES),
        "dynamic": session.suggested_purposes,
        "suggestions": suggest_purposes(q, session.suggested_purposes, selected),
    }


# ── Session ──────────────────────────────────────────────────────────────


@app.get("/session", response_model=SessionSummary)
def session_summary(session: RecommendationSession = Depends(current_session)) -> SessionSummary:
    return session.summary()


@app.post("/session/reset", response_model=SessionSummary)
def reset_session(session: RecommendationSession = Depends(current_session)) -> SessionSummary:
    session.reset()
    return session.summary()


# ── Profile ──────────────────────────────────────────────────────────────


@app.post("/profile/export", response_model=UserProfile | None)
async def upload_export(
    request: Request,
    session: RecommendationSession = Depends(current_session),
) -> UserProfile | None:
    document = await request.body()
    return await run_in_threadpool(session.build_profile, document, analyze_user_preferences)


@app.post("/profile/skip", response_model=UserProfile)
def skip_profiling(session: RecommendationSession = Depends(current_session)) -> UserProfile:
    return session.skip_profiling()


# ── Destination ──────────────────────────────────────────────────────────


@app.post("/destination", response_model=SessionSummary)
def edit_destination(
    body: DestinationBody,
    session: RecommendationSession = Depends(current_session),
) -> SessionSummary:
    session.edit_destination(body.destination)
    return session.summary()


@app.post("/destination/verify", response_model=SessionSummary)
def verify_destination(session: RecommendationSession = Depends(current_session)) -> SessionSummary:
    session.verify_destination(verify_location, get_dynamic_purposes)
    return session.summary()


# ── Recommendations ──────────────────────────────────────────────────────


@app.post("/recommendations", response_model=ResultsResponse)
def submit_recommendations(
    body: SubmitBody,
    session: RecommendationSession = Depends(current_session),
) -> ResultsResponse:
    places = session.submit(
        body.purposes,
        get_recommendations,
        include_reviews=body.include_reviews,
        additional_info=body.additional_info,
        custom_purpose=body.custom_purpose,
    )
    return _results(session, len(places))


@app.post("/recommendations/more", response_model=ResultsResponse)
def more_recommendations(session: RecommendationSession = Depends(current_session)) -> ResultsResponse:
    added = session.load_more(get_recommendations)
    return _results(session, len(added))


@app.get("/recommendations/export")
def export_recommendations(session: RecommendationSession = Depends(current_session)) -> PlainTextResponse:
    request = session.last_request
    if request is None:
        raise ValidationError("Submit a recommendation request first.", field="request")
    content = render_markdown(request.destination, request.purposes, session.results)
    filename = quote(export_filename(request.destination))
    return PlainTextResponse(
        content,
        media_type="text/markdown; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{filename}"},
    )


# ── Place extras ─────────────────────────────────────────────────────────


@app.post("/places/details", response_model=PlaceDetails)
def place_details(
    body: PlaceDetailsBody,
    session: RecommendationSession = Depends(current_session),
) -> PlaceDetails:
    return get_place_details(body.place_name, _current_destination(session))


@app.post("/places/question")
def place_question(
    body: PlaceQuestionBody,
    session: RecommendationSession = Depends(current_session),
) -> dict[str, str]:
    answer = answer_place_question(body.place_name, _current_destination(session), body.question)
    return {"answer": answer}
