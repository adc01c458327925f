from __future__ import annotations

# ---------------------------------------------------------------------------
# Destination verification
# ---------------------------------------------------------------------------

VERIFY_LOCATION_PROMPT = """\
Please verify if the following location exists and provide its full, official \
name and administrative area in {language}.

If the location is valid and unambiguous, return:
{{"isValid": true, "correctedDestination": "Full official name, e.g. Seongsu-dong, Seongdong-gu, Seoul, South Korea"}}

If the location is ambiguous (e.g. "Paris" could be in France or Texas), ask for \
clarification:
{{"isValid": false, "error": "The location is ambiguous. Please be more specific, e.g. 'Paris, France'."}}

If the location does not seem to exist or is not a real place, return:
{{"isValid": false, "error": "This does not seem to be a real place. Please check it again."}}

Write the error message in {language}. Return ONLY the raw JSON object."""


# ---------------------------------------------------------------------------
# Profiling
# ---------------------------------------------------------------------------

PROFILE_PROMPT = """\
Based on the following list of saved map places, analyze the user's travel \
preferences.

Return ONLY a JSON object with:
1. "description": a detailed persona analysis (2-3 sentences) describing the \
user's travel style in a friendly, narrative tone.
2. "tags": an array of relevant interest tags (e.g. "Food hunting", \
"Historic sites", "Nature lover", "Art & culture").

All text must be in {language}."""


# ---------------------------------------------------------------------------
# Recommendation fragments
# ---------------------------------------------------------------------------

LOOKUP_INSTRUCTION = (
    "3. **Ensure Accuracy**: Use map lookups to find REAL, verifiable places and "
    "their correct Google Maps URLs, including their precise latitude and longitude. "
    "DO NOT invent places or URLs."
)

SEARCH_INSTRUCTION = (
    "4. Use web search for up-to-date, trending, or event-based information as requested."
)

REVIEW_INSTRUCTION = (
    "5. For each place, use web search to find a recent, high-quality blog review "
    "and provide its URL in `reviewUrl`."
)

REVIEW_JSON_FIELD = "- `reviewUrl`: A valid URL to a recent blog post reviewing the place."

ANONYMOUS_PROFILE = """\
**USER PROFILE:**
- The user has not provided a personal preference profile. You MUST rely solely \
on the **REQUEST DETAILS** to generate recommendations."""

PROFILE_TEMPLATE = """\
**USER PROFILE:**
- **Preference Tags**: {tags}
- **Profile Description**: {description}"""

ANONYMOUS_REFINEMENT = (
    "Since there is no user profile, select the most popular and highly-rated "
    "places that match the purpose."
)

PROFILE_REFINEMENT = (
    "From the places that match the purpose, use the user's **Preference Tags** and "
    "**Profile Description** to select the most suitable and interesting ones."
)

EXCLUSION_TEMPLATE = """\
**IMPORTANT EXCLUSION LIST**:
The following places have already been suggested. Do not recommend them again:
{names}"""


# ---------------------------------------------------------------------------
# Recommendation
# ---------------------------------------------------------------------------

RECOMMENDATION_PROMPT = """\
You are an expert place recommender AI. A user with the following profile is \
looking for places to visit.

---
{profile}
---

**REQUEST DETAILS:**
- **Location**: {destination}
- **Main Purposes**: {purposes}
- **Include Reviews**: {include_reviews}
- **Additional Notes**: "{notes}"
---
{exclusion}
---

**YOUR TASK (IN {language_upper}):**
Generate a JSON object for 3-5 specific places in '{destination}'.

**CRITICAL RECOMMENDATION LOGIC:**
1. **Prioritize Purpose**: The recommendations **MUST** strictly match the \
user's requested **Main Purposes**. This is the most important rule.
2. **Refine Selection**: {refinement}
{lookup}
{search}
{review}

**JSON OUTPUT STRUCTURE:**
Create a single JSON object with a 'places' array. For each place, provide:
- `placeName`: The official name of the place.
- `description`: A short, compelling sentence (max 25 words) in a natural and \
friendly tone, explaining why this place is a great fit for the user's request.
- `googleMapsUrl`: A valid Google Maps URL.
- `latitude`: The geographical latitude as a number (e.g. 37.5665).
- `longitude`: The geographical longitude as a number (e.g. 126.9780).
- `distance`: The approximate distance (e.g. "about 2.5km") from the original \
**Location** ('{destination}') to this place. This is an estimation.
{review_field}
- `highlights`: An array of 3-5 short, impactful keywords summarizing the place's features.

**FINAL INSTRUCTIONS:**
- Your entire response must be ONLY the raw JSON object. Do not use markdown formatting.
- All text content must be in {language}."""


# ---------------------------------------------------------------------------
# Place extras
# ---------------------------------------------------------------------------

DYNAMIC_PURPOSES_PROMPT = """\
For the place "{destination}", generate 4-5 varied and specific purpose \
keywords in {language} for visitors, as a JSON array of strings. The keywords \
should describe activities, kinds of places or experiences someone visiting \
the area would look for.

**Very important: exclude keywords unrelated to visitor activities, such as \
job openings, visit reservations, business meetings or internal company events.**

Focus on topics such as dining, sightseeing, leisure, nature, shopping and culture.

Good examples: "Ocean-view cafe", "Oreum trekking", "Black pork restaurants", \
"Beach walk", "Traditional market tour".
Bad examples: "Samsung Electronics recruiting", "Company visit booking".

Return ONLY the raw JSON array."""

PLACE_DETAILS_PROMPT = """\
You are a helpful local guide AI. Provide objective, factual information for \
the place "{place_name}" in "{destination}".

Return a single JSON object with the following structure. All text must be in \
{language}. Do not include subjective information like review summaries or tips.
- "openingHours": Business hours for today (e.g. "10:00 AM - 9:00 PM"). If not \
available, say that no information is available.
- "popularAmenities": An array of 2-4 key amenities or features (e.g. "Parking \
available", "Pet friendly", "Free Wi-Fi"). Empty array if not applicable.
- "popularDishes": If it is a restaurant or cafe, an array of 2-4 popular menu \
items. Empty array if not applicable.

Respond ONLY with the raw JSON object."""

PLACE_QUESTION_PROMPT = """\
Regarding the place "{place_name}" in "{destination}", answer the following \
user question in {language}. Keep the answer concise (1-2 sentences) and helpful.

Question: "{question}\""""
