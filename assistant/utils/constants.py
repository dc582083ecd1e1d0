"""Shared constants and defaults."""

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}

CHAT_FALLBACK_TEXT = "Sorry, I could not process your request."
SUMMARY_FALLBACK_TEXT = "Unable to generate summary."

SUMMARY_SECTIONS = [
    ("Performance Overview", "A friendly summary of how the session went"),
    ("Key Insights", "Notable patterns, strengths, and areas for improvement"),
    (
        "Psychological Analysis",
        "Observations about trading behavior and mindset based on trade patterns and comments",
    ),
    ("Risk Assessment", "Any concerning patterns like overtrading or revenge trading"),
    ("Personalized Recommendations", "Specific, actionable advice for future sessions"),
]
