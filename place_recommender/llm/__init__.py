"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Build prompts for profiling, destination checks and recommendations.
- Isolate JSON payloads from free-form model output.
- Translate upstream failures into the service's error types.
"""
