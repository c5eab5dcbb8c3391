"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Build the place-extraction prompt from a task description.
- Call Groq LLM to name the most likely place within the metro area.
- Graceful fallback to "no location" when the LLM is unavailable.
"""
