"""
Live condition providers.

Responsibilities:
- Manage weather and routing API configuration and credentials.
- Fetch current weather for a place (OpenWeatherMap).
- Fetch current route durations to a place (Google Directions).
- Report an unavailable provider as ``None`` instead of raising.
"""
