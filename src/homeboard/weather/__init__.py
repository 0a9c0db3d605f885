"""
Weather subsystem.

Components:
- client.py: OpenWeatherMap client (WeatherReport, WeatherError)
- poller.py: fixed-interval poller, WeatherBoard, background thread runner
"""
