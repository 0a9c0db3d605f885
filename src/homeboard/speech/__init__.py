"""Text-to-speech client with static fallback clips."""
