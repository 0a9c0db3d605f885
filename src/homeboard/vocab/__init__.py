"""
Vocabulary subsystem.

Components:
- vocab_models.py: VocabWord and fetch outcomes
- word_history.py: bounded recent-terms log used for duplicate suppression
- generator.py: OpenAI-backed and offline word-pair generators
- controller.py: single-flight fetch controller with bounded duplicate retry
"""
