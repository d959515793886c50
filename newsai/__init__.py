"""
NewsAI

A news reader that fetches articles from NewsAPI, ranks them locally with
TF-IDF relevance, and summarizes and discusses them with a local LLM.
"""

__version__ = "0.1.0"
